from dentrecon.domain.ports.report_repo_port import ReportRepoPort

__all__ = ["ReportRepoPort"]
