from dentrecon.infrastructure.persistence.json_report_repo import JsonReportRepo

__all__ = ["JsonReportRepo"]
