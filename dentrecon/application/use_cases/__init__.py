from dentrecon.application.use_cases.build_draft_report import BuildDraftReport
from dentrecon.application.use_cases.build_rebuttal_report import BuildRebuttalReport
from dentrecon.application.use_cases.compare_report_versions import CompareReportVersions

__all__ = ["BuildDraftReport", "BuildRebuttalReport", "CompareReportVersions"]
