from dentrecon.domain.entities.diff_result import DiffResult, ModifiedNote, NoteLine, NoteState
from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.entities.finding_change import FindingChange
from dentrecon.domain.entities.report_payload import (
    Hygiene,
    Measurements,
    Occlusion,
    ReportPayload,
    ReportVersion,
)

__all__ = [
    "DiffResult",
    "Finding",
    "FindingChange",
    "Hygiene",
    "Measurements",
    "ModifiedNote",
    "NoteLine",
    "NoteState",
    "Occlusion",
    "ReportPayload",
    "ReportVersion",
]
