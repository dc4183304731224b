import re
from pathlib import Path

from dentrecon.domain.errors import InvalidCaseIdError

_CASE_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
_VERSION_FILE = re.compile(r"^v(\d+)\.json$")


class ReportPathBuilder:
    """Layout: ``{state_dir}/reports/{case_id}/v{version:04d}.json``."""

    def __init__(self, state_dir: Path) -> None:
        self.state_dir = state_dir

    def case_dir(self, case_id: str) -> Path:
        if not _CASE_ID.match(case_id) or ".." in case_id:
            raise InvalidCaseIdError(f"Invalid case id: {case_id!r}")
        return self.state_dir / "reports" / case_id

    def lock_path(self, case_id: str) -> Path:
        return self.case_dir(case_id) / ".lock"

    def version_path(self, case_id: str, version: int) -> Path:
        return self.case_dir(case_id) / f"v{version:04d}.json"

    def parse_version(self, path: Path) -> int | None:
        match = _VERSION_FILE.match(path.name)
        return int(match.group(1)) if match else None
