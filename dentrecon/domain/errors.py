class ReconciliationError(Exception):
    """Base error for failures the engine cannot degrade around."""


class ManifestMissingError(ReconciliationError):
    """The image manifest needed to resolve image references is absent or empty."""


class ReportNotFoundError(ReconciliationError):
    def __init__(self, case_id: str, version: int | None = None) -> None:
        self.case_id = case_id
        self.version = version
        where = f"v{version}" if version is not None else "any version"
        super().__init__(f"No report for case {case_id} ({where})")


class InvalidCaseIdError(ReconciliationError):
    """A case id that cannot be used as a storage key."""
