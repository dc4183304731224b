from abc import ABC, abstractmethod
from typing import Any

from dentrecon.domain.entities.report_payload import ReportVersion


class ReportRepoPort(ABC):
    """Port for append-only report version storage."""

    @abstractmethod
    async def append(
        self,
        case_id: str,
        payload: dict[str, Any],
        narrative: str = "",
        parent_version: int | None = None,
    ) -> ReportVersion:
        """Store a new version numbered one past the latest and return it."""

    @abstractmethod
    async def load(self, case_id: str, version: int) -> ReportVersion | None:
        """Load one stored version."""

    @abstractmethod
    async def latest(self, case_id: str) -> ReportVersion | None:
        """Load the highest stored version."""

    @abstractmethod
    async def list_versions(self, case_id: str) -> list[int]:
        """Stored version numbers, ascending."""
