from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from loguru import logger

from dentrecon.domain.entities.report_payload import ReportVersion
from dentrecon.domain.errors import ReconciliationError
from dentrecon.domain.ports.report_repo_port import ReportRepoPort
from dentrecon.infrastructure.persistence._paths import ReportPathBuilder
from dentrecon.infrastructure.persistence.async_file_lock import async_file_lock
from dentrecon.infrastructure.persistence.atomic_io import read_json, write_new_file


class JsonReportRepo(ReportRepoPort):
    """File-based, append-only implementation of ReportRepoPort.

    Each version is one JSON file. Version numbers are allocated under a
    per-case file lock, and a version file is never rewritten once present.
    """

    def __init__(self, state_dir: Path) -> None:
        self.state_dir = state_dir
        self.paths = ReportPathBuilder(state_dir)

    async def append(
        self,
        case_id: str,
        payload: dict[str, Any],
        narrative: str = "",
        parent_version: int | None = None,
    ) -> ReportVersion:
        async with async_file_lock(self.paths.lock_path(case_id)):
            versions = await self.list_versions(case_id)
            next_version = (versions[-1] if versions else 0) + 1
            path = self.paths.version_path(case_id, next_version)

            record = ReportVersion(
                case_id=case_id,
                version=next_version,
                parent_version=parent_version,
                narrative=narrative,
                payload=payload,
                created_at=datetime.now(UTC),
            )
            try:
                await write_new_file(path, record.model_dump_json(indent=2))
            except FileExistsError as e:
                raise ReconciliationError(
                    f"Version {next_version} of case {case_id} already exists"
                ) from e
            logger.info("Saved report v{} for case {}", next_version, case_id)
            return record

    async def load(self, case_id: str, version: int) -> ReportVersion | None:
        data = await read_json(self.paths.version_path(case_id, version))
        if data is None:
            logger.debug("Report not found: case {} v{}", case_id, version)
            return None
        return ReportVersion.model_validate(data)

    async def latest(self, case_id: str) -> ReportVersion | None:
        versions = await self.list_versions(case_id)
        if not versions:
            return None
        return await self.load(case_id, versions[-1])

    async def list_versions(self, case_id: str) -> list[int]:
        case_dir = self.paths.case_dir(case_id)
        if not case_dir.exists():
            return []
        entries = await asyncio.to_thread(lambda: list(case_dir.iterdir()))
        versions = [self.paths.parse_version(p) for p in entries if p.is_file()]
        return sorted(v for v in versions if v is not None)

    async def list_cases(self) -> list[str]:
        reports_dir = self.state_dir / "reports"
        if not reports_dir.exists():
            return []
        return sorted(p.name for p in reports_dir.iterdir() if p.is_dir())

