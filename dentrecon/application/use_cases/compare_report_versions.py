from loguru import logger

from dentrecon.domain.entities.diff_result import DiffResult
from dentrecon.domain.errors import ReportNotFoundError
from dentrecon.domain.ports.report_repo_port import ReportRepoPort
from dentrecon.domain.services.version_differ import VersionDiffEngine


class CompareReportVersions:
    def __init__(self, report_repo: ReportRepoPort) -> None:
        self.report_repo = report_repo
        self.differ = VersionDiffEngine()

    async def execute(
        self,
        case_id: str,
        before_version: int | None = None,
        after_version: int | None = None,
    ) -> DiffResult:
        """Diff the findings of two stored versions.

        Defaults compare the latest version against the one before it.
        """
        versions = await self.report_repo.list_versions(case_id)
        if not versions:
            raise ReportNotFoundError(case_id)

        after_v = after_version if after_version is not None else versions[-1]
        if before_version is None:
            earlier = [v for v in versions if v < after_v]
            if not earlier:
                raise ReportNotFoundError(case_id, after_v - 1)
            before_v = earlier[-1]
        else:
            before_v = before_version

        before = await self.report_repo.load(case_id, before_v)
        if before is None:
            raise ReportNotFoundError(case_id, before_v)
        after = await self.report_repo.load(case_id, after_v)
        if after is None:
            raise ReportNotFoundError(case_id, after_v)

        result = self.differ.diff_rows(
            before.payload.get("findings") or [], after.payload.get("findings") or []
        )
        logger.info(
            "Compared case {} v{} -> v{}: +{} -{} ~{}",
            case_id,
            before_v,
            after_v,
            len(result.added),
            len(result.removed),
            len(result.modified),
        )
        return result
