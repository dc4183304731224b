from collections.abc import Sequence
from typing import Any

from loguru import logger

from dentrecon.domain.entities.report_payload import ReportPayload, ReportVersion
from dentrecon.domain.errors import ManifestMissingError
from dentrecon.domain.ports.report_repo_port import ReportRepoPort
from dentrecon.domain.services.confidence_aggregator import ConfidenceAggregator
from dentrecon.domain.services.finding_canonicalizer import (
    FindingCanonicalizer,
    extract_finding_records,
)
from dentrecon.domain.services.finding_merger import FindingMerger
from dentrecon.domain.services.template_normalizer import TemplateNormalizer
from dentrecon.domain.value_objects.engine_limits import DEFAULT_LIMITS, EngineLimits
from dentrecon.domain.value_objects.image_ref import ImageRef
from dentrecon.infrastructure.utils.ai_json import parse_ai_json


class BuildDraftReport:
    """Use case for turning a raw generated draft into a stored report version."""

    def __init__(self, report_repo: ReportRepoPort, limits: EngineLimits | None = None) -> None:
        self.report_repo = report_repo
        self.limits = limits or DEFAULT_LIMITS
        self.canonicalizer = FindingCanonicalizer(self.limits)
        self.merger = FindingMerger(self.limits)
        self.aggregator = ConfidenceAggregator()
        self.normalizer = TemplateNormalizer()

    def build_payload(self, ai_text: str, images: Sequence[ImageRef]) -> ReportPayload:
        """Canonical draft payload, without storing it."""
        if not images:
            raise ManifestMissingError("A draft needs at least one image")

        document = as_document(parse_ai_json(ai_text, {}))
        raw_findings = extract_finding_records(document)
        findings = self.merger.merge(self.canonicalizer.canonicalize_all(raw_findings, images))
        logger.debug("Draft kept {} of {} finding records", len(findings), len(raw_findings))

        return ReportPayload(
            **self.normalizer.normalize(document),
            confidence_overall=self.aggregator.aggregate(
                findings, document.get("confidence_overall")
            ),
            findings=findings,
            images=list(images),
            meta={"type": "ai_draft"},
        )

    async def execute(
        self, case_id: str, ai_text: str, images: Sequence[ImageRef]
    ) -> ReportVersion:
        payload = self.build_payload(ai_text, images)
        saved = await self.report_repo.append(
            case_id,
            payload.to_wire(),
            narrative=payload.summary or "AI summary",
        )
        logger.info(
            "Built draft v{} for case {} with {} findings",
            saved.version,
            case_id,
            len(payload.findings),
        )
        return saved


def as_document(parsed: Any) -> dict[str, Any]:
    """Generated output as a report document; a bare list is its finding list."""
    if isinstance(parsed, dict):
        return parsed
    if isinstance(parsed, list):
        return {"findings": parsed}
    return {}
