from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger
from pydantic import ValidationError

from dentrecon.application.use_cases.build_draft_report import as_document
from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.entities.report_payload import ReportPayload, ReportVersion
from dentrecon.domain.errors import ManifestMissingError, ReportNotFoundError
from dentrecon.domain.ports.report_repo_port import ReportRepoPort
from dentrecon.domain.services.change_applicator import FindingChangeApplicator, parse_changes
from dentrecon.domain.services.coercion import clamp_unit, first_string
from dentrecon.domain.services.confidence_aggregator import ConfidenceAggregator
from dentrecon.domain.services.critique import split_critique
from dentrecon.domain.services.finding_canonicalizer import FindingCanonicalizer
from dentrecon.domain.services.finding_merger import FindingMerger
from dentrecon.domain.services.template_normalizer import TemplateNormalizer
from dentrecon.domain.value_objects.engine_limits import DEFAULT_LIMITS, EngineLimits
from dentrecon.domain.value_objects.image_ref import ImageRef
from dentrecon.infrastructure.utils.ai_json import parse_ai_json


class BuildRebuttalReport:
    """Use case for patching a stored report with a generated rebuttal.

    The base version's findings are re-canonicalized against the current
    image manifest, the rebuttal's finding changes are applied in order and
    the result is stored as a new version pointing back at its base.
    """

    def __init__(self, report_repo: ReportRepoPort, limits: EngineLimits | None = None) -> None:
        self.report_repo = report_repo
        self.limits = limits or DEFAULT_LIMITS
        self.canonicalizer = FindingCanonicalizer(self.limits)
        self.merger = FindingMerger(self.limits)
        self.applicator = FindingChangeApplicator(self.limits, self.canonicalizer, self.merger)
        self.aggregator = ConfidenceAggregator()
        self.normalizer = TemplateNormalizer()

    async def execute(
        self,
        case_id: str,
        ai_text: str,
        images: Sequence[ImageRef] = (),
        target_version: int | None = None,
        critique: str | None = None,
    ) -> ReportVersion:
        """Build and store the rebuttal version.

        ``images`` defaults to the manifest stored with the base version.
        ``target_version`` defaults to the latest version.
        """
        base = await self._load_base(case_id, target_version)
        manifest = list(images) or stored_images(base.payload)
        if not manifest:
            raise ManifestMissingError(f"No image manifest for case {case_id}")

        document = as_document(parse_ai_json(ai_text, {}))
        section = document.get("payload")
        revision: dict[str, Any] = section if isinstance(section, dict) else document
        rebuttal = revision.get("rebuttal")
        rebuttal = dict(rebuttal) if isinstance(rebuttal, Mapping) else {}

        changes = parse_changes(rebuttal.get("finding_changes"), self.canonicalizer.converter)
        findings = self.applicator.apply(self._base_findings(base, manifest), changes, manifest)

        confidence = self.aggregator.aggregate(findings, revision.get("confidence_overall"))
        if confidence is None:
            confidence = clamp_unit(base.payload.get("confidence_overall"))

        rebuttal["finding_changes"] = [c.to_wire() for c in changes]
        if critique:
            rebuttal["feedback"] = split_critique(critique)

        payload = ReportPayload(
            **self.normalizer.merge(base.payload, revision),
            confidence_overall=confidence,
            findings=findings,
            images=manifest,
            rebuttal=rebuttal,
            meta={"source": "ai_rebuttal", "base_version": base.version},
        )
        narrative = (
            first_string(document.get("narrative"), rebuttal.get("narrative"), payload.summary)
            or "AI rebuttal"
        )
        saved = await self.report_repo.append(
            case_id, payload.to_wire(), narrative=narrative, parent_version=base.version
        )
        logger.info(
            "Built rebuttal v{} for case {} from v{} ({} changes)",
            saved.version,
            case_id,
            base.version,
            len(changes),
        )
        return saved

    async def _load_base(self, case_id: str, target_version: int | None) -> ReportVersion:
        if target_version is None:
            base = await self.report_repo.latest(case_id)
        else:
            base = await self.report_repo.load(case_id, target_version)
        if base is None:
            raise ReportNotFoundError(case_id, target_version)
        return base

    def _base_findings(self, base: ReportVersion, images: Sequence[ImageRef]) -> list[Finding]:
        rows = base.payload.get("findings")
        records = rows if isinstance(rows, list) else []
        return self.merger.merge(self.canonicalizer.canonicalize_all(records, images))


def stored_images(payload: Mapping[str, Any]) -> list[ImageRef]:
    """Image manifest saved with a report payload; invalid entries are skipped."""
    entries = payload.get("images")
    if not isinstance(entries, list):
        return []
    images: list[ImageRef] = []
    for entry in entries:
        try:
            images.append(ImageRef.model_validate(entry))
        except ValidationError:
            logger.warning("Skipped invalid stored image entry: {!r}", entry)
    return images
