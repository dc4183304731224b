from collections.abc import Iterable

from loguru import logger

from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.services.coercion import unique
from dentrecon.domain.value_objects.engine_limits import (
    DEFAULT_LIMITS,
    EngineLimits,
    TruncationPolicy,
)


class FindingMerger:
    """Collapses findings that share a tooth into one finding per tooth.

    Within a tooth group, in input order:

    - notes are unioned, first-seen order kept
    - overlays are concatenated, then capped
    - severity is the most severe of the group
    - confidence, image_index and image_id come from the record with the
      strictly greatest confidence; on ties the earlier record wins
    """

    def __init__(self, limits: EngineLimits | None = None) -> None:
        self.limits = limits or DEFAULT_LIMITS

    def merge(self, findings: Iterable[Finding]) -> list[Finding]:
        groups: dict[int, Finding] = {}
        for finding in findings:
            current = groups.get(finding.tooth_fdi)
            groups[finding.tooth_fdi] = (
                self._normalize(finding) if current is None else self.combine(current, finding)
            )
        return truncate_findings(list(groups.values()), self.limits)

    def combine(self, current: Finding, incoming: Finding) -> Finding:
        """Fold ``incoming`` into ``current``; both must share a tooth."""
        if incoming.tooth_fdi != current.tooth_fdi:
            raise ValueError(
                f"Cannot combine findings for teeth {current.tooth_fdi} and {incoming.tooth_fdi}"
            )
        source = incoming if incoming.confidence > current.confidence else current
        return current.model_copy(
            update={
                "notes": tuple(unique([*current.notes, *incoming.notes])),
                "overlays": (current.overlays + incoming.overlays)[: self.limits.max_overlays],
                "severity": max(current.severity, incoming.severity),
                "confidence": source.confidence,
                "image_index": source.image_index,
                "image_id": source.image_id,
            }
        )

    def _normalize(self, finding: Finding) -> Finding:
        notes = tuple(unique(finding.notes))
        overlays = finding.overlays[: self.limits.max_overlays]
        if notes == finding.notes and overlays == finding.overlays:
            return finding
        return finding.model_copy(update={"notes": notes, "overlays": overlays})


def truncate_findings(findings: list[Finding], limits: EngineLimits) -> list[Finding]:
    """Sort ascending by tooth and apply the finding cap per the truncation policy."""
    ordered = sorted(findings, key=lambda f: f.tooth_fdi)
    if len(ordered) <= limits.max_findings:
        return ordered

    if limits.truncation == TruncationPolicy.CONFIDENCE:
        # stable sort: equal confidence keeps ascending tooth order
        kept = sorted(ordered, key=lambda f: -f.confidence)[: limits.max_findings]
        result = sorted(kept, key=lambda f: f.tooth_fdi)
    else:
        result = ordered[: limits.max_findings]

    logger.debug(
        "Truncated findings from {} to {} ({})",
        len(ordered),
        limits.max_findings,
        limits.truncation.value,
    )
    return result
