from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.entities.finding_change import FindingChange
from dentrecon.domain.services.coercion import first_string
from dentrecon.domain.services.finding_canonicalizer import FindingCanonicalizer
from dentrecon.domain.services.finding_merger import FindingMerger, truncate_findings
from dentrecon.domain.services.tooth_numbering import ToothNumberingConverter
from dentrecon.domain.value_objects.change_operation import ChangeOperation
from dentrecon.domain.value_objects.engine_limits import DEFAULT_LIMITS, EngineLimits
from dentrecon.domain.value_objects.field_aliases import (
    CHANGE_OPERATION_KEYS,
    CHANGE_REPLACEMENT_KEYS,
    CHANGE_TARGET_KEYS,
    first_present,
)
from dentrecon.domain.value_objects.image_ref import ImageRef


class FindingChangeApplicator:
    """Patches a finding set with rebuttal change operations.

    Changes run strictly in order, so a later change to a tooth overrides
    the effect of an earlier one:

    - remove: drop the tooth if present
    - add: canonicalize the fragment for the target tooth and merge it into
      an existing entry, or insert it
    - modify: canonicalize and replace the existing entry; acts as add when
      the tooth is absent

    A change whose fragment is missing or does not canonicalize is a no-op.
    """

    def __init__(
        self,
        limits: EngineLimits | None = None,
        canonicalizer: FindingCanonicalizer | None = None,
        merger: FindingMerger | None = None,
    ) -> None:
        self.limits = limits or DEFAULT_LIMITS
        self.canonicalizer = canonicalizer or FindingCanonicalizer(self.limits)
        self.merger = merger or FindingMerger(self.limits)

    def apply(
        self,
        base: Sequence[Finding],
        changes: Sequence[FindingChange],
        images: Sequence[ImageRef],
    ) -> list[Finding]:
        by_tooth: dict[int, Finding] = {f.tooth_fdi: f for f in base}

        for change in changes:
            tooth = self.canonicalizer.converter.to_fdi(change.target_tooth) or change.target_tooth

            if change.operation == ChangeOperation.REMOVE:
                if by_tooth.pop(tooth, None) is None:
                    logger.debug("Remove for absent tooth {} ignored", tooth)
                continue

            incoming = self._fragment(change, tooth, images)
            if incoming is None:
                logger.debug(
                    "{} for tooth {} has no usable replacement", change.operation.value, tooth
                )
                continue

            existing = by_tooth.get(tooth)
            if change.operation == ChangeOperation.ADD and existing is not None:
                by_tooth[tooth] = self.merger.combine(incoming, existing)
            else:
                by_tooth[tooth] = incoming

        return truncate_findings(list(by_tooth.values()), self.limits)

    def _fragment(
        self, change: FindingChange, tooth: int, images: Sequence[ImageRef]
    ) -> Finding | None:
        if not change.replacement:
            return None
        # the change's target is authoritative over any tooth in the fragment
        record = {**change.replacement, "tooth_fdi": tooth}
        return self.canonicalizer.canonicalize(record, images)


def parse_changes(
    raw: object, converter: ToothNumberingConverter | None = None
) -> list[FindingChange]:
    """FindingChanges from a generator's change list; malformed entries are skipped."""
    if not isinstance(raw, list):
        return []
    converter = converter or ToothNumberingConverter()
    changes: list[FindingChange] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        record: dict[str, Any] = dict(item)

        op = first_string(first_present(record, CHANGE_OPERATION_KEYS))
        try:
            operation = ChangeOperation(op.lower()) if op else None
        except ValueError:
            operation = None
        tooth = converter.to_fdi(first_present(record, CHANGE_TARGET_KEYS))
        if operation is None or tooth is None:
            logger.debug("Skipped malformed finding change: op={!r} tooth={!r}", op, tooth)
            continue

        replacement = first_present(record, CHANGE_REPLACEMENT_KEYS)
        feedback_ref = record.get("feedback_ref")
        if isinstance(feedback_ref, bool) or not isinstance(feedback_ref, int):
            feedback_ref = None
        changes.append(
            FindingChange(
                operation=operation,
                target_tooth=tooth,
                replacement=dict(replacement) if isinstance(replacement, Mapping) else None,
                rationale=first_string(record.get("rationale")),
                feedback_ref=feedback_ref,
            )
        )
    return changes
