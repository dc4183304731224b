from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.errors import ManifestMissingError
from dentrecon.domain.services.coercion import (
    as_index,
    clamp_unit,
    first_number,
    first_string,
    string_list,
    unique,
)
from dentrecon.domain.services.overlay_validator import OverlayValidator
from dentrecon.domain.services.tooth_numbering import ToothNumberingConverter
from dentrecon.domain.value_objects.engine_limits import DEFAULT_LIMITS, EngineLimits
from dentrecon.domain.value_objects.field_aliases import (
    FINDING_ALIASES,
    FINDING_LIST_KEYS,
    FieldAliases,
    first_present,
)
from dentrecon.domain.value_objects.image_ref import ImageRef
from dentrecon.domain.value_objects.severity import Severity


class FindingCanonicalizer:
    """Turns one loosely typed finding record into a canonical Finding.

    Records whose tooth cannot be resolved are dropped (None). Every other
    field falls back to a default instead of failing:

    - image_index: out of range or missing -> 0; image_id always comes from
      the manifest entry at that index
    - severity: keyword match, unrecognized -> low
    - confidence: clamped into [0, 1], missing -> limits.default_confidence
    """

    def __init__(
        self,
        limits: EngineLimits | None = None,
        aliases: FieldAliases = FINDING_ALIASES,
        converter: ToothNumberingConverter | None = None,
        overlay_validator: OverlayValidator | None = None,
    ) -> None:
        self.limits = limits or DEFAULT_LIMITS
        self.aliases = aliases
        self.converter = converter or ToothNumberingConverter()
        self.overlay_validator = overlay_validator or OverlayValidator(self.limits)

    def canonicalize(self, raw: object, images: Sequence[ImageRef]) -> Finding | None:
        if not images:
            raise ManifestMissingError("Cannot resolve image references without a manifest")
        if not isinstance(raw, Mapping):
            return None
        record: dict[str, Any] = dict(raw)

        candidate = first_present(record, self.aliases.tooth)
        tooth = self.converter.to_fdi(candidate)
        if tooth is None:
            logger.debug("Dropped finding with unresolvable tooth: {!r}", candidate)
            return None

        image_index = as_index(first_number(*self._values(record, self.aliases.image_index)))
        if image_index is None or image_index >= len(images):
            image_index = 0

        severity = Severity.parse(first_string(*self._values(record, self.aliases.severity)))

        confidence = clamp_unit(first_number(*self._values(record, self.aliases.confidence)))
        if confidence is None:
            confidence = self.limits.default_confidence

        notes: list[str] = []
        for key in self.aliases.notes:
            notes.extend(string_list(record.get(key)))

        overlays = self.overlay_validator.coerce_overlays(
            first_present(record, self.aliases.overlays)
        )

        return Finding(
            tooth_fdi=tooth,
            notes=tuple(unique(notes)),
            severity=severity or Severity.LOW,
            confidence=confidence,
            image_index=image_index,
            image_id=images[image_index].id,
            overlays=tuple(overlays),
        )

    def canonicalize_all(
        self, records: Sequence[object], images: Sequence[ImageRef]
    ) -> list[Finding]:
        """Canonicalize each record, skipping the ones that drop. No merging."""
        out: list[Finding] = []
        for record in records:
            finding = self.canonicalize(record, images)
            if finding is not None:
                out.append(finding)
        return out

    def _values(self, record: dict[str, Any], keys: tuple[str, ...]) -> list[object]:
        return [record.get(key) for key in keys]


def extract_finding_records(document: object) -> list[object]:
    """The finding list of a generated report, or the document itself if it is a list."""
    if isinstance(document, list):
        return document
    if isinstance(document, Mapping):
        for key in FINDING_LIST_KEYS:
            value = document.get(key)
            if isinstance(value, list):
                return value
    return []
