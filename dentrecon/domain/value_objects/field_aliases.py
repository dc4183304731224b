"""Accepted field names for loosely structured finding records.

Ingestion and validation both read from this table so the draft and
rebuttal paths cannot drift apart.
"""

from pydantic import BaseModel


class FieldAliases(BaseModel, frozen=True):
    tooth: tuple[str, ...]
    notes: tuple[str, ...]
    severity: tuple[str, ...]
    confidence: tuple[str, ...]
    image_index: tuple[str, ...]
    image_id: tuple[str, ...]
    overlays: tuple[str, ...]


FINDING_ALIASES = FieldAliases(
    tooth=("tooth_fdi", "toothFDI", "FDI", "tooth", "toothNumber", "number", "id"),
    notes=("findings", "note", "notes"),
    severity=("severity", "grade", "risk"),
    confidence=("confidence", "confidence_score", "probability", "score"),
    image_index=("image_index", "imageIndex", "img_index", "image"),
    image_id=("image_id", "imageId", "image_path", "path"),
    overlays=("overlays", "geometry", "shapes"),
)

# Top-level keys holding the finding list of a generated report.
FINDING_LIST_KEYS = ("findings", "teeth")

# Keys of a finding-change operation emitted by the rebuttal generator.
CHANGE_OPERATION_KEYS = ("op", "operation", "action")
CHANGE_TARGET_KEYS = ("target_tooth_fdi", "target_tooth", "tooth_fdi", "tooth")
CHANGE_REPLACEMENT_KEYS = ("after", "replacement")

# Box geometry may arrive under any of these keys.
BOX_KEYS = ("bbox", "box", "rect")


def first_present(record: dict[str, object], keys: tuple[str, ...]) -> object | None:
    """Value of the first key that is present and not None."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None
