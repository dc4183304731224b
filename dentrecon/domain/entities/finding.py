from typing import Any

from pydantic import BaseModel, Field

from dentrecon.domain.value_objects.overlay import Overlay
from dentrecon.domain.value_objects.severity import Severity


class Finding(BaseModel, frozen=True):
    """Canonical per-tooth clinical observation."""

    tooth_fdi: int
    notes: tuple[str, ...] = ()
    severity: Severity = Severity.LOW
    confidence: float = Field(ge=0.0, le=1.0)
    image_index: int = Field(ge=0)
    image_id: str
    overlays: tuple[Overlay, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        return {
            "tooth_fdi": self.tooth_fdi,
            "findings": list(self.notes),
            "severity": self.severity.value,
            "confidence": self.confidence,
            "image_index": self.image_index,
            "image_id": self.image_id,
            "overlays": [o.to_wire() for o in self.overlays],
        }
