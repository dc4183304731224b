from enum import Enum

from pydantic import BaseModel, Field


class TruncationPolicy(str, Enum):
    TOOTH_ORDER = "tooth_order"  # keep the lowest tooth numbers
    CONFIDENCE = "confidence"  # keep the most confident findings


class LimitPreset(str, Enum):
    DEFAULT = "default"
    STRICT = "strict"


class EngineLimits(BaseModel, frozen=True):
    max_findings: int = Field(default=40, ge=1)
    max_overlays: int = Field(default=12, ge=0)
    default_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    coordinate_precision: int = Field(default=2, ge=0)
    truncation: TruncationPolicy = TruncationPolicy.TOOTH_ORDER


DEFAULT_LIMITS = EngineLimits()

STRICT_LIMITS = EngineLimits(
    max_findings=40,
    max_overlays=12,
    default_confidence=0.5,
    truncation=TruncationPolicy.CONFIDENCE,
)

LIMIT_PRESETS: dict[LimitPreset, EngineLimits] = {
    LimitPreset.DEFAULT: DEFAULT_LIMITS,
    LimitPreset.STRICT: STRICT_LIMITS,
}
