from dentrecon.domain.value_objects.change_operation import ChangeOperation
from dentrecon.domain.value_objects.engine_limits import (
    DEFAULT_LIMITS,
    LIMIT_PRESETS,
    STRICT_LIMITS,
    EngineLimits,
    LimitPreset,
    TruncationPolicy,
)
from dentrecon.domain.value_objects.field_aliases import FINDING_ALIASES, FieldAliases
from dentrecon.domain.value_objects.image_ref import ImageRef, build_manifest
from dentrecon.domain.value_objects.overlay import (
    OVERLAY_TYPES,
    BoxOverlay,
    CircleOverlay,
    LineOverlay,
    Overlay,
    PolygonOverlay,
    PolylineOverlay,
)
from dentrecon.domain.value_objects.severity import Severity
from dentrecon.domain.value_objects.tooth_info import Arch, Side, ToothInfo, ToothRange

__all__ = [
    "Arch",
    "BoxOverlay",
    "ChangeOperation",
    "CircleOverlay",
    "DEFAULT_LIMITS",
    "EngineLimits",
    "FINDING_ALIASES",
    "FieldAliases",
    "ImageRef",
    "LIMIT_PRESETS",
    "LimitPreset",
    "LineOverlay",
    "OVERLAY_TYPES",
    "Overlay",
    "PolygonOverlay",
    "PolylineOverlay",
    "STRICT_LIMITS",
    "Severity",
    "Side",
    "ToothInfo",
    "ToothRange",
    "TruncationPolicy",
    "build_manifest",
]
