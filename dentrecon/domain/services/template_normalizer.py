import math
import re
from collections.abc import Mapping
from typing import Any

from dentrecon.domain.entities.report_payload import Hygiene, Measurements, Occlusion
from dentrecon.domain.services.coercion import first_string, string_list

_ANGLE_CLASSES = ("I", "II", "III")
_CLASS_PREFIX = re.compile(r"^class\s*", re.IGNORECASE)
_PLAQUE_LEVELS = ("low", "moderate", "high")
_GRADED_LEVELS = ("none", "mild", "moderate", "severe")
_RECOMMENDATION_SPLIT = re.compile(r"\r?\n|;|^\s*[-•·*]\s+", re.MULTILINE)


class TemplateNormalizer:
    """Coerces the non-finding sections of a generated report.

    Values that do not fit a field's type or enumeration become None rather
    than failing the report.
    """

    def measurements(self, raw: object) -> Measurements:
        source = _mapping(raw)
        return Measurements(
            **{name: _finite(source.get(name)) for name in Measurements.model_fields}
        )

    def occlusion(self, raw: object) -> Occlusion:
        source = _mapping(raw)
        return Occlusion(
            class_right=_angle_class(source.get("class_right")),
            class_left=_angle_class(source.get("class_left")),
            open_bite=_flag(source.get("open_bite")),
            crossbite=_flag(source.get("crossbite")),
        )

    def hygiene(self, raw: object) -> Hygiene:
        source = _mapping(raw)
        return Hygiene(
            plaque=_choice(source.get("plaque"), _PLAQUE_LEVELS),  # type: ignore[arg-type]
            calculus=_choice(source.get("calculus"), _GRADED_LEVELS),  # type: ignore[arg-type]
            gingival_inflammation=_choice(  # type: ignore[arg-type]
                source.get("gingival_inflammation"), _GRADED_LEVELS
            ),
        )

    def recommendations(self, raw: object) -> list[str]:
        if isinstance(raw, str):
            return [part.strip() for part in _RECOMMENDATION_SPLIT.split(raw) if part.strip()]
        return string_list(raw)

    def text(self, raw: object) -> str:
        return raw if isinstance(raw, str) else ""

    def normalize(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Template sections of ``raw`` keyed as in a stored payload."""
        return {
            "summary": self.text(raw.get("summary")),
            "treatment_goal_final": self.text(raw.get("treatment_goal_final")),
            "measurements": self.measurements(raw.get("measurements")),
            "occlusion": self.occlusion(raw.get("occlusion")),
            "hygiene": self.hygiene(raw.get("hygiene")),
            "recommendations": self.recommendations(raw.get("recommendations")),
        }

    def merge(self, base: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
        """Overlay a revision's template sections on a base payload.

        Non-empty text and recommendation lists from ``update`` win; for the
        structured sections each field is taken from ``update`` when it is
        set there, else kept from ``base``.
        """
        old = self.normalize(base)
        new = self.normalize(update)
        merged: dict[str, Any] = {}
        for key in ("summary", "treatment_goal_final"):
            merged[key] = new[key] if new[key].strip() else old[key]
        merged["recommendations"] = new["recommendations"] or old["recommendations"]
        for key in ("measurements", "occlusion", "hygiene"):
            fields = new[key].model_dump(exclude_none=True)
            merged[key] = old[key].model_copy(update=fields)
        return merged


def _mapping(raw: object) -> Mapping[str, Any]:
    return raw if isinstance(raw, Mapping) else {}


def _finite(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value) if math.isfinite(value) else None


def _flag(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


def _angle_class(value: object) -> str | None:
    text = first_string(value)
    if text is None:
        return None
    text = _CLASS_PREFIX.sub("", text).upper()
    return text if text in _ANGLE_CLASSES else None


def _choice(value: object, allowed: tuple[str, ...]) -> str | None:
    text = first_string(value)
    if text is None:
        return None
    text = text.lower()
    return text if text in allowed else None
