from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger
from pydantic import ValidationError

from dentrecon.domain.services.coercion import clamp_unit, first_string
from dentrecon.domain.value_objects.engine_limits import DEFAULT_LIMITS, EngineLimits
from dentrecon.domain.value_objects.field_aliases import BOX_KEYS, first_present
from dentrecon.domain.value_objects.overlay import (
    BoxOverlay,
    CircleOverlay,
    LineOverlay,
    Overlay,
    PolygonOverlay,
    PolylineOverlay,
)

TYPE_SYNONYMS: dict[str, str] = {
    "circle": "circle",
    "ellipse": "circle",
    "line": "line",
    "polyline": "polyline",
    "polygon": "polygon",
    "bbox": "bbox",
    "box": "bbox",
    "rect": "bbox",
    "rectangle": "bbox",
}

# Containers that may wrap an overlay list instead of being one.
_WRAPPER_KEYS = ("overlays", "geometry")


class OverlayValidator:
    """Coerces loosely described shapes into normalized overlays.

    A shape is either emitted whole, with every coordinate clamped into
    [0, 1], or dropped. Nothing is repaired or partially kept.
    """

    def __init__(self, limits: EngineLimits | None = None) -> None:
        self.limits = limits or DEFAULT_LIMITS

    def coerce_overlay(self, raw: object) -> Overlay | None:
        if not isinstance(raw, Mapping):
            return None
        kind = normalize_type(raw.get("type"))
        if kind is None:
            logger.debug("Dropped overlay with unknown type: {!r}", raw.get("type"))
            return None

        label = raw.get("label") if first_string(raw.get("label")) else None
        try:
            match kind:
                case "circle":
                    return self._circle(raw, label)
                case "bbox":
                    return self._box(raw, label)
                case "line" | "polyline" | "polygon":
                    return self._path(kind, raw, label)
        except ValidationError as e:
            logger.debug("Dropped {} overlay failing validation: {}", kind, e.error_count())
        return None

    def coerce_overlays(self, raw: object) -> list[Overlay]:
        """Valid overlays from ``raw`` in input order, capped to the overlay limit."""
        items = _overlay_items(raw)
        out: list[Overlay] = []
        for item in items:
            overlay = self.coerce_overlay(item)
            if overlay is not None:
                out.append(overlay)
        if len(out) > self.limits.max_overlays:
            logger.debug(
                "Truncated overlays from {} to {}", len(out), self.limits.max_overlays
            )
        return out[: self.limits.max_overlays]

    def _unit(self, value: object) -> float | None:
        return clamp_unit(value, self.limits.coordinate_precision)

    def _point(self, value: object) -> tuple[float, float] | None:
        if isinstance(value, Mapping):
            value = (value.get("x"), value.get("y"))
        if not _is_sequence(value) or len(value) < 2:
            return None
        x = self._unit(value[0])
        y = self._unit(value[1])
        if x is None or y is None:
            return None
        return x, y

    def _circle(self, raw: Mapping[str, Any], label: Any) -> CircleOverlay | None:
        center = self._point(raw.get("center"))
        radius = self._unit(first_present(dict(raw), ("radius", "r")))
        if center is None or radius is None or radius <= 0:
            logger.debug("Dropped circle overlay: center={!r} radius={!r}", center, radius)
            return None
        return CircleOverlay(center=center, radius=radius, label=label)

    def _box(self, raw: Mapping[str, Any], label: Any) -> BoxOverlay | None:
        source = first_present(dict(raw), BOX_KEYS)
        if isinstance(source, Mapping):
            source = (source.get("x"), source.get("y"), source.get("w"), source.get("h"))
        if not _is_sequence(source) or len(source) < 4:
            logger.debug("Dropped box overlay without [x, y, w, h]")
            return None
        values = [self._unit(v) for v in source[:4]]
        if any(v is None for v in values):
            logger.debug("Dropped box overlay with non-numeric geometry")
            return None
        x, y, w, h = values
        if w <= 0 or h <= 0:  # type: ignore[operator]
            logger.debug("Dropped box overlay with empty size: w={} h={}", w, h)
            return None
        return BoxOverlay(bbox=(x, y, w, h), label=label)  # type: ignore[arg-type]

    def _path(
        self, kind: str, raw: Mapping[str, Any], label: Any
    ) -> LineOverlay | PolylineOverlay | PolygonOverlay | None:
        source = raw.get("points")
        if not _is_sequence(source):
            logger.debug("Dropped {} overlay without points", kind)
            return None
        points = [self._point(p) for p in source]
        if any(p is None for p in points):
            logger.debug("Dropped {} overlay with a malformed point", kind)
            return None
        pts = tuple(p for p in points if p is not None)

        match kind:
            case "line":
                if len(pts) != 2:
                    logger.debug("Dropped line overlay with {} points", len(pts))
                    return None
                return LineOverlay(points=(pts[0], pts[1]), label=label)
            case "polyline":
                if len(pts) < 2:
                    logger.debug("Dropped polyline overlay with {} points", len(pts))
                    return None
                return PolylineOverlay(points=pts, label=label)
            case "polygon":
                if len(pts) < 3:
                    logger.debug("Dropped polygon overlay with {} points", len(pts))
                    return None
                return PolygonOverlay(points=pts, label=label)
        return None


def normalize_type(value: object) -> str | None:
    return TYPE_SYNONYMS.get(str(value or "").strip().lower())


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _overlay_items(raw: object) -> Sequence[object]:
    if _is_sequence(raw):
        return raw  # type: ignore[return-value]
    if isinstance(raw, Mapping):
        for key in _WRAPPER_KEYS:
            if _is_sequence(raw.get(key)):
                return raw[key]  # type: ignore[no-any-return]
    return ()
