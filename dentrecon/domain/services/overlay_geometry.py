from collections.abc import Sequence

from dentrecon.domain.services.coercion import round_half_up
from dentrecon.domain.value_objects.overlay import (
    BoxOverlay,
    CircleOverlay,
    LineOverlay,
    Overlay,
    PolygonOverlay,
    PolylineOverlay,
)

Bounds = tuple[float, float, float, float]

FULL_FRAME: Bounds = (0.0, 0.0, 1.0, 1.0)


class OverlayGeometry:
    """Placement helpers for rendering overlays and their legend callouts."""

    def extent(self, overlay: Overlay) -> Bounds:
        """``(min_x, min_y, max_x, max_y)`` of one shape, clipped to the frame."""
        match overlay:
            case CircleOverlay(center=(cx, cy), radius=r):
                return (max(0.0, cx - r), max(0.0, cy - r), min(1.0, cx + r), min(1.0, cy + r))
            case BoxOverlay(bbox=(x, y, w, h)):
                return (x, y, min(1.0, x + w), min(1.0, y + h))
            case LineOverlay(points=pts) | PolylineOverlay(points=pts) | PolygonOverlay(points=pts):
                xs = [p[0] for p in pts]
                ys = [p[1] for p in pts]
                return (min(xs), min(ys), max(xs), max(ys))
        raise TypeError(f"Unsupported overlay: {type(overlay).__name__}")

    def bounds(self, overlays: Sequence[Overlay]) -> Bounds:
        """Bounding box ``(x, y, w, h)`` covering every overlay; the full frame if none."""
        if not overlays:
            return FULL_FRAME
        extents = [self.extent(o) for o in overlays]
        min_x = min(e[0] for e in extents)
        min_y = min(e[1] for e in extents)
        max_x = max(e[2] for e in extents)
        max_y = max(e[3] for e in extents)
        return (
            round_half_up(min_x),
            round_half_up(min_y),
            round_half_up(max_x - min_x),
            round_half_up(max_y - min_y),
        )

    def anchor(self, overlay: Overlay) -> tuple[float, float]:
        """Point a legend callout attaches to."""
        match overlay:
            case CircleOverlay(center=center):
                return center
            case BoxOverlay():
                return overlay.origin
            case LineOverlay(points=pts) | PolylineOverlay(points=pts) | PolygonOverlay(points=pts):
                return pts[0]
        raise TypeError(f"Unsupported overlay: {type(overlay).__name__}")
