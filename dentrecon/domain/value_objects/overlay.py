"""Normalized-coordinate annotation shapes.

Every coordinate lives in the [0, 1] x [0, 1] image space. The wire form of
each shape always carries all five geometry keys, with exactly the ones
selected by ``type`` set and the rest null.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

NormalizedScalar = Annotated[float, Field(ge=0.0, le=1.0)]
PositiveScalar = Annotated[float, Field(gt=0.0, le=1.0)]
Point = tuple[NormalizedScalar, NormalizedScalar]


class CircleOverlay(BaseModel, frozen=True):
    type: Literal["circle"] = "circle"
    center: Point
    radius: PositiveScalar
    label: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return _wire(self, center=list(self.center), radius=self.radius)


class LineOverlay(BaseModel, frozen=True):
    type: Literal["line"] = "line"
    points: tuple[Point, Point]
    label: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return _wire(self, points=[list(p) for p in self.points])


class PolylineOverlay(BaseModel, frozen=True):
    type: Literal["polyline"] = "polyline"
    points: tuple[Point, ...] = Field(min_length=2)
    label: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return _wire(self, points=[list(p) for p in self.points])


class PolygonOverlay(BaseModel, frozen=True):
    type: Literal["polygon"] = "polygon"
    points: tuple[Point, ...] = Field(min_length=3)
    label: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return _wire(self, points=[list(p) for p in self.points])


class BoxOverlay(BaseModel, frozen=True):
    """Axis-aligned box stored as ``(x, y, w, h)``."""

    type: Literal["bbox"] = "bbox"
    bbox: tuple[NormalizedScalar, NormalizedScalar, PositiveScalar, PositiveScalar]
    label: str | None = None

    @property
    def origin(self) -> tuple[float, float]:
        return self.bbox[0], self.bbox[1]

    @property
    def size(self) -> tuple[float, float]:
        return self.bbox[2], self.bbox[3]

    def to_wire(self) -> dict[str, Any]:
        return _wire(self, bbox=list(self.bbox))


Overlay = Annotated[
    CircleOverlay | LineOverlay | PolylineOverlay | PolygonOverlay | BoxOverlay,
    Field(discriminator="type"),
]

OVERLAY_TYPES = ("circle", "line", "polyline", "polygon", "bbox")


def _wire(overlay: BaseModel, **geometry: Any) -> dict[str, Any]:
    out: dict[str, Any] = {
        "type": overlay.type,  # type: ignore[attr-defined]
        "center": None,
        "radius": None,
        "points": None,
        "bbox": None,
    }
    out.update(geometry)
    out["label"] = overlay.label  # type: ignore[attr-defined]
    return out
