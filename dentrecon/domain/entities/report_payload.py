from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.value_objects.image_ref import ImageRef

AngleClass = Literal["I", "II", "III"]
PlaqueLevel = Literal["low", "moderate", "high"]
GradedLevel = Literal["none", "mild", "moderate", "severe"]


class Measurements(BaseModel):
    overjet_mm: float | None = None
    overbite_percent: float | None = None
    midline_deviation_mm: float | None = None
    crowding_upper_mm: float | None = None
    crowding_lower_mm: float | None = None


class Occlusion(BaseModel):
    class_right: AngleClass | None = None
    class_left: AngleClass | None = None
    open_bite: bool | None = None
    crossbite: bool | None = None


class Hygiene(BaseModel):
    plaque: PlaqueLevel | None = None
    calculus: GradedLevel | None = None
    gingival_inflammation: GradedLevel | None = None


class ReportPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    treatment_goal_final: str = ""
    measurements: Measurements = Field(default_factory=Measurements)
    occlusion: Occlusion = Field(default_factory=Occlusion)
    hygiene: Hygiene = Field(default_factory=Hygiene)
    recommendations: list[str] = Field(default_factory=list)
    confidence_overall: float | None = Field(default=None, ge=0.0, le=1.0)
    findings: list[Finding] = Field(default_factory=list)
    images: list[ImageRef] = Field(default_factory=list)
    rebuttal: dict[str, Any] | None = None
    meta: dict[str, Any] = Field(default_factory=dict, alias="_meta")

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "summary": self.summary,
            "treatment_goal_final": self.treatment_goal_final,
            "measurements": self.measurements.model_dump(),
            "occlusion": self.occlusion.model_dump(),
            "hygiene": self.hygiene.model_dump(),
            "recommendations": list(self.recommendations),
            "confidence_overall": self.confidence_overall,
            "findings": [f.to_wire() for f in self.findings],
            "images": [img.model_dump(exclude_none=True) for img in self.images],
            "overlay_coords": "normalized_0_1",
            "_meta": dict(self.meta),
        }
        if self.rebuttal is not None:
            out["rebuttal"] = self.rebuttal
        return out


class ReportVersion(BaseModel, frozen=True):
    """A stored report version. Never rewritten once saved."""

    case_id: str
    version: int = Field(ge=1)
    parent_version: int | None = None
    narrative: str = ""
    payload: dict[str, Any]
    created_at: datetime
