from pathlib import Path

import pytest

from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.value_objects.image_ref import ImageRef, build_manifest
from dentrecon.domain.value_objects.severity import Severity


@pytest.fixture
def temp_state_dir(tmp_path: Path) -> Path:
    state_dir = tmp_path / ".dentrecon"
    state_dir.mkdir()
    return state_dir


@pytest.fixture
def images() -> list[ImageRef]:
    return build_manifest(["cases/c1/front.jpg", "cases/c1/upper.jpg", "cases/c1/lower.jpg"])


@pytest.fixture
def single_image() -> list[ImageRef]:
    return build_manifest(["cases/c1/front.jpg"])


@pytest.fixture
def finding_factory():
    def _create(
        tooth: int = 11,
        notes: tuple[str, ...] = ("plaque",),
        severity: Severity = Severity.LOW,
        confidence: float = 0.5,
        image_index: int = 0,
        image_id: str = "cases/c1/front.jpg",
        overlays: tuple = (),
    ) -> Finding:
        return Finding(
            tooth_fdi=tooth,
            notes=notes,
            severity=severity,
            confidence=confidence,
            image_index=image_index,
            image_id=image_id,
            overlays=overlays,
        )

    return _create
