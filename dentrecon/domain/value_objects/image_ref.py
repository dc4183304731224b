from pydantic import BaseModel, Field


class ImageRef(BaseModel, frozen=True):
    """One entry of the 0-based image manifest."""

    index: int = Field(ge=0)
    id: str
    url: str | None = None


def build_manifest(ids: list[str]) -> list[ImageRef]:
    """Manifest from storage paths in display order."""
    return [ImageRef(index=i, id=image_id) for i, image_id in enumerate(ids)]
