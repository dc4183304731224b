from enum import Enum

from pydantic import BaseModel


class Arch(str, Enum):
    MAXILLARY = "maxillary"
    MANDIBULAR = "mandibular"


class Side(str, Enum):
    RIGHT = "right"
    LEFT = "left"


class ToothRange(str, Enum):
    PERMANENT = "permanent"
    PRIMARY = "primary"
    ALL = "all"


class ToothInfo(BaseModel, frozen=True):
    fdi: int
    universal: int | str
    palmer: str
    arch: Arch
    side: Side
    class_name: str
    is_primary: bool
    position: int

    @property
    def quadrant_label(self) -> str:
        return self.palmer[:2]

    @property
    def name(self) -> str:
        return f"{self.arch.value.capitalize()} {self.side.value} {self.class_name}"
