from typing import Any

from pydantic import BaseModel, Field

from dentrecon.domain.value_objects.severity import Severity


class NoteLine(BaseModel, frozen=True):
    """A single ``(tooth, note)`` pair of a flattened finding set."""

    tooth: int
    note: str
    severity: Severity

    @property
    def key(self) -> str:
        return f"{self.tooth}||{self.note.lower()}"

    def to_wire(self) -> dict[str, Any]:
        return {"tooth": str(self.tooth), "note": self.note, "severity": self.severity.value}


class NoteState(BaseModel, frozen=True):
    note: str
    severity: Severity


class ModifiedNote(BaseModel, frozen=True):
    tooth: int
    before: NoteState
    after: NoteState

    def to_wire(self) -> dict[str, Any]:
        return {
            "tooth": str(self.tooth),
            "from": {"note": self.before.note, "severity": self.before.severity.value},
            "to": {"note": self.after.note, "severity": self.after.severity.value},
        }


class DiffResult(BaseModel):
    added: list[NoteLine] = Field(default_factory=list)
    removed: list[NoteLine] = Field(default_factory=list)
    modified: list[ModifiedNote] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def to_wire(self) -> dict[str, Any]:
        return {
            "added": [line.to_wire() for line in self.added],
            "removed": [line.to_wire() for line in self.removed],
            "modified": [m.to_wire() for m in self.modified],
        }
