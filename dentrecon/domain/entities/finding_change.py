from typing import Any

from pydantic import BaseModel

from dentrecon.domain.value_objects.change_operation import ChangeOperation


class FindingChange(BaseModel, frozen=True):
    """One patch operation from a rebuttal, targeting a single tooth.

    ``replacement`` is an unvalidated finding fragment; it goes through the
    canonicalizer when the change is applied.
    """

    operation: ChangeOperation
    target_tooth: int
    replacement: dict[str, Any] | None = None
    rationale: str | None = None
    feedback_ref: int | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "op": self.operation.value,
            "target_tooth_fdi": self.target_tooth,
            "after": self.replacement,
            "rationale": self.rationale,
            "feedback_ref": self.feedback_ref,
        }
