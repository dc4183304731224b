import re
from enum import Enum


class Severity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: object) -> "Severity | None":
        """Match free text against severity keywords.

        Keywords are checked low first, then moderate, then high, so
        "low-moderate" resolves to low. Returns None when nothing matches.
        """
        text = str(value if value is not None else "").lower()
        if not text:
            return None
        if _LOW_PATTERN.search(text) or "minor" in text:
            return cls.LOW
        if "mod" in text or "medium" in text:
            return cls.MODERATE
        if "high" in text or "severe" in text:
            return cls.HIGH
        return None


_RANK = {Severity.LOW: 0, Severity.MODERATE: 1, Severity.HIGH: 2}

_LOW_PATTERN = re.compile(r"(^|[^a-z])low")
