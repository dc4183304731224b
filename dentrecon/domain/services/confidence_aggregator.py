from collections.abc import Sequence

from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.services.coercion import clamp_unit, round_half_up


class ConfidenceAggregator:
    """Overall report confidence: explicit value, else the mean of the findings."""

    def aggregate(self, findings: Sequence[Finding], explicit: object = None) -> float | None:
        value = clamp_unit(explicit)
        if value is not None:
            return value
        if not findings:
            return None
        mean = sum(f.confidence for f in findings) / len(findings)
        return round_half_up(mean)
