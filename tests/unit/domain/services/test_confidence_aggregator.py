"""Tests for ConfidenceAggregator."""

import pytest

from dentrecon.domain.services.confidence_aggregator import ConfidenceAggregator


@pytest.fixture
def aggregator() -> ConfidenceAggregator:
    return ConfidenceAggregator()


class TestAggregate:
    def test_explicit_value_wins(self, aggregator: ConfidenceAggregator, finding_factory) -> None:
        findings = [finding_factory(confidence=0.2)]
        assert aggregator.aggregate(findings, 0.87) == 0.87

    def test_explicit_value_is_clamped(self, aggregator: ConfidenceAggregator) -> None:
        assert aggregator.aggregate([], 1.4) == 1.0
        assert aggregator.aggregate([], -1) == 0.0

    def test_mean_rounded_to_two_decimals(
        self, aggregator: ConfidenceAggregator, finding_factory
    ) -> None:
        findings = [
            finding_factory(tooth=t, confidence=c) for t, c in ((11, 0.5), (12, 0.6), (13, 0.8))
        ]
        assert aggregator.aggregate(findings) == 0.63

    @pytest.mark.parametrize("explicit", [None, "high", float("nan"), True])
    def test_invalid_explicit_falls_back_to_mean(
        self, aggregator: ConfidenceAggregator, finding_factory, explicit: object
    ) -> None:
        findings = [finding_factory(confidence=0.4), finding_factory(tooth=21, confidence=0.6)]
        assert aggregator.aggregate(findings, explicit) == 0.5

    def test_no_findings_no_opinion(self, aggregator: ConfidenceAggregator) -> None:
        assert aggregator.aggregate([]) is None
