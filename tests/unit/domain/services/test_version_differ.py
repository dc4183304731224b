"""Tests for VersionDiffEngine."""

import pytest

from dentrecon.domain.entities.diff_result import NoteLine
from dentrecon.domain.services.version_differ import VersionDiffEngine, flatten
from dentrecon.domain.value_objects.severity import Severity


@pytest.fixture
def differ() -> VersionDiffEngine:
    return VersionDiffEngine()


class TestDiffRows:
    def test_severity_change_is_modified(self, differ: VersionDiffEngine) -> None:
        result = differ.diff_rows(
            [{"tooth": "11", "note": "chip", "severity": "low"}],
            [{"tooth": "11", "note": "chip", "severity": "high"}],
        )

        assert result.added == []
        assert result.removed == []
        assert result.to_wire()["modified"] == [
            {
                "tooth": "11",
                "from": {"note": "chip", "severity": "low"},
                "to": {"note": "chip", "severity": "high"},
            }
        ]

    def test_added_and_removed(self, differ: VersionDiffEngine) -> None:
        result = differ.diff_rows(
            [{"tooth_fdi": 16, "findings": ["caries", "wear"], "severity": "moderate"}],
            [
                {"tooth_fdi": 16, "findings": ["caries"], "severity": "moderate"},
                {"tooth_fdi": 21, "findings": ["chip"], "severity": "low"},
            ],
        )

        assert result.removed == [NoteLine(tooth=16, note="wear", severity=Severity.MODERATE)]
        assert result.added == [NoteLine(tooth=21, note="chip", severity=Severity.LOW)]
        assert result.modified == []

    def test_note_identity_ignores_case(self, differ: VersionDiffEngine) -> None:
        result = differ.diff_rows(
            [{"tooth": 11, "note": "Chip", "severity": "low"}],
            [{"tooth": 11, "note": "chip", "severity": "low"}],
        )
        assert result.is_empty

    def test_severity_change_needs_exact_note_text(self, differ: VersionDiffEngine) -> None:
        result = differ.diff_rows(
            [{"tooth": 11, "note": "Chip", "severity": "low"}],
            [{"tooth": 11, "note": "chip", "severity": "high"}],
        )
        assert result.modified == []
        assert result.removed == [NoteLine(tooth=11, note="Chip", severity=Severity.LOW)]
        assert result.added == []

    @pytest.mark.parametrize("alias", ["grade", "risk"])
    def test_severity_aliases_are_read(self, differ: VersionDiffEngine, alias: str) -> None:
        result = differ.diff_rows(
            [{"tooth": 16, "findings": ["caries"], alias: "low"}],
            [{"tooth": 16, "findings": ["caries"], alias: "high"}],
        )
        assert [m.to_wire() for m in result.modified] == [
            {
                "tooth": "16",
                "from": {"note": "caries", "severity": "low"},
                "to": {"note": "caries", "severity": "high"},
            }
        ]

    def test_same_note_on_other_tooth_is_not_a_match(self, differ: VersionDiffEngine) -> None:
        result = differ.diff_rows(
            [{"tooth": 11, "note": "chip"}],
            [{"tooth": 21, "note": "chip"}],
        )

        assert [line.tooth for line in result.removed] == [11]
        assert [line.tooth for line in result.added] == [21]

    def test_rows_without_resolvable_tooth_are_ignored(self, differ: VersionDiffEngine) -> None:
        result = differ.diff_rows([{"tooth": "?", "note": "x"}, "junk"], [])
        assert result.is_empty

    def test_first_candidate_wins(self, differ: VersionDiffEngine) -> None:
        before = [
            NoteLine(tooth=11, note="chip", severity=Severity.LOW),
            NoteLine(tooth=11, note="CHIP", severity=Severity.LOW),
        ]
        after = [
            NoteLine(tooth=11, note="chip", severity=Severity.MODERATE),
            NoteLine(tooth=11, note="chip", severity=Severity.HIGH),
        ]

        result = differ.diff_lines(before, after)

        assert [m.after.severity for m in result.modified] == [Severity.MODERATE, Severity.HIGH]
        assert result.added == []
        assert result.removed == []


class TestDiffFindings:
    def test_identical_sets_have_no_changes(
        self, differ: VersionDiffEngine, finding_factory
    ) -> None:
        findings = [
            finding_factory(tooth=11, notes=("chip", "stain")),
            finding_factory(tooth=16, notes=("caries",), severity=Severity.HIGH),
            finding_factory(tooth=46, notes=()),
        ]

        result = differ.diff(findings, findings)

        assert result.is_empty
        assert result.to_wire() == {"added": [], "removed": [], "modified": []}

    def test_flatten_one_line_per_note(self, finding_factory) -> None:
        lines = flatten([finding_factory(tooth=11, notes=("a", "b")), finding_factory(tooth=12)])
        assert [(line.tooth, line.note) for line in lines] == [(11, "a"), (11, "b"), (12, "plaque")]
