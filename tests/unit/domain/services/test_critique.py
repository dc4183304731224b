"""Tests for split_critique."""

from dentrecon.domain.services.critique import split_critique


class TestSplitCritique:
    def test_lines_and_semicolons(self) -> None:
        text = "Tooth 16 is not carious\nAdd recession on 41; lower the overall confidence"

        assert split_critique(text) == [
            "Tooth 16 is not carious",
            "Add recession on 41",
            "lower the overall confidence",
        ]

    def test_numbered_items_on_one_line(self) -> None:
        assert split_critique("1. Remove 21 2. Check 36") == ["1. Remove 21", "2. Check 36"]

    def test_bullets_on_one_line(self) -> None:
        items = split_critique("- wrong tooth - missing overlay")
        assert items == ["wrong tooth", "missing overlay"]

    def test_single_item(self) -> None:
        assert split_critique("Looks fine") == ["Looks fine"]

    def test_empty(self) -> None:
        assert split_critique(None) == []
        assert split_critique("") == []
        assert split_critique(" \n ; ") == []
