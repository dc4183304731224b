"""Tests for ToothNumberingConverter."""

import pytest

from dentrecon.domain.services.tooth_numbering import ToothNumberingConverter, resolve_tooth
from dentrecon.domain.value_objects.tooth_info import Arch, Side, ToothRange

PERMANENT = [q * 10 + p for q in (1, 2, 3, 4) for p in range(1, 9)]
PRIMARY = [q * 10 + p for q in (5, 6, 7, 8) for p in range(1, 6)]


@pytest.fixture
def converter() -> ToothNumberingConverter:
    return ToothNumberingConverter()


class TestToFdi:
    @pytest.mark.parametrize("code", PERMANENT + PRIMARY)
    def test_valid_fdi_is_unchanged(self, converter: ToothNumberingConverter, code: int) -> None:
        assert converter.to_fdi(code) == code
        assert converter.to_fdi(str(code)) == code

    @pytest.mark.parametrize(
        ("universal", "fdi"),
        [(1, 18), (8, 11), (9, 21), (16, 28), (17, 38), (24, 31), (25, 41), (32, 48)],
    )
    def test_universal_numbers(
        self, converter: ToothNumberingConverter, universal: int, fdi: int
    ) -> None:
        assert converter.to_fdi(universal) == fdi

    @pytest.mark.parametrize(
        ("text", "fdi"),
        [
            ("UR3", 13),
            ("ul1", 21),
            ("LL 5", 35),
            ("LR8", 48),
            ("2.3", 23),
            ("4-6", 46),
            (" 3 . 7 ", 37),
        ],
    )
    def test_quadrant_and_dotted_notation(
        self, converter: ToothNumberingConverter, text: str, fdi: int
    ) -> None:
        assert converter.to_fdi(text) == fdi

    def test_primary_letters(self, converter: ToothNumberingConverter) -> None:
        assert converter.to_fdi("A") == 55
        assert converter.to_fdi("e") == 51
        assert converter.to_fdi("J") == 65
        assert converter.to_fdi("K") == 75
        assert converter.to_fdi("T") == 85

    def test_embedded_digits_are_a_last_resort(self, converter: ToothNumberingConverter) -> None:
        assert converter.to_fdi("tooth 16") == 16
        assert converter.to_fdi("#8") == 11

    def test_integral_float(self, converter: ToothNumberingConverter) -> None:
        assert converter.to_fdi(11.0) == 11

    @pytest.mark.parametrize("value", [None, True, 0, 99, 12.5, "", "xyz", [11], {"fdi": 11}])
    def test_unresolvable_returns_none(
        self, converter: ToothNumberingConverter, value: object
    ) -> None:
        assert converter.to_fdi(value) is None

    @pytest.mark.parametrize("text", ["UR9", "UR38", "LL0", "ul 12", "2.9", "4-0"])
    def test_malformed_shorthand_does_not_fall_back_to_digits(
        self, converter: ToothNumberingConverter, text: str
    ) -> None:
        assert converter.to_fdi(text) is None

    def test_words_starting_with_quadrant_letters_still_use_digits(
        self, converter: ToothNumberingConverter
    ) -> None:
        assert converter.to_fdi("upper 16") == 16

    def test_module_shortcut(self) -> None:
        assert resolve_tooth("UR3") == 13


class TestInverseConversions:
    @pytest.mark.parametrize("code", PERMANENT + PRIMARY)
    def test_universal_round_trip(self, converter: ToothNumberingConverter, code: int) -> None:
        universal = converter.fdi_to_universal(code)
        assert universal is not None
        assert converter.universal_to_fdi(universal) == code

    def test_universal_is_bijective_over_permanent(
        self, converter: ToothNumberingConverter
    ) -> None:
        numbers = {converter.fdi_to_universal(code) for code in PERMANENT}
        assert numbers == set(range(1, 33))

    def test_unknown_codes(self, converter: ToothNumberingConverter) -> None:
        assert converter.fdi_to_universal(19) is None
        assert converter.universal_to_fdi(33) is None
        assert converter.universal_to_fdi("Z") is None
        assert converter.fdi_to_palmer(90) is None

    def test_palmer(self, converter: ToothNumberingConverter) -> None:
        assert converter.fdi_to_palmer(13) == "UR3"
        assert converter.fdi_to_palmer(26) == "UL6"
        assert converter.fdi_to_palmer(74) == "LL4"


class TestDescribe:
    def test_permanent_tooth(self, converter: ToothNumberingConverter) -> None:
        tooth = converter.describe(36)

        assert tooth is not None
        assert tooth.arch == Arch.MANDIBULAR
        assert tooth.side == Side.LEFT
        assert tooth.class_name == "first molar"
        assert tooth.universal == 19
        assert not tooth.is_primary
        assert tooth.name == "Mandibular left first molar"

    def test_primary_tooth(self, converter: ToothNumberingConverter) -> None:
        tooth = converter.describe(53)

        assert tooth is not None
        assert tooth.is_primary
        assert tooth.universal == "C"
        assert tooth.quadrant_label == "UR"

    def test_invalid_code(self, converter: ToothNumberingConverter) -> None:
        assert converter.describe(10) is None
        assert not converter.is_valid_fdi(10)
        assert converter.is_valid_fdi(85)

    def test_format_short(self, converter: ToothNumberingConverter) -> None:
        assert converter.format_short(11) == "UR1 • #8"
        assert converter.format_short(55) == "UR5 • A"
        assert converter.format_short(99) == ""

    def test_list_teeth(self, converter: ToothNumberingConverter) -> None:
        assert len(converter.list_teeth(ToothRange.PERMANENT)) == 32
        assert len(converter.list_teeth(ToothRange.PRIMARY)) == 20
        teeth = converter.list_teeth()
        assert len(teeth) == 52
        assert [t.fdi for t in teeth] == sorted(t.fdi for t in teeth)
