import re

from loguru import logger

from dentrecon.domain.value_objects.tooth_info import Arch, Side, ToothInfo, ToothRange

_PERMANENT_CLASS = {
    1: "central incisor",
    2: "lateral incisor",
    3: "canine",
    4: "first premolar",
    5: "second premolar",
    6: "first molar",
    7: "second molar",
    8: "third molar",
}

_PRIMARY_CLASS = {
    1: "primary central incisor",
    2: "primary lateral incisor",
    3: "primary canine",
    4: "primary first molar",
    5: "primary second molar",
}

# quadrant -> (arch, side, palmer prefix); primary quadrants 5-8 mirror 1-4
_QUADRANTS = {
    1: (Arch.MAXILLARY, Side.RIGHT, "UR"),
    2: (Arch.MAXILLARY, Side.LEFT, "UL"),
    3: (Arch.MANDIBULAR, Side.LEFT, "LL"),
    4: (Arch.MANDIBULAR, Side.RIGHT, "LR"),
}

_PALMER_QUADRANT = {"UR": 1, "UL": 2, "LL": 3, "LR": 4}

# Universal numbering runs 1-32 from the upper right third molar clockwise
# as seen facing the patient.
_UNIVERSAL_BY_FDI: dict[int, int] = {
    **{10 + p: 9 - p for p in range(1, 9)},
    **{20 + p: 8 + p for p in range(1, 9)},
    **{30 + p: 25 - p for p in range(1, 9)},
    **{40 + p: 24 + p for p in range(1, 9)},
}
_FDI_BY_UNIVERSAL = {u: f for f, u in _UNIVERSAL_BY_FDI.items()}

# Primary dentition uses letters A-T in the same clockwise order.
_UNIVERSAL_LETTER_BY_FDI: dict[int, str] = {
    **{50 + p: "ABCDE"[5 - p] for p in range(1, 6)},
    **{60 + p: "FGHIJ"[p - 1] for p in range(1, 6)},
    **{70 + p: "KLMNO"[5 - p] for p in range(1, 6)},
    **{80 + p: "PQRST"[p - 1] for p in range(1, 6)},
}
_FDI_BY_UNIVERSAL_LETTER = {u: f for f, u in _UNIVERSAL_LETTER_BY_FDI.items()}

_PALMER_PATTERN = re.compile(r"(UR|UL|LL|LR)\s*([1-8])", re.IGNORECASE)
# strings shaped like shorthand or dotted notation never fall back to digit search
_PALMER_PREFIX = re.compile(r"^(UR|UL|LL|LR)(?![a-z])", re.IGNORECASE)
_DOTTED_PREFIX = re.compile(r"^[1-4]\s*[.\-]\s*\d")
_DOTTED_PATTERN = re.compile(r"^([1-4])\s*[.\-]\s*([1-8])$")
_DIGITS_PATTERN = re.compile(r"\d+")


def _build_index() -> dict[int, ToothInfo]:
    index: dict[int, ToothInfo] = {}
    for quadrant, (arch, side, palmer) in _QUADRANTS.items():
        for position, class_name in _PERMANENT_CLASS.items():
            fdi = quadrant * 10 + position
            index[fdi] = ToothInfo(
                fdi=fdi,
                universal=_UNIVERSAL_BY_FDI[fdi],
                palmer=f"{palmer}{position}",
                arch=arch,
                side=side,
                class_name=class_name,
                is_primary=False,
                position=position,
            )
        for position, class_name in _PRIMARY_CLASS.items():
            fdi = (quadrant + 4) * 10 + position
            index[fdi] = ToothInfo(
                fdi=fdi,
                universal=_UNIVERSAL_LETTER_BY_FDI[fdi],
                palmer=f"{palmer}{position}",
                arch=arch,
                side=side,
                class_name=class_name,
                is_primary=True,
                position=position,
            )
    return dict(sorted(index.items()))


_TEETH = _build_index()


class ToothNumberingConverter:
    """Resolves tooth identities written in any supported notation to FDI."""

    def is_valid_fdi(self, code: int) -> bool:
        return code in _TEETH

    def to_fdi(self, value: object) -> int | None:
        """Canonical FDI code for ``value``, or None when it cannot be resolved.

        Accepts FDI codes, universal 1-32, primary universal letters A-T,
        quadrant-letter shorthand ("UR3") and dotted notation ("2.3", "2-3").
        As a last resort the first run of digits in a string is tried, except
        for strings that start like shorthand or dotted notation.
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, int | float):
            return self._from_number(float(value))
        if not isinstance(value, str):
            return None

        text = value.strip()
        if text.isdigit():
            return self._from_number(float(text))

        match = _PALMER_PATTERN.fullmatch(text)
        if match:
            return _PALMER_QUADRANT[match.group(1).upper()] * 10 + int(match.group(2))

        match = _DOTTED_PATTERN.match(text)
        if match:
            return int(match.group(1)) * 10 + int(match.group(2))

        if len(text) == 1 and text.upper() in _FDI_BY_UNIVERSAL_LETTER:
            return _FDI_BY_UNIVERSAL_LETTER[text.upper()]

        if _PALMER_PREFIX.match(text) or _DOTTED_PREFIX.match(text):
            logger.debug("Malformed quadrant or dotted tooth: {!r}", value)
            return None

        match = _DIGITS_PATTERN.search(text)
        if match:
            return self._from_number(float(match.group(0)))

        logger.debug("Unresolvable tooth identity: {!r}", value)
        return None

    def _from_number(self, number: float) -> int | None:
        if not number.is_integer():
            return None
        code = int(number)
        if code in _TEETH:
            return code
        return _FDI_BY_UNIVERSAL.get(code)

    def fdi_to_universal(self, code: int) -> int | str | None:
        tooth = _TEETH.get(code)
        return tooth.universal if tooth else None

    def universal_to_fdi(self, value: int | str) -> int | None:
        if isinstance(value, str):
            return _FDI_BY_UNIVERSAL_LETTER.get(value.strip().upper())
        return _FDI_BY_UNIVERSAL.get(value)

    def fdi_to_palmer(self, code: int) -> str | None:
        tooth = _TEETH.get(code)
        return tooth.palmer if tooth else None

    def describe(self, code: int) -> ToothInfo | None:
        return _TEETH.get(code)

    def format_short(self, code: int) -> str:
        tooth = _TEETH.get(code)
        if not tooth:
            return ""
        if tooth.is_primary:
            return f"{tooth.palmer} • {tooth.universal}"
        return f"{tooth.palmer} • #{tooth.universal}"

    def list_teeth(self, tooth_range: ToothRange = ToothRange.ALL) -> list[ToothInfo]:
        teeth = list(_TEETH.values())
        if tooth_range == ToothRange.PERMANENT:
            return [t for t in teeth if not t.is_primary]
        if tooth_range == ToothRange.PRIMARY:
            return [t for t in teeth if t.is_primary]
        return teeth


_CONVERTER = ToothNumberingConverter()


def resolve_tooth(value: object) -> int | None:
    """Module-level shortcut for ``ToothNumberingConverter().to_fdi``."""
    return _CONVERTER.to_fdi(value)
