import re

_LINE_SPLIT = re.compile(r"\r?\n|;")
# "1. a 2. b", "a. - b", "· a", "- a"
_ITEM_SPLIT = re.compile(r"\s(?=\d+\.)|(?<=\.)\s+-\s+|·\s+|-\s+")


def split_critique(text: str | None) -> list[str]:
    """Break free-text clinician feedback into separate items.

    Multi-line or semicolon separated text splits on those; a single line
    falls back to numbered-item and bullet boundaries.
    """
    if not text:
        return []
    lines = [part.strip() for part in _LINE_SPLIT.split(text)]
    lines = [line for line in lines if line]
    if len(lines) != 1:
        return lines
    items = (part.strip() for part in _ITEM_SPLIT.split(lines[0]))
    return [item for item in items if item]
