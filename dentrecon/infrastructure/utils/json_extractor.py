import json
import re
from typing import Any

_FENCE = re.compile(r"```[a-zA-Z]*\s*\n(.*?)```", re.DOTALL)


def extract_json(text: str) -> Any:
    """Parse the JSON document embedded in generator output.

    Handles a bare document, a fenced code block (```json ... ```), and a
    document surrounded by prose. Raises ``json.JSONDecodeError`` when no
    candidate parses.
    """
    text = text.strip()

    fenced = _FENCE.search(text)
    if fenced:
        return json.loads(fenced.group(1))

    obj_start = text.find("{")
    arr_start = text.find("[")
    if arr_start != -1 and (obj_start == -1 or arr_start < obj_start):
        end = text.rfind("]") + 1
        if end > arr_start:
            text = text[arr_start:end]
    elif obj_start != -1:
        end = text.rfind("}") + 1
        if end > obj_start:
            text = text[obj_start:end]

    return json.loads(text)
