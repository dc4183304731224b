from typing import TypeVar

from pydantic import BaseModel

from dentrecon.infrastructure.utils.json_extractor import extract_json

T = TypeVar("T")


def parse_ai_json(
    text: str,
    fallback: T,
    model: type[BaseModel] | None = None,
) -> T:
    """Parsed (and optionally validated) generator output, or ``fallback``.

    A malformed response never fails a report; callers degrade to an empty
    document instead.
    """
    try:
        data = extract_json(text)
        if model is not None:
            return model.model_validate(data)  # type: ignore[return-value]
        return data  # type: ignore[no-any-return]
    except Exception:
        return fallback
