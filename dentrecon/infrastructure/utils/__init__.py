from dentrecon.infrastructure.utils.ai_json import parse_ai_json
from dentrecon.infrastructure.utils.json_extractor import extract_json

__all__ = ["extract_json", "parse_ai_json"]
