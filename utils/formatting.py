import json
from typing import Any


def format_json_response(data: Any) -> str:
    """Formats data as a pretty-printed JSON string."""
    return json.dumps(data, indent=2, default=str)


def create_side_by_side(original: str, formatted: str) -> str:
    """Creates a plain text block showing the raw SQL above its formatted form."""
    return f"Original:\n{original}\n\nFormatted:\n{formatted}"
