"""Parsing of JSON answers returned by the generative models."""

import json
import re
from typing import Any

from garden_shared.errors import UpstreamParseError

_FENCE_JSON = re.compile(r"```json\s*")
_FENCE = re.compile(r"```\s*")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences models wrap around JSON, then trim."""
    return _FENCE.sub("", _FENCE_JSON.sub("", text)).strip()


def parse_model_json(text: str) -> dict[str, Any]:
    """
    Decode a model answer that should be a single JSON object.

    Raises:
        UpstreamParseError: If the text is not valid JSON or not an object
    """
    cleaned = strip_code_fences(text or "")
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise UpstreamParseError("Model response is not valid JSON", details={"reason": str(e)}) from e

    if not isinstance(parsed, dict):
        raise UpstreamParseError("Model response is not a JSON object")
    return parsed
