"""LLM response utilities for the classifier."""

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```), if any.

    Text that is not wrapped in a fence is returned stripped but otherwise
    unchanged.
    """
    match = _FENCE_RE.match(text or "")
    if match:
        return match.group(1).strip()
    return (text or "").strip()


def parse_json_response(text: str) -> Any:
    """Strip code fences and parse the remainder as strict JSON.

    Unlike a lenient extractor this does not hunt for an embedded object in
    surrounding prose: anything other than a (fenced) JSON document fails.

    Raises:
        json.JSONDecodeError: If the unfenced text is not valid JSON.
    """
    return json.loads(strip_code_fences(text))
