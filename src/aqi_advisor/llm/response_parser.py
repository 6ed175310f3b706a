"""Extract the JSON payload from free-form model output."""
from __future__ import annotations
import json
import re

from ..errors import ExtractionFailedError, ParseFailedError

_FENCED_BLOCK = re.compile(r"```[ \t]*(?:[A-Za-z0-9_+-]+)?[ \t]*\n?(.*?)```", re.DOTALL)


def find_balanced_object(text: str) -> str | None:
    """Return the span from the first ``{`` to the brace that closes it.

    Braces inside JSON string literals are ignored. When the object never
    closes, the span runs to the last ``}`` instead.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    end = text.rfind("}")
    if end > start:
        return text[start:end + 1]
    return None


def extract_json_from_response(text: str) -> dict:
    """Extract the recommendation JSON object from model output.

    Strategies in order:
    1. Body of a fenced code block (``` or ```json)
    2. First { to its matching }

    Raises ``ExtractionFailedError`` when neither strategy finds a candidate
    span and ``ParseFailedError`` when the spans found are not a usable JSON
    object.
    """
    text = (text or "").strip()
    candidates: list[str] = []

    fenced = _FENCED_BLOCK.search(text)
    if fenced and fenced.group(1).strip():
        candidates.append(fenced.group(1).strip())

    braced = find_balanced_object(text)
    if braced and braced not in candidates:
        candidates.append(braced)

    if not candidates:
        raise ExtractionFailedError(f"No JSON found in response: {text[:200]}...")

    last_error = "not a JSON object"
    for span in candidates:
        try:
            payload = json.loads(span)
        except json.JSONDecodeError as e:
            last_error = str(e)
            continue
        if not isinstance(payload, dict):
            last_error = f"top level is {type(payload).__name__}, expected object"
            continue
        if "recommendations" in payload and not isinstance(payload["recommendations"], dict):
            last_error = "'recommendations' is not an object"
            continue
        return payload

    raise ParseFailedError(f"Could not parse JSON from response ({last_error}): {text[:200]}...")
