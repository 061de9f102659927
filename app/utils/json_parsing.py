"""
Tolerant JSON extraction for scraped pages and model output.
"""

import json
import re
from typing import Any, Dict, List, Optional


FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
TRAILING_COMMA_PATTERN = re.compile(r",\s*([}\]])")


def extract_balanced_json(text: str, start: int = 0) -> Optional[str]:
    """
    Return the brace-balanced JSON object beginning at the first '{' at or after start.

    Tracks string and escape state so braces inside string literals are ignored.

    Args:
        text: Text to scan
        start: Index to begin scanning from

    Returns:
        The object text, or None if no balanced object is found
    """
    begin = text.find("{", start)
    if begin == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(begin, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[begin:index + 1]
    return None


def find_json_after(text: str, marker: str) -> Optional[Dict[str, Any]]:
    """
    Locate marker in text and decode the JSON object that follows it.

    Args:
        text: Text to search, typically page HTML
        marker: Literal that precedes the object, e.g. a variable name

    Returns:
        Decoded object, or None if missing or undecodable
    """
    position = text.find(marker)
    while position != -1:
        index = position + len(marker)
        # Only assignment-like glue may sit between the marker and the object
        while index < len(text) and text[index] in " \t\r\n=:\"']":
            index += 1
        blob = extract_balanced_json(text, index) if text.startswith("{", index) else None
        if blob:
            try:
                value = json.loads(blob)
            except json.JSONDecodeError:
                value = None
            if isinstance(value, dict):
                return value
        position = text.find(marker, position + len(marker))
    return None


def strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede a closing bracket or brace."""
    return TRAILING_COMMA_PATTERN.sub(r"\1", text)


def _candidates(raw: str) -> List[str]:
    candidates = [raw]

    fence_match = FENCE_PATTERN.search(raw)
    if fence_match:
        candidates.append(fence_match.group(1).strip())

    first_brace = raw.find("{")
    last_brace = raw.rfind("}")
    if first_brace != -1 and first_brace < last_brace:
        candidates.append(raw[first_brace:last_brace + 1])

    seen = set()
    unique = []
    for candidate in candidates:
        if candidate and candidate not in seen:
            seen.add(candidate)
            unique.append(candidate)
    return unique


def parse_lenient_json(content: str) -> Dict[str, Any]:
    """
    Parse a JSON object out of model output that may not be clean JSON.

    Tries, in order: the raw text, a fenced ```json block, the slice from the
    first '{' to the last '}', and finally each of those with trailing commas
    removed.

    Args:
        content: Raw model output

    Returns:
        Decoded JSON object

    Raises:
        ValueError: if no candidate decodes to an object
    """
    raw = (content or "").strip()
    if not raw:
        raise ValueError("Empty content")

    candidates = _candidates(raw)
    for attempt in (candidates, [strip_trailing_commas(c) for c in candidates]):
        for candidate in attempt:
            try:
                value = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(value, dict):
                return value

    raise ValueError(f"Could not parse JSON object from content: {raw[:120]!r}")
