from __future__ import annotations

import json
from typing import Any, Literal

JsonKind = Literal["object", "array"]

_BRACKETS: dict[str, tuple[str, str]] = {"object": ("{", "}"), "array": ("[", "]")}


def find_balanced_json(content: str, kind: JsonKind = "object") -> str | None:
    """Return the first balanced JSON object or array embedded in ``content``.

    Brackets inside string literals are ignored and backslash escapes are honoured,
    so prose around the JSON or braces inside values do not confuse the scan.
    """
    open_char, close_char = _BRACKETS[kind]
    start = (content or "").find(open_char)
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape_next = False
    for position in range(start, len(content)):
        char = content[position]
        if escape_next:
            escape_next = False
            continue
        if char == "\\":
            escape_next = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return content[start : position + 1]
    return None


def safe_parse_json(content: str) -> Any | None:
    try:
        return json.loads(content)
    except (TypeError, ValueError):
        return None


def extract_json_from_response(content: str, kind: JsonKind = "object") -> Any | None:
    raw = find_balanced_json(content, kind)
    if raw is None:
        return None
    return safe_parse_json(raw)
