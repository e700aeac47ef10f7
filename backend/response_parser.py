"""Locate and parse the JSON payload inside free-text model output."""

import json
import re
from typing import Any, NamedTuple

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)

PARSE_OK = "ok"
PARSE_MISSING = "missing"
PARSE_INVALID = "invalid"


class ParseResult(NamedTuple):
    status: str
    value: Any = None
    candidate: str = ""


def extract_json_candidate(text: str | None) -> str | None:
    """
    Return the most likely JSON substring of `text`, or None if there is none.

    Rules, first match wins:
    1. interior of a ```json fenced block
    2. the whole trimmed text when it starts with "{" or "["
    3. the span from the first "{" to the last "}"
    """
    if not text:
        return None

    fenced = _FENCED_JSON.search(text)
    if fenced and fenced.group(1).strip():
        return fenced.group(1).strip()

    stripped = text.strip()
    if stripped.startswith(("{", "[")):
        return stripped

    start = stripped.find("{")
    end = stripped.rfind("}")
    if start != -1 and end > start:
        return stripped[start : end + 1].strip()

    return None


def _escape_inner_quotes(value: str) -> str:
    """
    Escape likely unescaped quotes inside JSON strings.
    Keeps closing quotes intact by checking the next non-space token.
    """
    out: list[str] = []
    in_string = False
    escaped = False
    length = len(value)

    for i, ch in enumerate(value):
        if escaped:
            out.append(ch)
            escaped = False
            continue

        if ch == "\\":
            out.append(ch)
            escaped = True
            continue

        if ch != '"':
            out.append(ch)
            continue

        if not in_string:
            in_string = True
            out.append(ch)
            continue

        j = i + 1
        while j < length and value[j].isspace():
            j += 1
        next_char = value[j] if j < length else ""

        # Valid string-close chars in JSON: key close before ":", value close before ",", "}", "]"
        if next_char in {":", ",", "}", "]", ""}:
            in_string = False
            out.append(ch)
        else:
            out.append('\\"')

    return "".join(out)


def _repair_json(candidate: str) -> str:
    replaced = (
        candidate
        .replace("“", '"')
        .replace("”", '"')
        .replace("‘", "'")
        .replace("’", "'")
    )
    return _escape_inner_quotes(replaced)


def parse_model_output(text: str | None) -> ParseResult:
    """Extract and decode the JSON payload. Never raises."""
    candidate = extract_json_candidate(text)
    if candidate is None:
        return ParseResult(PARSE_MISSING)

    try:
        return ParseResult(PARSE_OK, json.loads(candidate), candidate)
    except ValueError:
        pass

    try:
        return ParseResult(PARSE_OK, json.loads(_repair_json(candidate)), candidate)
    except ValueError as e:
        print("CLAUDE PARSE: invalid JSON candidate:", str(e))
        return ParseResult(PARSE_INVALID, None, candidate)
