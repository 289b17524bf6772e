"""Strict-then-recovering JSON parse of a completed generation stream.

Recovery strategies, tried in order until one parses:
1. Prefix up to the offset where the strict decoder stopped.
2. Markdown code fences stripped (optionally tagged ``json``).
3. First ``{`` to last ``}``.
4. First ``[`` to last ``]``.
5. First balanced-looking ``{...}`` or ``[...]`` span found by regex.
"""

import json
import re
from collections.abc import Callable
from typing import Any

from dealbrief.logging.logger import Log
from dealbrief.streaming.exceptions import StreamParseError

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?(.*?)\n?[ \t]*```", re.DOTALL | re.IGNORECASE)
_OPEN_FENCE_RE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_SPAN_RE = re.compile(r"\{[^{}]*\}|\[[^\[\]]*\]", re.DOTALL)


def _error_prefix(buffer: str, error: json.JSONDecodeError) -> str | None:
    if error.pos <= 0:
        return None
    return buffer[:error.pos]


def _strip_fences(buffer: str) -> str | None:
    stripped = buffer.strip()
    match = _FENCE_RE.search(stripped)
    if match is not None:
        return match.group(1)
    if stripped.startswith("```"):
        return _OPEN_FENCE_RE.sub("", stripped, count=1)
    return None


def _slice_between(buffer: str, opening: str, closing: str) -> str | None:
    start = buffer.find(opening)
    end = buffer.rfind(closing)
    if start == -1 or end <= start:
        return None
    return buffer[start:end + 1]


def _first_span(buffer: str) -> str | None:
    match = _SPAN_RE.search(buffer)
    return match.group(0) if match is not None else None


_Strategy = Callable[[str], str | None]

_STRATEGIES: list[tuple[str, _Strategy]] = [
    ("code fences", _strip_fences),
    ("object slice", lambda buffer: _slice_between(buffer, "{", "}")),
    ("array slice", lambda buffer: _slice_between(buffer, "[", "]")),
    ("first span", _first_span),
]


def _try_parse(candidate: str | None) -> tuple[bool, Any]:
    if candidate is None or not candidate.strip():
        return False, None
    try:
        return True, json.loads(candidate)
    except json.JSONDecodeError:
        return False, None


def parse_final(buffer: str) -> Any:
    """Parse the full buffer of a finished stream.

    Raises:
        StreamParseError: if the strict parse and every recovery strategy fail.
    """
    try:
        return json.loads(buffer)
    except json.JSONDecodeError as exc:
        strict_error = exc

    parsed, value = _try_parse(_error_prefix(buffer, strict_error))
    if parsed:
        Log.debug(f"Recovered stream JSON via decoder offset {strict_error.pos}")
        return value

    for name, strategy in _STRATEGIES:
        parsed, value = _try_parse(strategy(buffer))
        if parsed:
            Log.debug(f"Recovered stream JSON via {name}")
            return value

    raise StreamParseError(f"failed to parse structured response: {strict_error}")
