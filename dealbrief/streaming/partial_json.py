"""Permissive field scanning over a JSON document that is still streaming."""

import re

# Minimal unescaping for live preview; the final parse handles the rest.
_PREVIEW_ESCAPES = {"n": "\n", '"': '"'}


def _key_pattern(field: str) -> re.Pattern[str]:
    return re.compile(r'"' + re.escape(field) + r'"\s*:\s*"')


def extract_partial_field(buffer: str, field: str) -> str:
    """Return the best-effort value of string ``field`` in ``buffer``.

    The value ends at the first unescaped double quote, or at the end of the
    buffer while the string is still being written. Never raises.
    """
    match = _key_pattern(field).search(buffer)
    if match is None:
        return ""

    chars: list[str] = []
    index = match.end()
    length = len(buffer)
    while index < length:
        char = buffer[index]
        if char == "\\":
            if index + 1 >= length:
                # Escape cut off by the stream; wait for its second half.
                break
            escaped = buffer[index + 1]
            chars.append(_PREVIEW_ESCAPES.get(escaped, char + escaped))
            index += 2
            continue
        if char == '"':
            break
        chars.append(char)
        index += 1
    return "".join(chars)
