"""Dotenv document decoder.

Parses the text of one environment file into an insertion-ordered mapping.

Supported grammar:
    # comment lines and blank lines are skipped
    KEY=value                 unquoted, trailing " # comment" stripped
    export KEY=value          leading export keyword is dropped
    KEY="a\\nb"               double quotes: \\n \\r \\t \\" \\\\ are unescaped
    KEY='a\\nb'               single quotes: fully literal
    KEY=first \\              trailing backslash joins the next line
        second

Malformed lines (no "=", invalid key) are skipped. Decoding never raises.
"""

import re
from typing import Any, Dict

EnvironmentMap = Dict[str, str]

VALID_ENV_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_EXPORT_PREFIX = re.compile(r"^export\s+(.*)$", re.DOTALL)

# Applied in order over the whole inner string of a double-quoted value
_DOUBLE_QUOTE_ESCAPES = (
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ('\\"', '"'),
    ("\\\\", "\\"),
)


def is_valid_key(key: Any) -> bool:
    """Return True if key is usable as an environment variable name."""
    return isinstance(key, str) and VALID_ENV_KEY.match(key) is not None


def _find_closing_quote(value: str, quote: str) -> int:
    """Index of the first unescaped quote after position 0, or -1."""
    i = 1
    while i < len(value):
        if value[i] == "\\" and i + 1 < len(value):
            i += 2
            continue
        if value[i] == quote:
            return i
        i += 1
    return -1


def decode_value(raw: Any) -> str:
    """Decode the right-hand side of an assignment.

    An unterminated quote returns the trimmed input unchanged, opening
    quote included.
    """
    if not isinstance(raw, str):
        return ""
    value = raw.strip()

    if value.startswith('"'):
        end = _find_closing_quote(value, '"')
        if end == -1:
            return value
        inner = value[1:end]
        for escaped, literal in _DOUBLE_QUOTE_ESCAPES:
            inner = inner.replace(escaped, literal)
        return inner

    if value.startswith("'"):
        end = _find_closing_quote(value, "'")
        if end == -1:
            return value
        return value[1:end]

    comment_at = value.find(" #")
    if comment_at != -1:
        value = value[:comment_at]
    return value.strip()


def decode(content: Any) -> EnvironmentMap:
    """Parse dotenv content into a mapping of variable names to values.

    Later assignments to the same key win. Non-string content yields an
    empty mapping.
    """
    result: EnvironmentMap = {}
    if not isinstance(content, str):
        return result

    lines = content.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1

        if not line or line.startswith("#"):
            continue

        while line.endswith("\\") and i < len(lines):
            line = line[:-1] + lines[i]
            i += 1

        export = _EXPORT_PREFIX.match(line)
        if export:
            line = export.group(1)

        key, sep, raw_value = line.partition("=")
        if not sep:
            continue

        key = key.strip()
        value = decode_value(raw_value)
        if key and is_valid_key(key):
            result[key] = value

    return result


class DotenvDecoder:
    """Object facade over decode() for callers that inject a decoder."""

    def decode(self, content: Any) -> EnvironmentMap:
        return decode(content)

    def decode_value(self, raw: Any) -> str:
        return decode_value(raw)


__all__ = [
    "EnvironmentMap",
    "VALID_ENV_KEY",
    "DotenvDecoder",
    "decode",
    "decode_value",
    "is_valid_key",
]
