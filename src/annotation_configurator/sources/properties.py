"""Parsers for the key/value text formats accepted as property sources."""

from __future__ import annotations

import io
from typing import Callable, Iterator

from dotenv.parser import parse_stream

_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
_COMMENT_MARKERS = "#!"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertySyntaxError(ValueError):
    """Raised for malformed escapes in properties text."""


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` text into a flat mapping.

    Later occurrences of a key replace earlier ones. Values keep their trailing
    whitespace; no interpolation is performed.
    """
    values: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        values[_unescape(key)] = _unescape(value)
    return values


def parse_dotenv(text: str) -> dict[str, str]:
    """Parse ``.env`` text; keys declared without ``=`` map to an empty string."""
    values: dict[str, str] = {}
    for binding in parse_stream(io.StringIO(text)):
        if binding.error:
            raise PropertySyntaxError(
                f"Could not parse statement starting at line {binding.original.line}"
            )
        if binding.key is not None:
            values[binding.key] = binding.value if binding.value is not None else ""
    return values


def parser_for(name: str) -> Callable[[str], dict[str, str]]:
    if name.endswith(".env"):
        return parse_dotenv
    return parse_properties


def _logical_lines(text: str) -> Iterator[str]:
    pending: str | None = None
    for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in _COMMENT_MARKERS:
                continue
        if _continues(line):
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending:
        yield pending


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest[:1] and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(value: str) -> str:
    if "\\" not in value:
        return value
    out: list[str] = []
    index = 0
    length = len(value)
    while index < length:
        char = value[index]
        if char != "\\":
            out.append(char)
            index += 1
            continue
        index += 1
        if index >= length:
            break
        char = value[index]
        if char == "u":
            digits = value[index + 1 : index + 5]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise PropertySyntaxError(f"Malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            index += 5
            continue
        out.append(_ESCAPES.get(char, char))
        index += 1
    return "".join(out)
