from __future__ import annotations

import pytest

from annotation_configurator.sources.properties import (
    PropertySyntaxError,
    parse_dotenv,
    parse_properties,
    parser_for,
)


def test_parses_pairs_and_skips_comments() -> None:
    text = "# comment\n! also a comment\n\nINT_SETTING=5\n   STRING_SETTING = hello\n"
    assert parse_properties(text) == {"INT_SETTING": "5", "STRING_SETTING": "hello"}


def test_accepts_colon_and_whitespace_separators() -> None:
    assert parse_properties("a: 1\nb 2\nc\t=\t3\n") == {"a": "1", "b": "2", "c": "3"}


def test_keeps_trailing_whitespace_in_values() -> None:
    assert parse_properties("name=value  \n")["name"] == "value  "


def test_key_without_value_maps_to_empty_string() -> None:
    assert parse_properties("flag\nother=\n") == {"flag": "", "other": ""}


def test_later_duplicate_key_wins() -> None:
    assert parse_properties("x=1\nx=2\n") == {"x": "2"}


def test_joins_continuation_lines() -> None:
    text = "LIST_SETTING=5,\\\n    55,\\\n    555\nNEXT=1\n"
    assert parse_properties(text) == {"LIST_SETTING": "5,55,555", "NEXT": "1"}


def test_escaped_trailing_backslash_is_not_a_continuation() -> None:
    assert parse_properties("path=C:\\\\\nnext=1\n") == {"path": "C:\\", "next": "1"}


def test_decodes_escapes() -> None:
    parsed = parse_properties("tab=a\\tb\nletter=\\u0041\na\\=b=c\n")
    assert parsed == {"tab": "a\tb", "letter": "A", "a=b": "c"}


def test_rejects_malformed_unicode_escape() -> None:
    with pytest.raises(PropertySyntaxError):
        parse_properties("broken=\\u00zz\n")


def test_handles_windows_line_endings() -> None:
    assert parse_properties("a=1\r\nb=2\r\n") == {"a": "1", "b": "2"}


def test_parse_dotenv_without_interpolation() -> None:
    parsed = parse_dotenv("A=1\n# comment\nexport B=two\nC\nD=${A}\n")
    assert parsed == {"A": "1", "B": "two", "C": "", "D": "${A}"}


def test_parse_dotenv_rejects_unparsable_statement() -> None:
    with pytest.raises(PropertySyntaxError, match="line 2"):
        parse_dotenv("A=1\nB='unterminated\nC=3\n")


def test_parser_for_selects_format_by_name() -> None:
    assert parser_for("local.env") is parse_dotenv
    assert parser_for(".env") is parse_dotenv
    assert parser_for("app.properties") is parse_properties
