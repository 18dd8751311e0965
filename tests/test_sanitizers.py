"""Tests for the sanitization primitives."""

import pytest

from governance.app.validation import (
    MAX_SAFE_INTEGER,
    escape_html,
    sanitize_multiline,
    sanitize_number,
    sanitize_string,
)


class TestSanitizeString:
    """Tests for single-line normalization."""

    def test_trims_and_collapses_whitespace(self):
        assert sanitize_string("  hello   \n  world  ") == "hello world"

    def test_removes_control_characters(self):
        assert sanitize_string("a\x00b\x07c\x7f") == "abc"

    def test_tabs_and_newlines_become_spaces(self):
        assert sanitize_string("one\ttwo\r\nthree") == "one two three"

    @pytest.mark.parametrize("value", [None, 42, 3.5, ["a"], {"a": 1}, b"bytes"])
    def test_non_strings_become_empty(self, value):
        assert sanitize_string(value) == ""

    @pytest.mark.parametrize(
        "value",
        ["  spaced  out  ", "ctrl\x01 \x02 chars", "\x00 \x00", "tab\t\t", "plain"],
    )
    def test_idempotent(self, value):
        once = sanitize_string(value)
        assert sanitize_string(once) == once


class TestSanitizeMultiline:
    """Tests for multi-line normalization."""

    def test_keeps_internal_newlines(self):
        assert sanitize_multiline("  line one\nline two  \n") == "line one\nline two"

    def test_removes_nul(self):
        assert sanitize_multiline("a\0b") == "ab"


class TestSanitizeNumber:
    """Tests for number parsing and clamping."""

    def test_floors_floats(self):
        assert sanitize_number(12.9) == 12

    def test_parses_leading_numeric_prefix(self):
        assert sanitize_number("12.9kg") == 12
        assert sanitize_number(" 7 ") == 7

    def test_clamps_into_range(self):
        assert sanitize_number(-5) == 0
        assert sanitize_number(20_000, 0, 10_000) == 10_000
        assert sanitize_number(3, min_value=5) == 5

    def test_integers_beyond_float_range_clamped(self):
        assert sanitize_number(10**400, 0, 10) == 10
        assert sanitize_number(-(10**400), 0, 10) == 0

    def test_huge_numeric_string_is_none(self):
        assert sanitize_number("1" + "0" * 400, 0, 10) is None

    def test_default_upper_bound(self):
        assert sanitize_number(10**20) == MAX_SAFE_INTEGER

    @pytest.mark.parametrize("value", [None, "", "abc", "kg12", True, False, [], float("nan")])
    def test_non_numeric_is_none(self, value):
        assert sanitize_number(value) is None

    @pytest.mark.parametrize("value", [float("inf"), "-Infinity", "1e400"])
    def test_non_finite_is_none(self, value):
        assert sanitize_number(value) is None


class TestEscapeHtml:
    """Tests for display-time HTML escaping."""

    def test_escapes_markup(self):
        assert (
            escape_html("<script>alert('x')</script>")
            == "&lt;script&gt;alert(&#x27;x&#x27;)&lt;&#x2F;script&gt;"
        )

    def test_escapes_ampersand_and_quotes(self):
        assert escape_html('Tom & "Jerry"') == "Tom &amp; &quot;Jerry&quot;"

    def test_plain_text_unchanged(self):
        assert escape_html("Space Marines") == "Space Marines"


class TestDocumentedExamples:
    """Worked examples for the sanitizers."""

    def test_nul_removed_and_trimmed(self):
        assert sanitize_string("  a\u0000b  ") == "ab"

    def test_numeric_string_clamped(self):
        assert sanitize_number("12.9", 0, 10) == 10

    def test_non_numeric_string(self):
        assert sanitize_number("abc", 0, 10) is None
