# tests/unit/core/test_unit_text.py — v1
"""Tests for core/text.py — normalization, truncation and hashing helpers."""

from __future__ import annotations

from versus.core.text import (
    TRUNCATION_SUFFIX,
    normalize_text,
    sha256,
    strip_ansi,
    strip_overstrikes,
    truncate,
    truncate_at_word_boundary,
    visible_width,
)


class TestNormalizeText:
    def test_unifies_line_endings(self):
        assert normalize_text("a\r\nb\rc") == "a\nb\nc"

    def test_strips_ansi(self):
        assert normalize_text("\x1b[1mBold\x1b[0m text") == "Bold text"

    def test_strips_overstrikes(self):
        assert normalize_text("N\x08NA\x08AM\x08ME\x08E") == "NAME"
        assert normalize_text("_\x08f_\x08o_\x08o") == "foo"

    def test_collapses_blank_runs(self):
        assert normalize_text("a\n\n\n\n\nb") == "a\n\nb"

    def test_keeps_single_blank_line(self):
        assert normalize_text("a\n\nb") == "a\n\nb"

    def test_collapses_horizontal_space(self):
        assert normalize_text("a    b\t\tc") == "a b c"

    def test_trims(self):
        assert normalize_text("   \n hello \n\n ") == "hello"

    def test_none_and_empty(self):
        assert normalize_text(None) == ""
        assert normalize_text("") == ""
        assert normalize_text(" \n\t ") == ""


class TestStripHelpers:
    def test_strip_ansi_colors(self):
        assert strip_ansi("\x1b[31;1mred\x1b[0m") == "red"

    def test_strip_ansi_leaves_plain(self):
        assert strip_ansi("plain [text]") == "plain [text]"

    def test_strip_overstrikes_only_pairs(self):
        assert strip_overstrikes("ab\x08c") == "ac"


class TestTruncate:
    def test_no_truncation_when_within_budget(self):
        assert truncate("abcdef", 10) == "abcdef"
        assert truncate("abcdef", 6) == "abcdef"

    def test_hard_cut_with_suffix(self):
        assert truncate("abcdef", 3) == "abc" + TRUNCATION_SUFFIX

    def test_nonpositive_budget_is_empty(self):
        assert truncate("abcdef", 0) == ""
        assert truncate("abcdef", -5) == ""

    def test_none_input(self):
        assert truncate(None, 10) == ""

    def test_custom_suffix(self):
        assert truncate("abcdef", 2, suffix="…") == "ab…"


class TestTruncateAtWordBoundary:
    def test_cuts_at_last_space(self):
        result = truncate_at_word_boundary("hello brave new world", 12, suffix="…")
        assert result == "hello brave…"

    def test_boundary_exactly_after_budget(self):
        # The space right after the budget still counts as a boundary.
        assert truncate_at_word_boundary("hello world", 5, suffix="…") == "hello…"

    def test_single_long_token_hard_cut(self):
        assert truncate_at_word_boundary("abcdefghij", 4, suffix="…") == "abcd…"

    def test_sentence_cut_on_word(self):
        assert truncate_at_word_boundary("hello world this is a test", 10, suffix="") == "hello"

    def test_single_word_hard_cut(self):
        assert truncate_at_word_boundary("supercalifragilisticexpialidocious", 5, suffix="") == "super"

    def test_within_budget_unchanged(self):
        assert truncate_at_word_boundary("short text", 50) == "short text"


class TestHashingAndWidth:
    def test_sha256_known_value(self):
        assert sha256("") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_sha256_is_hex_64(self):
        digest = sha256("versus")
        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)

    def test_visible_width_ignores_ansi(self):
        assert visible_width("\x1b[1mabc\x1b[0m") == 3

    def test_visible_width_wide_chars(self):
        assert visible_width("日本") == 4
