"""Tests for raw input parsing, the validity gate and autofill."""

from __future__ import annotations

from prismic_search.application.search import (
    apply_autofill,
    is_valid_query,
    last_segment,
    parse_query,
    suggest_fields,
)


class TestIsValidQuery:
    def test_requires_separator(self):
        assert is_valid_query("category: news")
        assert is_valid_query(":")
        assert not is_valid_query("hello")
        assert not is_valid_query("")

    def test_word_only_input_parses_to_nothing(self):
        assert parse_query("hello") == {}


class TestParseQuery:
    def test_two_pairs(self):
        assert parse_query("first_name: Mark, last_name: Lee") == {"first_name": "Mark", "last_name": "Lee"}

    def test_trims_whitespace(self):
        assert parse_query("  category :   news  ") == {"category": "news"}

    def test_preserves_order(self):
        assert list(parse_query("b: 1, a: 2, c: 3")) == ["b", "a", "c"]

    def test_value_keeps_extra_colons(self):
        assert parse_query("url: https://example.com") == {"url": "https://example.com"}

    def test_segment_without_separator_dropped(self):
        assert parse_query("category: news, oops") == {"category": "news"}

    def test_empty_key_dropped(self):
        assert parse_query(": news, title: x") == {"title": "x"}

    def test_empty_value_kept(self):
        assert parse_query("title:") == {"title": ""}

    def test_duplicate_key_last_value_first_position(self):
        result = parse_query("a: 1, b: 2, a: 3")
        assert result == {"a": "3", "b": "2"}
        assert list(result) == ["a", "b"]


class TestAutofill:
    def test_last_segment(self):
        assert last_segment("category: news,  auth") == "auth"
        assert last_segment("title") == "title"

    def test_suggest_matches_substrings(self, document_types):
        assert suggest_fields(document_types, "name") == ["first_name", "last_name"]

    def test_suggest_dedupes_in_discovery_order(self, document_types):
        assert suggest_fields(document_types, "category: news, t") == ["title", "category", "first_name", "last_name"]

    def test_suggest_empty_segment(self, document_types):
        assert suggest_fields(document_types, "category: news, ") == []

    def test_suggest_no_match(self, document_types):
        assert suggest_fields(document_types, "zzz") == []

    def test_apply_autofill_replaces_last_segment(self):
        assert apply_autofill("category: news, auth", "author") == "category: news,author:"

    def test_apply_autofill_single_segment(self):
        assert apply_autofill("cat", "category") == "category:"
