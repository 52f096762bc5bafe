"""Unit tests for magentaa11y.fuzzy."""

from __future__ import annotations

import pytest

from magentaa11y.fuzzy import COVERAGE_PENALTY, IndexedField, QueryMatcher, tokenize


class TestTokenize:
    def test_splits_on_non_alphanumerics(self) -> None:
        assert tokenize("Radio-Button (v2)") == ["radio", "button", "v2"]

    def test_empty(self) -> None:
        assert tokenize("  --  ") == []

    def test_keeps_non_ascii_letters(self) -> None:
        assert tokenize("Über-Schalter") == ["über", "schalter"]


class TestIndexedField:
    def test_terms_are_unique_and_ordered(self) -> None:
        field = IndexedField.from_text("gherkin", "Press Space, then press Enter")
        assert field.terms == ("press", "space", "then", "enter")

    def test_size_counts_unique_term_characters(self) -> None:
        assert IndexedField.from_text("label", "Radio Button").size == 11


class TestQueryMatcher:
    def test_exact_field_is_zero(self) -> None:
        field = IndexedField.from_text("label", "Button")
        assert QueryMatcher("BUTTON").distance(field) == 0.0

    def test_every_term_exact_is_zero(self) -> None:
        field = IndexedField.from_text("name", "radio-button")
        assert QueryMatcher("Radio Button").distance(field) == 0.0

    def test_containing_field_is_not_exact(self) -> None:
        field = IndexedField.from_text("label", "Radio Button")
        # "radio" (5 of 11 characters) is left unmatched
        assert QueryMatcher("button").distance(field) == pytest.approx(COVERAGE_PENALTY * 5 / 11)

    def test_exact_beats_containing(self) -> None:
        matcher = QueryMatcher("button")
        exact = matcher.distance(IndexedField.from_text("name", "button"))
        containing = matcher.distance(IndexedField.from_text("name", "radio-button"))
        assert exact < containing

    def test_typo_is_close(self) -> None:
        field = IndexedField.from_text("name", "checkbox")
        # one edit in eight characters, and checkbox is 7/8 covered
        assert QueryMatcher("chekbox").distance(field) == pytest.approx(1 / 8 + COVERAGE_PENALTY / 8)

    def test_short_fragment_does_not_match_long_term(self) -> None:
        field = IndexedField.from_text("name", "navigation-menu")
        assert QueryMatcher("on").distance(field) > 0.3

    def test_unrelated_is_far(self) -> None:
        field = IndexedField.from_text("name", "checkbox")
        assert QueryMatcher("zzzz").distance(field) == 1.0

    def test_punctuation_only_query(self) -> None:
        field = IndexedField.from_text("name", "checkbox")
        assert QueryMatcher("!!!").distance(field) == 1.0

    def test_multi_term_distance_is_weighted_by_term_length(self) -> None:
        field = IndexedField.from_text("label", "Radio Button")
        # "rdaio" needs two edits against "radio"; "button" is exact.
        expected = 2 / 11 + COVERAGE_PENALTY * (1 - (5 * 0.6 + 6) / 11)
        assert QueryMatcher("rdaio button").distance(field) == pytest.approx(expected)

    def test_prose_mention_matches_within_threshold(self) -> None:
        field = IndexedField.from_text("generalNotes", "A text input is often submitted with a button.")
        distance = QueryMatcher("button").distance(field)
        assert 0.0 < distance <= COVERAGE_PENALTY
