"""
Tests for the best-match resolver.
"""
import pytest

from prep_kitchen import config
from prep_kitchen.matching import (
    CONFIDENCE_LABELS,
    CatalogEntry,
    MatchConfidence,
    find_best_match,
    is_selected_by_default,
    resolve_names,
)


RIBEYE = [CatalogEntry(id="1", name="Ribeye Steak")]


class TestResolverScenarios:
    """Reference scenarios for single-name resolution."""

    def test_exact_match(self):
        result = find_best_match("Ribeye Steak", RIBEYE)
        assert result.confidence is MatchConfidence.EXACT
        assert result.entry.id == "1"
        assert result.score == 1.0

    def test_weight_prefix_gives_normalized_match(self):
        result = find_best_match("6oz Ribeye Steak", RIBEYE)
        assert result.confidence is MatchConfidence.NORMALIZED
        assert result.entry.id == "1"

    def test_abbreviated_word_scores_half(self):
        """One of two words shared scores exactly 0.5, which meets the default threshold."""
        result = find_best_match("Ribeye Stk", RIBEYE)
        assert result.score == pytest.approx(0.5)
        assert result.confidence is MatchConfidence.FUZZY
        assert result.entry.id == "1"

    def test_abbreviated_word_below_raised_threshold(self):
        result = find_best_match("Ribeye Stk", RIBEYE, threshold=0.6)
        assert result.confidence is MatchConfidence.NONE
        assert result.entry is None

    def test_half_portion_is_not_collapsed(self):
        catalog = [CatalogEntry(id="1", name="Half Caesar"), CatalogEntry(id="2", name="Caesar Salad")]
        result = find_best_match("Half Caesar", catalog)
        assert result.confidence is MatchConfidence.EXACT
        assert result.entry.id == "1"

    def test_empty_catalog(self):
        result = find_best_match("Nonexistent Dish", [])
        assert result.confidence is MatchConfidence.NONE
        assert result.entry is None
        assert not result.matched


class TestResolverTiers:

    def test_exact_is_case_insensitive(self):
        result = find_best_match("RIBEYE STEAK", RIBEYE)
        assert result.confidence is MatchConfidence.EXACT

    def test_exact_wins_over_earlier_fuzzy_candidate(self):
        catalog = [CatalogEntry(id="a", name="Ribeye"), CatalogEntry(id="b", name="Ribeye Steak Frites")]
        result = find_best_match("ribeye steak frites", catalog)
        assert result.confidence is MatchConfidence.EXACT
        assert result.entry.id == "b"

    def test_normalized_wins_over_fuzzy(self):
        catalog = [CatalogEntry(id="a", name="Ribeye Steak Special"), CatalogEntry(id="b", name="10 oz. Ribeye Steak")]
        result = find_best_match("6oz ribeye steak", catalog)
        assert result.confidence is MatchConfidence.NORMALIZED
        assert result.entry.id == "b"

    def test_fuzzy_picks_highest_score(self):
        catalog = [
            CatalogEntry(id="a", name="Chicken Wrap"),
            CatalogEntry(id="b", name="Grilled Chicken Club"),
        ]
        result = find_best_match("Chicken Club", catalog)
        assert result.confidence is MatchConfidence.FUZZY
        assert result.entry.id == "b"

    def test_fuzzy_tie_keeps_first_entry(self):
        catalog = [CatalogEntry(id="a", name="Salmon Plate"), CatalogEntry(id="b", name="Salmon Bowl")]
        result = find_best_match("Salmon Tacos", catalog)
        assert result.confidence is MatchConfidence.FUZZY
        assert result.entry.id == "a"

    def test_portion_prefix_stripped_for_recipe_linking(self):
        catalog = [CatalogEntry(id="r1", name="Caesar")]
        kept = find_best_match("Half Caesar", catalog, preserve_portion_prefix=True)
        stripped = find_best_match("Half Caesar", catalog, preserve_portion_prefix=False)
        assert kept.confidence is MatchConfidence.FUZZY
        assert stripped.confidence is MatchConfidence.NORMALIZED

    def test_empty_name(self):
        assert find_best_match("", RIBEYE).confidence is MatchConfidence.NONE

    def test_weight_only_name_does_not_match(self):
        assert find_best_match("6oz", RIBEYE).confidence is MatchConfidence.NONE

    def test_default_threshold_comes_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "FUZZY_MATCH_THRESHOLD", 0.9)
        assert find_best_match("Ribeye Stk", RIBEYE).confidence is MatchConfidence.NONE

    def test_returns_catalog_object_unchanged(self):
        class Row:
            def __init__(self, id, name):
                self.id = id
                self.name = name

        row = Row(7, "Fried Pickles")
        result = find_best_match("fried pickles", [row])
        assert result.entry is row


class TestResolveNames:

    def test_results_follow_input_order(self):
        catalog = [CatalogEntry(id=1, name="Half Caesar"), CatalogEntry(id=2, name="Ribeye Steak")]
        results = resolve_names(["Ribeye Steak", "Mystery", "half caesar"], catalog)
        assert [r.entry.id if r.entry else None for r in results] == [2, None, 1]
        assert [r.confidence for r in results] == [
            MatchConfidence.EXACT,
            MatchConfidence.NONE,
            MatchConfidence.EXACT,
        ]

    def test_many_names_may_share_one_entry(self):
        results = resolve_names(["Ribeye Steak", "6oz Ribeye Steak"], RIBEYE)
        assert all(r.entry.id == "1" for r in results)

    def test_empty_input(self):
        assert resolve_names([], RIBEYE) == []


class TestSelectionAndLabels:

    @pytest.mark.parametrize("confidence,selected", [
        (MatchConfidence.EXACT, True),
        (MatchConfidence.NORMALIZED, True),
        (MatchConfidence.FUZZY, True),
        (MatchConfidence.NONE, False),
    ])
    def test_default_selection(self, confidence, selected):
        from prep_kitchen.matching import MatchResult
        assert is_selected_by_default(MatchResult(entry=None, confidence=confidence)) is selected

    def test_labels(self):
        assert CONFIDENCE_LABELS[MatchConfidence.NORMALIZED] == "Partial"
        assert find_best_match("Ribeye Steak", RIBEYE).label == "Exact"
        assert find_best_match("nothing", RIBEYE).label == "None"
