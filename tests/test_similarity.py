"""
Tests for the fuzzy similarity score.
"""
import pytest

from prep_kitchen.matching import similarity


class TestSimilarity:

    def test_equal_names_score_one(self):
        assert similarity("ribeye steak", "ribeye steak") == 1.0

    def test_equal_ignoring_case(self):
        assert similarity("Ribeye Steak", "RIBEYE STEAK") == 1.0

    def test_containment_uses_length_ratio(self):
        assert similarity("caesar", "caesar salad") == pytest.approx(len("caesar") / len("caesar salad"))
        assert similarity("caesar salad", "caesar") == pytest.approx(len("caesar") / len("caesar salad"))

    def test_word_overlap(self):
        # one shared word, two words on each side
        assert similarity("ribeye stk", "ribeye steak") == pytest.approx(0.5)

    def test_word_overlap_uses_longer_word_count(self):
        assert similarity("grilled chicken club", "chicken wrap") == pytest.approx(1 / 3)

    def test_no_shared_words(self):
        assert similarity("fried pickles", "ribeye steak") == 0.0

    def test_empty_side_scores_zero_unless_equal(self):
        assert similarity("", "") == 1.0
        assert similarity("   ", "ribeye") == 0.0

    @pytest.mark.parametrize("a,b", [
        ("ribeye stk", "ribeye steak"),
        ("chicken chicken club", "chicken wrap"),
        ("half caesar", "caesar salad"),
    ])
    def test_symmetric(self, a, b):
        assert similarity(a, b) == similarity(b, a)

    @pytest.mark.parametrize("a,b", [("a b c", "c d"), ("x", "xyz"), ("fish tacos", "tacos al pastor")])
    def test_bounded(self, a, b):
        assert 0.0 <= similarity(a, b) <= 1.0
