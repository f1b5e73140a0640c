"""Tests for spoken ingredient name matching."""

import pytest

from menucost.voice.matching import (
    COMMON_INGREDIENTS,
    IngredientContext,
    calculate_similarity,
    create_phonetic_key,
    extract_ingredients_from_text,
    find_best_ingredient_match,
    phonetic_similarity,
    suggest_ingredient_corrections,
)


class TestSimilarity:
    """Tests for the similarity measures."""

    def test_levenshtein_similarity(self):
        assert calculate_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert calculate_similarity("Tomato", "tomato") == 1.0
        assert calculate_similarity("", "") == 1.0

    def test_phonetic_key(self):
        """Test digraph folding, letter collapsing and vowel removal."""
        assert create_phonetic_key("Phone") == "fn"
        assert create_phonetic_key("coffee") == "cf"
        assert create_phonetic_key("avocado") == "avcd"
        assert create_phonetic_key("123") == ""

    def test_phonetic_similarity(self):
        assert phonetic_similarity("avacado", "avocado") == 0.9
        assert phonetic_similarity("tomatoe", "tomato") == 0.9


class TestFindBestMatch:
    """Tests for the tiered best-match search."""

    def test_exact_match(self, small_catalog):
        match = find_best_ingredient_match("Tomato", small_catalog)
        assert match.ingredient == "tomato"
        assert match.match_type == "exact"
        assert match.confidence == 1.0
        assert match.original_input == "Tomato"

    def test_misspelling(self):
        """Test a common mishearing against the built-in catalog."""
        match = find_best_ingredient_match("avacado", COMMON_INGREDIENTS)
        assert match.ingredient == "avocado"
        assert match.match_type in ("fuzzy", "phonetic")
        assert match.confidence >= 0.6

    def test_substring_match(self):
        match = find_best_ingredient_match("garlic", ["garlic salt"])
        assert match.ingredient == "garlic salt"
        assert match.match_type == "substring"
        assert match.confidence == pytest.approx(6 / 11 * 0.7)

    def test_context_match(self):
        """Test dish context finds ingredients missing from the catalog."""
        context = IngredientContext(dish_type="curry")
        match = find_best_ingredient_match("coconut milk", ["rice"], context)
        assert match.ingredient == "coconut milk"
        assert match.match_type == "context"
        assert match.confidence == pytest.approx(0.9)

    def test_no_match(self, small_catalog):
        assert find_best_ingredient_match("xyzzy", small_catalog) is None

    def test_empty_input_or_catalog(self, small_catalog):
        assert find_best_ingredient_match("", small_catalog) is None
        assert find_best_ingredient_match("   ", small_catalog) is None
        assert find_best_ingredient_match("tomato", []) is None

    def test_context_merges_custom_combinations(self):
        context = IngredientContext(dish_type="Salad", common_combinations={"salad": ["feta"]})
        expected = context.ingredients_for_dish()
        assert expected[0] == "lettuce"
        assert expected[-1] == "feta"
        assert IngredientContext().ingredients_for_dish() == []


class TestExtractIngredients:
    """Tests for picking ingredients out of a phrase."""

    def test_extract_from_phrase(self, small_catalog):
        matches = extract_ingredients_from_text("two avacado and some tomato", small_catalog)
        assert [m.ingredient for m in matches] == ["tomato", "avocado"]

    def test_duplicates_keep_highest_confidence(self, small_catalog):
        matches = extract_ingredients_from_text("avacado avocado", small_catalog)
        assert len(matches) == 1
        assert matches[0].match_type == "exact"
        assert matches[0].confidence == 1.0

    def test_empty_text(self, small_catalog):
        assert extract_ingredients_from_text("", small_catalog) == []


class TestSuggestCorrections:
    """Tests for "did you mean" suggestions."""

    def test_best_suggestion_first(self, small_catalog):
        suggestions = suggest_ingredient_corrections("tomatoe", small_catalog)
        assert suggestions[0].ingredient == "tomato"
        assert suggestions[0].confidence == pytest.approx(0.9)
        assert all(s.confidence >= 0.3 for s in suggestions)
        assert len(suggestions) <= 5

    def test_limit(self, small_catalog):
        assert len(suggest_ingredient_corrections("lemon", small_catalog, limit=1)) == 1

    def test_empty(self, small_catalog):
        assert suggest_ingredient_corrections("", small_catalog) == []
        assert suggest_ingredient_corrections("tomato", []) == []
