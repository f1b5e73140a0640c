"""Tests for dish cost calculation."""

import pytest

from menucost.costing import (
    CostSettings,
    Ingredient,
    IngredientAlternative,
    IngredientComponent,
    Prep,
    PrepComponent,
    analyze_cost_efficiency,
    calculate_component_cost,
    calculate_cost,
    calculate_value_score,
    estimate_serving_grams,
    format_currency,
    format_percentage,
    generate_cost_optimization_suggestions,
    get_cost_efficiency,
    parse_batch_yield,
)
from menucost.errors import InvalidCostInputError, MenucostError


def _cheap_ingredient(index: int) -> IngredientComponent:
    ingredient = Ingredient(id=f"ing-{index}", name=f"Herb {index}", unit="g", cost_per_unit=0.01)
    return IngredientComponent(ingredient=ingredient, quantity=10, unit="g")


class TestBatchYieldParsing:
    """Tests for prep batch yield parsing."""

    def test_volume_yield(self):
        """Test a plain milliliter yield."""
        result = parse_batch_yield("500ml")
        assert result.quantity == 500
        assert result.unit == "ml"
        assert result.used_fallback is False

    def test_yield_with_space_and_case(self):
        """Test whitespace between number and unit and mixed case."""
        assert parse_batch_yield("1.5 KG").quantity == 1.5
        assert parse_batch_yield("1.5 KG").unit == "kg"
        assert parse_batch_yield("10 Portions").unit == "portions"
        assert parse_batch_yield("4 serving").unit == "serving"

    def test_unparseable_yield_falls_back(self):
        """Test that free text falls back to one portion."""
        result = parse_batch_yield("a big pot")
        assert result.quantity == 1
        assert result.unit == "portion"
        assert result.used_fallback is True

    def test_zero_and_missing_yield_fall_back(self):
        """Test that zero or missing yields never divide by zero."""
        assert parse_batch_yield("0g").used_fallback is True
        assert parse_batch_yield("").used_fallback is True
        assert parse_batch_yield(None).used_fallback is True


class TestCostEfficiency:
    """Tests for the cost efficiency tiers."""

    @pytest.mark.parametrize(
        "food_cost,expected",
        [
            (0, "excellent"),
            (5, "excellent"),
            (5.01, "good"),
            (10, "good"),
            (15, "moderate"),
            (15.01, "high"),
        ],
    )
    def test_tiers(self, food_cost, expected):
        """Test tier boundaries are inclusive."""
        assert get_cost_efficiency(food_cost) == expected


class TestComponentCost:
    """Tests for costing single lines."""

    def test_ingredient_includes_wastage(self, tomato_line):
        """Test ingredient cost is unit cost x quantity plus wastage."""
        item = calculate_component_cost(tomato_line, wastage_percentage=5)
        assert item.type == "ingredient"
        assert item.unit_cost == 2.0
        assert item.total_cost == pytest.approx(4.2)
        assert item.category == "vegetables"

    def test_prep_uses_batch_yield(self, pesto_line):
        """Test prep cost is cost per batch divided by yield, without wastage."""
        item = calculate_component_cost(pesto_line, wastage_percentage=5)
        assert item.type == "prep"
        assert item.unit_cost == pytest.approx(0.02)
        assert item.total_cost == pytest.approx(2.0)
        assert item.batch_yield == "500ml"
        assert item.cost_per_batch == 10.0

    def test_unknown_component_type(self):
        """Test that arbitrary objects are rejected."""
        with pytest.raises(TypeError):
            calculate_component_cost("tomato")


class TestCalculateCost:
    """Tests for full dish cost calculation."""

    def test_single_ingredient(self, tomato_line, cost_settings):
        """Test totals, suggested prices and margins for one ingredient."""
        result = calculate_cost([tomato_line], preparation_time_minutes=0, settings=cost_settings)

        assert result.total_food_cost == pytest.approx(4.2)
        assert result.ingredient_cost == pytest.approx(4.2)
        assert result.prep_cost == 0
        assert result.labor_cost == 0
        assert result.overhead_cost == pytest.approx(1.05)
        assert result.total_cost == pytest.approx(5.25)
        assert result.cost_per_serving == pytest.approx(5.25)

        assert result.suggested_prices.food_cost_25 == 21.0
        assert result.suggested_prices.food_cost_30 == 17.5
        assert result.suggested_prices.food_cost_35 == 15.0
        assert result.profit_margins.at_30_percent == pytest.approx(12.25)

    def test_two_servings_without_extras(self):
        """Test 5 units at 2.00 over two servings with no wastage, labor or overhead."""
        ingredient = Ingredient(id="ing-1", name="Flour", unit="kg", cost_per_unit=2.0)
        settings = CostSettings(overhead_percentage=0, wastage_percentage=0)
        result = calculate_cost(
            [IngredientComponent(ingredient=ingredient, quantity=5, unit="kg")],
            preparation_time_minutes=0,
            servings=2,
            settings=settings,
        )

        assert result.total_food_cost == pytest.approx(10.0)
        assert result.total_cost == pytest.approx(10.0)
        assert result.cost_per_serving == pytest.approx(5.0)
        assert result.suggested_prices.food_cost_25 == 20.0
        assert result.suggested_prices.food_cost_30 == 16.67

    def test_labor_cost(self, tomato_line, cost_settings):
        """Test labor is billed per hour of preparation time."""
        result = calculate_cost([tomato_line], preparation_time_minutes=30, settings=cost_settings)
        assert result.labor_cost == pytest.approx(7.5)
        assert result.total_cost == pytest.approx(4.2 + 7.5 + 1.05)

    def test_negative_preparation_time_is_zero(self, tomato_line, cost_settings):
        """Test negative preparation time adds no labor."""
        result = calculate_cost([tomato_line], preparation_time_minutes=-10, settings=cost_settings)
        assert result.labor_cost == 0

    def test_servings_divide_total(self, tomato_line, cost_settings):
        """Test cost per serving."""
        result = calculate_cost(
            [tomato_line], preparation_time_minutes=0, servings=4, settings=cost_settings
        )
        assert result.cost_per_serving == pytest.approx(5.25 / 4)

    def test_mixed_components(self, tomato_line, pesto_line, cost_settings):
        """Test percentages, utilization and the most expensive component."""
        result = calculate_cost([tomato_line, pesto_line], settings=cost_settings)

        assert result.total_food_cost == pytest.approx(6.2)
        assert result.prep_cost == pytest.approx(2.0)
        assert sum(item.percentage for item in result.breakdown) == pytest.approx(100)
        assert result.breakdown[0].percentage == pytest.approx(4.2 / 6.2 * 100)

        analysis = result.cost_analysis
        assert analysis.most_expensive_component.id == "ing-tomato"
        assert analysis.cost_efficiency == "good"
        assert analysis.prep_utilization == pytest.approx(2.0 / 6.2 * 100)
        assert analysis.ingredient_utilization == pytest.approx(4.2 / 6.2 * 100)
        assert result.used_fallback is False

    def test_empty_components(self, cost_settings):
        """Test an empty dish costs nothing and has no most expensive component."""
        result = calculate_cost([], preparation_time_minutes=0, settings=cost_settings)

        assert result.total_food_cost == 0
        assert result.breakdown == []
        assert result.cost_analysis.most_expensive_component is None
        assert result.cost_analysis.cost_efficiency == "excellent"
        assert result.cost_analysis.prep_utilization == 0
        assert result.suggested_prices.food_cost_30 == 0

    def test_first_component_wins_ties(self, tomato, cost_settings):
        """Test ties go to the first line."""
        first = IngredientComponent(ingredient=tomato, quantity=1, unit="kg")
        second_ingredient = Ingredient(id="ing-onion", name="Onion", unit="kg", cost_per_unit=2.0)
        second = IngredientComponent(ingredient=second_ingredient, quantity=1, unit="kg")

        result = calculate_cost([first, second], settings=cost_settings)
        assert result.cost_analysis.most_expensive_component.id == "ing-tomato"

    @pytest.mark.parametrize("servings", [0, -2, 0.5])
    def test_servings_below_one_are_clamped(self, tomato_line, cost_settings, servings):
        """Test servings below one are treated as one."""
        result = calculate_cost(
            [tomato_line], preparation_time_minutes=0, servings=servings, settings=cost_settings
        )
        assert result.cost_per_serving == pytest.approx(result.total_cost)

    @pytest.mark.parametrize("servings", ["two", None, True])
    def test_non_numeric_servings_rejected(self, tomato_line, cost_settings, servings):
        """Test non-numeric servings raise a typed error."""
        with pytest.raises(InvalidCostInputError):
            calculate_cost([tomato_line], servings=servings, settings=cost_settings)

    def test_invalid_input_error_hierarchy(self):
        """Test the error can be caught as ValueError or as the package base error."""
        assert issubclass(InvalidCostInputError, ValueError)
        assert issubclass(InvalidCostInputError, MenucostError)

    def test_fallback_yield_is_flagged(self, cost_settings):
        """Test a prep with an unparseable yield marks the result."""
        stock = Prep(id="prep-stock", name="Stock", batch_yield="a big pot", cost_per_batch=6.0)
        line = PrepComponent(prep=stock, quantity=0.5, unit="portion")

        result = calculate_cost([line], settings=cost_settings)
        assert result.breakdown[0].total_cost == pytest.approx(3.0)
        assert result.breakdown[0].used_fallback is True
        assert result.used_fallback is True

    def test_default_settings(self, tomato_line):
        """Test default rates come from the application settings."""
        settings = CostSettings()
        assert settings.labor_cost_per_hour == 15.0
        assert settings.overhead_percentage == 25.0
        assert settings.wastage_percentage == 5.0

        result = calculate_cost([tomato_line], preparation_time_minutes=0)
        assert result.total_food_cost == pytest.approx(4.2)


class TestOptimizationSuggestions:
    """Tests for rule-based cost optimization hints."""

    def test_all_rules_fire(self, tomato, pesto, cost_settings):
        """Test an expensive, prep-heavy dish gets every hint."""
        components = [
            IngredientComponent(ingredient=tomato, quantity=1, unit="kg"),
            PrepComponent(prep=pesto, quantity=1000, unit="ml"),
        ]
        calculation = calculate_cost(components, settings=cost_settings)
        suggestions = generate_cost_optimization_suggestions(calculation)

        assert [s.type for s in suggestions] == ["portion", "substitution", "prep"]
        portion, substitution, prep = suggestions
        assert portion.potential_saving == pytest.approx(calculation.total_food_cost * 0.2)
        assert substitution.potential_saving == pytest.approx(20.0 * 0.15)
        assert "Basil Pesto" in substitution.description
        assert prep.potential_saving == pytest.approx(2.0)
        assert prep.difficulty == "easy"

    def test_balanced_cheap_dish_has_no_hints(self, cost_settings):
        """Test no hint for a cheap dish without a dominant component."""
        components = [_cheap_ingredient(i) for i in range(4)]
        calculation = calculate_cost(components, settings=cost_settings)
        assert generate_cost_optimization_suggestions(calculation) == []

    def test_empty_dish_has_no_hints(self, cost_settings):
        """Test an empty dish produces no hints."""
        calculation = calculate_cost([], settings=cost_settings)
        assert generate_cost_optimization_suggestions(calculation) == []


class TestFormatting:
    """Tests for display helpers."""

    def test_format_currency(self):
        assert format_currency(3.5) == "€3.50"
        assert format_currency(0) == "€0.00"

    def test_format_percentage(self):
        assert format_percentage(33.333) == "33.3%"


class TestIngredientEfficiency:
    """Tests for single-ingredient cost efficiency metrics."""

    def test_protein_metrics(self):
        result = analyze_cost_efficiency("Chicken breast", 8.0)
        assert result.cost_per_gram == pytest.approx(0.008)
        assert result.cost_per_serving == pytest.approx(1.2)
        assert result.value_score == 70
        assert result.seasonality_factor == 1.0
        assert result.substitution_suggestions == []

    def test_only_cheaper_alternatives_suggested(self):
        alternatives = [
            IngredientAlternative(name="chicken thigh", cost_per_kilo=6.0, taste_impact="low"),
            IngredientAlternative(name="beef", cost_per_kilo=12.0, taste_impact="high"),
        ]
        result = analyze_cost_efficiency(
            "chicken breast", 8.0, seasonality_factor=1.4, alternatives=alternatives
        )
        assert result.seasonality_factor == 1.4
        assert len(result.substitution_suggestions) == 1
        suggestion = result.substitution_suggestions[0]
        assert suggestion.ingredient == "chicken thigh"
        assert suggestion.potential_saving == pytest.approx(2.0)
        assert suggestion.impact_on_taste == "low"

    @pytest.mark.parametrize(
        "name,price_per_kilo,score",
        [
            ("spinach", 3.0, 80),
            ("olive oil", 25.0, 25),
            ("saffron", 12.0, 50),
            ("mystery", None, 65),
        ],
    )
    def test_value_score(self, name, price_per_kilo, score):
        assert analyze_cost_efficiency(name, price_per_kilo).value_score == score

    def test_value_score_is_bounded(self):
        assert 0 <= calculate_value_score("butter", 100.0) <= 100

    def test_typical_serving_sizes(self):
        assert estimate_serving_grams("Potatoes") == 200
        assert estimate_serving_grams("red onions") == 50
        assert estimate_serving_grams("salt") == 100

    def test_unknown_price(self):
        result = analyze_cost_efficiency("mystery", None)
        assert result.cost_per_gram == 0
        assert result.cost_per_serving == 0
