"""Recipe cost calculation for dishes built from ingredients and preps."""

import re
from numbers import Real

from menucost.costing.models import (
    BatchYield,
    Component,
    CostAnalysis,
    CostBreakdownItem,
    CostEfficiency,
    CostEfficiencyMetrics,
    CostOptimizationSuggestion,
    CostSettings,
    IngredientAlternative,
    IngredientComponent,
    PrepComponent,
    PricingCalculation,
    ProfitMargins,
    SubstitutionSuggestion,
    SuggestedPrices,
)
from menucost.costing.pricing import calculate_menu_price
from menucost.errors import InvalidCostInputError
from menucost.logging_config import get_logger

logger = get_logger(__name__)

BATCH_YIELD_PATTERN = re.compile(
    r"^(\d+(?:\.\d+)?)\s*(ml|g|kg|l|portions?|servings?)$", re.IGNORECASE
)

FALLBACK_BATCH_YIELD = BatchYield(quantity=1.0, unit="portion", used_fallback=True)

# Food cost thresholds for the efficiency tiers
EFFICIENCY_TIERS: tuple[tuple[float, CostEfficiency], ...] = (
    (5.0, "excellent"),
    (10.0, "good"),
    (15.0, "moderate"),
)


def parse_batch_yield(batch_yield: str | None) -> BatchYield:
    """
    Parse a prep batch yield such as "500ml", "1kg" or "10 portions".

    Unparseable or non-positive yields fall back to one portion; the
    returned BatchYield then has used_fallback set.
    """
    match = BATCH_YIELD_PATTERN.match((batch_yield or "").strip())
    if match:
        quantity = float(match.group(1))
        if quantity > 0:
            return BatchYield(quantity=quantity, unit=match.group(2).lower())

    logger.warning(f"Unparseable batch yield {batch_yield!r}, assuming 1 portion")
    return FALLBACK_BATCH_YIELD


def get_cost_efficiency(total_food_cost: float) -> CostEfficiency:
    """Classify a dish by its total food cost."""
    for threshold, tier in EFFICIENCY_TIERS:
        if total_food_cost <= threshold:
            return tier
    return "high"


def calculate_component_cost(
    component: Component, wastage_percentage: float = 5.0
) -> CostBreakdownItem:
    """Cost a single ingredient or prep line. Percentage is filled in later."""
    if isinstance(component, IngredientComponent):
        ingredient = component.ingredient
        unit_cost = ingredient.cost_per_unit
        return CostBreakdownItem(
            id=ingredient.id,
            name=ingredient.name,
            type="ingredient",
            quantity=component.quantity,
            unit=component.unit,
            unit_cost=unit_cost,
            total_cost=unit_cost * component.quantity * (1 + wastage_percentage / 100),
            category=ingredient.category,
        )

    if isinstance(component, PrepComponent):
        prep = component.prep
        batch_yield = parse_batch_yield(prep.batch_yield)
        unit_cost = prep.cost_per_batch / batch_yield.quantity
        return CostBreakdownItem(
            id=prep.id,
            name=prep.name,
            type="prep",
            quantity=component.quantity,
            unit=component.unit,
            unit_cost=unit_cost,
            total_cost=unit_cost * component.quantity,
            batch_yield=prep.batch_yield,
            cost_per_batch=prep.cost_per_batch,
            used_fallback=batch_yield.used_fallback,
        )

    raise TypeError(f"Unsupported component type: {type(component).__name__}")


def _validate_servings(servings: object) -> float:
    if isinstance(servings, bool) or not isinstance(servings, Real):
        raise InvalidCostInputError(f"servings must be a number, got {servings!r}")
    if servings < 1:
        logger.warning(f"servings={servings} is below 1, using 1")
        return 1
    return servings


def _share(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def calculate_cost(
    components: list[Component],
    preparation_time_minutes: float = 15,
    servings: float = 1,
    settings: CostSettings | None = None,
) -> PricingCalculation:
    """
    Calculate a full pricing breakdown for a dish.

    Args:
        components: Ingredient and prep lines of the dish. May be empty.
        preparation_time_minutes: Kitchen labor time for one batch of the dish.
        servings: Number of servings the components produce. Values below 1
            are clamped to 1.
        settings: Labor, overhead and wastage rates. Defaults from Settings.

    Returns:
        PricingCalculation with per-line breakdown, suggested prices at
        25/30/35% food cost and a cost analysis summary.

    Raises:
        InvalidCostInputError: If servings is not a number.
    """
    settings = settings or CostSettings()
    servings = _validate_servings(servings)
    if preparation_time_minutes < 0:
        logger.warning(f"preparation_time_minutes={preparation_time_minutes} is negative, using 0")
        preparation_time_minutes = 0

    logger.debug(f"Calculating cost for {len(components)} components, servings={servings}")

    breakdown = [
        calculate_component_cost(component, settings.wastage_percentage)
        for component in components
    ]

    total_food_cost = sum(item.total_cost for item in breakdown)
    ingredient_cost = sum(item.total_cost for item in breakdown if item.type == "ingredient")
    prep_cost = sum(item.total_cost for item in breakdown if item.type == "prep")

    for item in breakdown:
        item.percentage = _share(item.total_cost, total_food_cost)

    labor_cost = (preparation_time_minutes / 60) * settings.labor_cost_per_hour
    overhead_cost = total_food_cost * (settings.overhead_percentage / 100)
    total_cost = total_food_cost + labor_cost + overhead_cost
    cost_per_serving = total_cost / servings

    suggested_prices = SuggestedPrices(
        food_cost_25=calculate_menu_price(cost_per_serving, 25),
        food_cost_30=calculate_menu_price(cost_per_serving, 30),
        food_cost_35=calculate_menu_price(cost_per_serving, 35),
    )
    profit_margins = ProfitMargins(
        at_25_percent=suggested_prices.food_cost_25 - cost_per_serving,
        at_30_percent=suggested_prices.food_cost_30 - cost_per_serving,
        at_35_percent=suggested_prices.food_cost_35 - cost_per_serving,
    )

    # First line with the highest cost wins ties
    most_expensive: CostBreakdownItem | None = None
    for item in breakdown:
        if most_expensive is None or item.total_cost > most_expensive.total_cost:
            most_expensive = item

    calculation = PricingCalculation(
        total_food_cost=total_food_cost,
        ingredient_cost=ingredient_cost,
        prep_cost=prep_cost,
        labor_cost=labor_cost,
        overhead_cost=overhead_cost,
        total_cost=total_cost,
        cost_per_serving=cost_per_serving,
        suggested_prices=suggested_prices,
        profit_margins=profit_margins,
        breakdown=breakdown,
        cost_analysis=CostAnalysis(
            most_expensive_component=most_expensive,
            cost_efficiency=get_cost_efficiency(total_food_cost),
            prep_utilization=_share(prep_cost, total_food_cost),
            ingredient_utilization=_share(ingredient_cost, total_food_cost),
        ),
        used_fallback=any(item.used_fallback for item in breakdown),
    )

    logger.debug(
        f"Cost result: food={total_food_cost:.2f} total={total_cost:.2f} "
        f"per_serving={cost_per_serving:.2f}"
    )
    return calculation


def generate_cost_optimization_suggestions(
    calculation: PricingCalculation,
) -> list[CostOptimizationSuggestion]:
    """
    Suggest ways to lower the cost of a dish.

    Each rule is evaluated on its own:
    - total food cost above 15 -> review portions (saves ~20%)
    - one component above 30% of food cost -> substitute it (saves ~15% of it)
    - preps above 50% of food cost -> make bigger batches (saves ~10% of prep cost)
    """
    suggestions: list[CostOptimizationSuggestion] = []

    if calculation.total_food_cost > 15:
        suggestions.append(
            CostOptimizationSuggestion(
                type="portion",
                title="High Total Cost",
                description=(
                    f"Total food cost of {format_currency(calculation.total_food_cost)} is above "
                    "recommended levels. Consider reducing portions or finding cost-effective "
                    "alternatives."
                ),
                potential_saving=calculation.total_food_cost * 0.2,
                difficulty="medium",
                impact="high",
            )
        )

    most_expensive = calculation.cost_analysis.most_expensive_component
    if most_expensive is not None and most_expensive.percentage > 30:
        suggestions.append(
            CostOptimizationSuggestion(
                type="substitution",
                title="High-Cost Component",
                description=(
                    f"{most_expensive.name} accounts for "
                    f"{format_percentage(most_expensive.percentage)} of total cost. "
                    "Consider alternatives or bulk purchasing."
                ),
                potential_saving=most_expensive.total_cost * 0.15,
                difficulty="medium",
                impact="medium",
            )
        )

    if calculation.cost_analysis.prep_utilization > 50:
        suggestions.append(
            CostOptimizationSuggestion(
                type="prep",
                title="High Prep Dependency",
                description=(
                    f"Preps account for "
                    f"{format_percentage(calculation.cost_analysis.prep_utilization)} of total "
                    "cost. Consider making preps in larger batches for better efficiency."
                ),
                potential_saving=calculation.prep_cost * 0.1,
                difficulty="easy",
                impact="medium",
            )
        )

    return suggestions


def format_currency(amount: float) -> str:
    """Format an amount in euros for display."""
    return f"€{amount:.2f}"


def format_percentage(percentage: float) -> str:
    """Format a percentage with one decimal."""
    return f"{percentage:.1f}%"


# =============================================================================
# Ingredient Efficiency
# =============================================================================

# Typical grams per serving, first substring match wins
TYPICAL_SERVING_GRAMS: dict[str, float] = {
    # Proteins
    "chicken": 150,
    "beef": 120,
    "pork": 120,
    "fish": 140,
    "eggs": 50,
    # Carbohydrates
    "rice": 60,
    "pasta": 80,
    "bread": 30,
    "potatoes": 200,
    # Vegetables
    "onions": 50,
    "tomatoes": 100,
    "carrots": 80,
    "mushrooms": 60,
}
DEFAULT_SERVING_GRAMS = 100.0

HIGH_PROTEIN_TERMS = ("chicken", "fish")
NUTRIENT_DENSE_TERMS = ("vegetable", "spinach", "broccoli")
CALORIE_DENSE_TERMS = ("oil", "butter")


def estimate_serving_grams(name: str) -> float:
    """Typical serving weight of an ingredient in grams."""
    lower_name = name.lower()
    for key, grams in TYPICAL_SERVING_GRAMS.items():
        if key in lower_name:
            return grams
    return DEFAULT_SERVING_GRAMS


def calculate_value_score(name: str, cost_per_kilo: float) -> int:
    """Rough 0-100 value score from ingredient type and price per kilo."""
    lower_name = name.lower()
    score = 50

    if any(term in lower_name for term in HIGH_PROTEIN_TERMS):
        score += 20
    elif any(term in lower_name for term in NUTRIENT_DENSE_TERMS):
        score += 15
    elif any(term in lower_name for term in CALORIE_DENSE_TERMS):
        score -= 10

    if cost_per_kilo < 5:
        score += 15
    elif cost_per_kilo > 20:
        score -= 15

    return max(0, min(100, score))


def analyze_cost_efficiency(
    name: str,
    price_per_kilo: float | None,
    seasonality_factor: float = 1.0,
    alternatives: list[IngredientAlternative] | None = None,
) -> CostEfficiencyMetrics:
    """
    Cost and value metrics for one ingredient.

    Args:
        name: Ingredient name, matched against typical serving sizes.
        price_per_kilo: Purchase price per kilo. Unknown prices count as 0.
        seasonality_factor: Seasonal price factor, 1.0 when not known.
        alternatives: Candidate substitutes; only cheaper ones are suggested.

    Returns:
        CostEfficiencyMetrics with the saving per kilo of each cheaper alternative.
    """
    cost_per_kilo = price_per_kilo or 0.0
    cost_per_gram = cost_per_kilo / 1000

    substitutions = [
        SubstitutionSuggestion(
            ingredient=alternative.name,
            potential_saving=cost_per_kilo - alternative.cost_per_kilo,
            impact_on_taste=alternative.taste_impact,
        )
        for alternative in alternatives or []
        if cost_per_kilo - alternative.cost_per_kilo > 0
    ]

    return CostEfficiencyMetrics(
        cost_per_gram=cost_per_gram,
        cost_per_serving=cost_per_gram * estimate_serving_grams(name),
        value_score=calculate_value_score(name, cost_per_kilo),
        seasonality_factor=seasonality_factor or 1.0,
        substitution_suggestions=substitutions,
    )
