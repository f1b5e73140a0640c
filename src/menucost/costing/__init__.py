"""Recipe costing and menu pricing."""

from menucost.costing.engine import (
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
from menucost.costing.models import (
    BatchYield,
    Component,
    CostAnalysis,
    CostBreakdownItem,
    CostEfficiencyMetrics,
    CostOptimizationSuggestion,
    CostSettings,
    Ingredient,
    IngredientAlternative,
    IngredientComponent,
    Prep,
    PrepComponent,
    PricingCalculation,
    ProfitMargins,
    SubstitutionSuggestion,
    SuggestedPrices,
)
from menucost.costing.pricing import (
    PriceRecommendation,
    calculate_menu_price,
    calculate_suggested_price,
    generate_price_recommendations,
    price_with_vat,
    round_currency,
    round_to_menu_price,
)

__all__ = [
    "BatchYield",
    "Component",
    "CostAnalysis",
    "CostBreakdownItem",
    "CostEfficiencyMetrics",
    "CostOptimizationSuggestion",
    "CostSettings",
    "Ingredient",
    "IngredientAlternative",
    "IngredientComponent",
    "Prep",
    "PrepComponent",
    "PriceRecommendation",
    "PricingCalculation",
    "ProfitMargins",
    "SubstitutionSuggestion",
    "SuggestedPrices",
    "analyze_cost_efficiency",
    "calculate_component_cost",
    "calculate_cost",
    "calculate_menu_price",
    "calculate_suggested_price",
    "calculate_value_score",
    "estimate_serving_grams",
    "format_currency",
    "format_percentage",
    "generate_cost_optimization_suggestions",
    "generate_price_recommendations",
    "get_cost_efficiency",
    "parse_batch_yield",
    "price_with_vat",
    "round_currency",
    "round_to_menu_price",
]
