"""Data models for recipe costing."""

from dataclasses import dataclass, field
from typing import Literal

from menucost.config import get_settings

ComponentType = Literal["ingredient", "prep"]
CostEfficiency = Literal["excellent", "good", "moderate", "high"]
Impact = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class Ingredient:
    """Reference data for a purchasable ingredient."""

    id: str
    name: str
    unit: str
    cost_per_unit: float
    name_de: str | None = None
    name_en: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class Prep:
    """A sub-recipe (sauce, paste, dough) produced in batches."""

    id: str
    name: str
    batch_yield: str  # free text, e.g. "500ml", "10 portions"
    cost_per_batch: float
    name_de: str | None = None
    name_en: str | None = None
    notes: str = ""


@dataclass(frozen=True)
class IngredientComponent:
    """An ingredient line consumed by a dish."""

    ingredient: Ingredient
    quantity: float
    unit: str


@dataclass(frozen=True)
class PrepComponent:
    """A prep line consumed by a dish."""

    prep: Prep
    quantity: float
    unit: str


Component = IngredientComponent | PrepComponent


@dataclass(frozen=True)
class BatchYield:
    """Parsed batch yield of a prep."""

    quantity: float
    unit: str
    used_fallback: bool = False


@dataclass
class CostBreakdownItem:
    """Cost of a single component within a calculation."""

    id: str
    name: str
    type: ComponentType
    quantity: float
    unit: str
    unit_cost: float
    total_cost: float
    percentage: float = 0.0
    category: str | None = None
    batch_yield: str | None = None
    cost_per_batch: float | None = None
    used_fallback: bool = False


@dataclass(frozen=True)
class SuggestedPrices:
    """Menu prices that hit the 25/30/35% food cost targets."""

    food_cost_25: float
    food_cost_30: float
    food_cost_35: float


@dataclass(frozen=True)
class ProfitMargins:
    """Profit per serving at each suggested price."""

    at_25_percent: float
    at_30_percent: float
    at_35_percent: float


@dataclass
class CostAnalysis:
    """Summary analysis of a calculation."""

    most_expensive_component: CostBreakdownItem | None
    cost_efficiency: CostEfficiency
    prep_utilization: float  # % of food cost from preps
    ingredient_utilization: float  # % of food cost from ingredients


@dataclass
class PricingCalculation:
    """Full pricing breakdown for a dish."""

    total_food_cost: float
    ingredient_cost: float
    prep_cost: float
    labor_cost: float
    overhead_cost: float
    total_cost: float
    cost_per_serving: float
    suggested_prices: SuggestedPrices
    profit_margins: ProfitMargins
    breakdown: list[CostBreakdownItem]
    cost_analysis: CostAnalysis
    used_fallback: bool = False


def _default(name: str):
    return field(default_factory=lambda: getattr(get_settings(), name))


@dataclass(frozen=True)
class CostSettings:
    """Rates applied on top of raw food cost. Defaults come from Settings."""

    labor_cost_per_hour: float = _default("labor_cost_per_hour")
    overhead_percentage: float = _default("overhead_percentage")
    target_food_cost_percentage: float = _default("target_food_cost_percentage")
    wastage_percentage: float = _default("wastage_percentage")
    vat_percentage: float = _default("vat_percentage")


@dataclass(frozen=True)
class CostOptimizationSuggestion:
    """A rule-based hint for lowering the cost of a dish."""

    type: Literal["substitution", "portion", "prep", "supplier"]
    title: str
    description: str
    potential_saving: float
    difficulty: Literal["easy", "medium", "hard"]
    impact: Impact


@dataclass(frozen=True)
class IngredientAlternative:
    """A cheaper ingredient that could stand in for another."""

    name: str
    cost_per_kilo: float
    taste_impact: Impact = "medium"


@dataclass(frozen=True)
class SubstitutionSuggestion:
    """Saving per kilo from switching to an alternative."""

    ingredient: str
    potential_saving: float
    impact_on_taste: Impact


@dataclass
class CostEfficiencyMetrics:
    """Cost and value metrics for a single ingredient."""

    cost_per_gram: float
    cost_per_serving: float
    value_score: int  # 0-100, higher is better value
    seasonality_factor: float
    substitution_suggestions: list[SubstitutionSuggestion] = field(default_factory=list)
