"""API routes for dish costing and menu pricing."""

from typing import Literal

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from menucost.costing import (
    Component,
    CostEfficiencyMetrics,
    CostOptimizationSuggestion,
    CostSettings,
    Ingredient,
    IngredientAlternative,
    IngredientComponent,
    Prep,
    PrepComponent,
    PriceRecommendation,
    PricingCalculation,
    analyze_cost_efficiency,
    calculate_cost,
    generate_cost_optimization_suggestions,
    generate_price_recommendations,
)
from menucost.errors import InvalidCostInputError
from menucost.logging_config import LoggingContext, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/costing", tags=["costing"])


# Request/Response schemas
class IngredientIn(BaseModel):
    """Ingredient reference data."""

    id: str
    name: str
    unit: str
    cost_per_unit: float = Field(ge=0)
    name_de: str | None = None
    name_en: str | None = None
    category: str | None = None


class PrepIn(BaseModel):
    """Prep reference data."""

    id: str
    name: str
    batch_yield: str
    cost_per_batch: float = Field(ge=0)
    name_de: str | None = None
    name_en: str | None = None
    notes: str = ""


class ComponentIn(BaseModel):
    """One ingredient or prep line of a dish."""

    type: Literal["ingredient", "prep"]
    quantity: float = Field(ge=0)
    unit: str
    ingredient: IngredientIn | None = None
    prep: PrepIn | None = None

    def to_component(self) -> Component:
        if self.type == "ingredient":
            if self.ingredient is None:
                raise InvalidCostInputError("ingredient component without ingredient data")
            return IngredientComponent(
                ingredient=Ingredient(**self.ingredient.model_dump()),
                quantity=self.quantity,
                unit=self.unit,
            )
        if self.prep is None:
            raise InvalidCostInputError("prep component without prep data")
        return PrepComponent(
            prep=Prep(**self.prep.model_dump()),
            quantity=self.quantity,
            unit=self.unit,
        )


class CostSettingsIn(BaseModel):
    """Optional overrides for the configured cost rates."""

    labor_cost_per_hour: float | None = Field(default=None, ge=0)
    overhead_percentage: float | None = Field(default=None, ge=0)
    wastage_percentage: float | None = Field(default=None, ge=0)


class CostCalculationRequest(BaseModel):
    """Request to cost a dish."""

    dish_name: str | None = None
    components: list[ComponentIn] = Field(default_factory=list)
    preparation_time_minutes: float = 15
    servings: float = 1
    settings: CostSettingsIn | None = None


class CostCalculationResponse(BaseModel):
    """Cost calculation with optimization hints."""

    calculation: PricingCalculation
    suggestions: list[CostOptimizationSuggestion]


class SuggestionsResponse(BaseModel):
    suggestions: list[CostOptimizationSuggestion]
    total: int


class PriceRecommendationRequest(BaseModel):
    """Request for a price ladder."""

    cost_per_serving: float = Field(ge=0)
    category_average_price: float | None = Field(default=None, gt=0)


class PriceRecommendationResponse(BaseModel):
    recommendation: PriceRecommendation


class EfficiencyRequest(BaseModel):
    """Request for ingredient efficiency metrics."""

    name: str
    price_per_kilo: float | None = Field(default=None, ge=0)
    seasonality_factor: float = Field(default=1.0, gt=0)
    alternatives: list[IngredientAlternative] = []


def _calculate(request: CostCalculationRequest) -> PricingCalculation:
    overrides = request.settings.model_dump(exclude_none=True) if request.settings else {}
    try:
        return calculate_cost(
            [component.to_component() for component in request.components],
            preparation_time_minutes=request.preparation_time_minutes,
            servings=request.servings,
            settings=CostSettings(**overrides),
        )
    except InvalidCostInputError as e:
        logger.warning(f"Rejected cost calculation: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# =============================================================================
# Costing Endpoints
# =============================================================================


@router.post("/calculate", response_model=CostCalculationResponse)
async def calculate_dish_cost(request: CostCalculationRequest) -> CostCalculationResponse:
    """
    Calculate food, labor and overhead cost for a dish.

    Returns the per-component breakdown, suggested menu prices at 25/30/35%
    food cost and rule-based optimization hints.
    """
    with LoggingContext(dish=request.dish_name):
        logger.info(f"Costing dish with {len(request.components)} components")
        calculation = _calculate(request)
        return CostCalculationResponse(
            calculation=calculation,
            suggestions=generate_cost_optimization_suggestions(calculation),
        )


@router.post("/suggestions", response_model=SuggestionsResponse)
async def get_cost_suggestions(request: CostCalculationRequest) -> SuggestionsResponse:
    """Only the optimization hints for a dish."""
    with LoggingContext(dish=request.dish_name):
        suggestions = generate_cost_optimization_suggestions(_calculate(request))
        return SuggestionsResponse(suggestions=suggestions, total=len(suggestions))


@router.post("/recommendations", response_model=PriceRecommendationResponse)
async def get_price_recommendations(
    request: PriceRecommendationRequest,
) -> PriceRecommendationResponse:
    """Price ladder from 20% to 40% food cost with market positioning."""
    return PriceRecommendationResponse(
        recommendation=generate_price_recommendations(
            request.cost_per_serving, request.category_average_price
        )
    )


@router.post("/efficiency", response_model=CostEfficiencyMetrics)
async def get_ingredient_efficiency(request: EfficiencyRequest) -> CostEfficiencyMetrics:
    """Cost per gram and serving, value score and cheaper substitutes for an ingredient."""
    return analyze_cost_efficiency(
        request.name,
        request.price_per_kilo,
        seasonality_factor=request.seasonality_factor,
        alternatives=request.alternatives,
    )
