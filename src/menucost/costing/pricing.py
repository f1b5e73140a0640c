"""Menu price rounding and price recommendations."""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

CompetitivePosition = Literal["budget", "mid-market", "premium", "luxury"]


def round_currency(amount: float) -> float:
    """Round an amount to cents, halves away from zero."""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_menu_price(cost_per_serving: float, target_food_cost_percentage: float) -> float:
    """
    Back-calculate a menu price from cost and a target food cost percentage.

    Examples:
        calculate_menu_price(5, 25) -> 20.0
        calculate_menu_price(5, 30) -> 16.67
    """
    if target_food_cost_percentage <= 0:
        raise ValueError("target_food_cost_percentage must be positive")
    return round_currency(cost_per_serving / (target_food_cost_percentage / 100))


def round_to_menu_price(price: float) -> float:
    """Round a price down to a common menu ending (.00, .50, .90 or .95)."""
    if price <= 0:
        return 0.0

    base = math.floor(price)
    decimal = price - base

    if decimal < 0.25:
        return float(base)
    if decimal < 0.75:
        return base + 0.5
    if decimal < 0.85:
        return base + 0.9
    return base + 0.95


def calculate_suggested_price(
    food_cost: float, target_food_cost_percentage: float = 30.0
) -> float:
    """Suggested menu price for a food cost, rounded to a menu ending."""
    if food_cost <= 0:
        return 0.0
    return round_to_menu_price(round_currency(food_cost / (target_food_cost_percentage / 100)))


def price_with_vat(net_price: float, vat_percentage: float) -> float:
    """Gross price including VAT, rounded to cents."""
    return round_currency(net_price * (1 + vat_percentage / 100))


@dataclass(frozen=True)
class PriceRecommendation:
    """A ladder of menu prices with a short market analysis."""

    conservative: float  # 35% food cost
    balanced: float  # 30% food cost
    competitive: float  # 25% food cost
    premium: float  # 20% food cost
    minimum_viable_price: float  # 40% food cost
    break_even_price: float
    recommended_min: float
    recommended_max: float
    competitive_position: CompetitivePosition


def generate_price_recommendations(
    cost_per_serving: float,
    category_average_price: float | None = None,
) -> PriceRecommendation:
    """
    Build a price ladder for a dish and position it against its category.

    Args:
        cost_per_serving: Full cost of one serving.
        category_average_price: Average menu price of comparable dishes, if known.

    Returns:
        PriceRecommendation. Without a category average the position is
        "mid-market".
    """
    conservative = calculate_menu_price(cost_per_serving, 35)
    balanced = calculate_menu_price(cost_per_serving, 30)
    competitive = calculate_menu_price(cost_per_serving, 25)
    premium = calculate_menu_price(cost_per_serving, 20)
    minimum_viable = calculate_menu_price(cost_per_serving, 40)

    position: CompetitivePosition = "mid-market"
    if category_average_price:
        if balanced < category_average_price * 0.8:
            position = "budget"
        elif balanced > category_average_price * 1.3:
            position = "luxury"
        elif balanced > category_average_price * 1.1:
            position = "premium"

    ceiling = (category_average_price or premium) * 1.2

    return PriceRecommendation(
        conservative=conservative,
        balanced=balanced,
        competitive=competitive,
        premium=premium,
        minimum_viable_price=minimum_viable,
        break_even_price=cost_per_serving,
        recommended_min=max(minimum_viable, conservative),
        recommended_max=round_currency(min(premium, ceiling)),
        competitive_position=position,
    )
