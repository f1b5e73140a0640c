"""Unit normalization and conversion utilities."""

from dataclasses import dataclass

from menucost.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Unit Tables
# =============================================================================

# Spoken/written unit aliases (English and German) -> canonical unit name
UNIT_ALIASES: dict[str, str] = {
    # Weight
    "g": "grams",
    "gram": "grams",
    "grams": "grams",
    "gramm": "grams",
    "gr": "grams",
    "kg": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "kilogramm": "kg",
    "lb": "pounds",
    "lbs": "pounds",
    "pound": "pounds",
    "pounds": "pounds",
    "oz": "ounces",
    "ounce": "ounces",
    "ounces": "ounces",
    # Volume
    "ml": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "l": "liters",
    "liter": "liters",
    "liters": "liters",
    "litre": "liters",
    "litres": "liters",
    "cup": "cups",
    "cups": "cups",
    "tbsp": "tablespoons",
    "tablespoon": "tablespoons",
    "tablespoons": "tablespoons",
    "esslöffel": "tablespoons",
    "tsp": "teaspoons",
    "teaspoon": "teaspoons",
    "teaspoons": "teaspoons",
    "teelöffel": "teaspoons",
    # Count
    "pc": "pieces",
    "pcs": "pieces",
    "piece": "pieces",
    "pieces": "pieces",
    "stück": "pieces",
    "stk": "pieces",
    "each": "each",
    "dozen": "dozen",
}

# Canonical unit -> (unit type, factor to base unit)
# Base units: grams (weight), ml (volume), pieces (count)
UNIT_FACTORS: dict[str, tuple[str, float]] = {
    "grams": ("weight", 1.0),
    "kg": ("weight", 1000.0),
    "pounds": ("weight", 453.592),
    "ounces": ("weight", 28.3495),
    "ml": ("volume", 1.0),
    "liters": ("volume", 1000.0),
    "cups": ("volume", 236.588),
    "tablespoons": ("volume", 14.7868),
    "teaspoons": ("volume", 4.92892),
    "pieces": ("count", 1.0),
    "each": ("count", 1.0),
    "dozen": ("count", 12.0),
}

BASE_UNITS: dict[str, str] = {
    "weight": "grams",
    "volume": "ml",
    "count": "pieces",
}


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a unit conversion."""

    quantity: float
    unit: str
    success: bool


# =============================================================================
# Functions
# =============================================================================


def normalize_unit(unit: str | None) -> str:
    """
    Normalize a unit abbreviation or spoken form to its canonical name.

    Unknown units are returned lowercased and stripped.

    Examples:
        "g" -> "grams"
        "Kilo" -> "kg"
        "Stück" -> "pieces"
    """
    if not unit:
        return ""
    unit_lower = unit.lower().strip()
    return UNIT_ALIASES.get(unit_lower, unit_lower)


def identify_unit_type(unit: str | None) -> tuple[str, float]:
    """
    Identify the unit type and the factor to its base unit.

    Returns:
        Tuple of (unit_type, conversion_factor); ("unknown", 1.0) if unrecognised.
    """
    return UNIT_FACTORS.get(normalize_unit(unit), ("unknown", 1.0))


def convert_quantity(quantity: float, from_unit: str, to_unit: str) -> ConversionResult:
    """
    Convert a quantity between two units of the same type.

    Args:
        quantity: Amount expressed in from_unit.
        from_unit: Source unit (any alias).
        to_unit: Target unit (any alias).

    Returns:
        ConversionResult; success is False (and the quantity unchanged)
        when the units are unknown or of different types.
    """
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)

    if source == target:
        return ConversionResult(quantity=quantity, unit=target, success=True)

    source_type, source_factor = identify_unit_type(source)
    target_type, target_factor = identify_unit_type(target)

    if source_type == "unknown" or source_type != target_type:
        logger.debug(f"Cannot convert from {from_unit!r} to {to_unit!r}")
        return ConversionResult(quantity=quantity, unit=source, success=False)

    return ConversionResult(
        quantity=quantity * source_factor / target_factor,
        unit=target,
        success=True,
    )


def convert_to_base_unit(quantity: float, unit: str) -> ConversionResult:
    """Convert a quantity to grams, ml or pieces depending on its unit type."""
    unit_type, _ = identify_unit_type(unit)
    if unit_type == "unknown":
        return ConversionResult(quantity=quantity, unit=normalize_unit(unit), success=False)
    return convert_quantity(quantity, unit, BASE_UNITS[unit_type])
