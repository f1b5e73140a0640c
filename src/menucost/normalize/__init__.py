"""Unit normalization shared by the parsers and the cost estimates."""

from menucost.normalize.units import (
    BASE_UNITS,
    UNIT_ALIASES,
    ConversionResult,
    convert_quantity,
    convert_to_base_unit,
    identify_unit_type,
    normalize_unit,
)

__all__ = [
    "BASE_UNITS",
    "UNIT_ALIASES",
    "ConversionResult",
    "convert_quantity",
    "convert_to_base_unit",
    "identify_unit_type",
    "normalize_unit",
]
