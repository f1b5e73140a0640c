"""Tests for unit normalization and conversion."""

import pytest

from menucost.normalize import (
    convert_quantity,
    convert_to_base_unit,
    identify_unit_type,
    normalize_unit,
)


class TestNormalizeUnit:
    """Tests for canonical unit names."""

    @pytest.mark.parametrize(
        "unit,expected",
        [
            ("g", "grams"),
            ("Gramm", "grams"),
            ("kilo", "kg"),
            ("KG", "kg"),
            ("l", "liters"),
            ("litre", "liters"),
            ("tbsp", "tablespoons"),
            ("Stück", "pieces"),
            ("pcs", "pieces"),
            ("lbs", "pounds"),
        ],
    )
    def test_aliases(self, unit, expected):
        assert normalize_unit(unit) == expected

    def test_unknown_unit_lowercased(self):
        assert normalize_unit("  Bunch ") == "bunch"

    def test_empty_unit(self):
        assert normalize_unit("") == ""
        assert normalize_unit(None) == ""


class TestConversion:
    """Tests for converting between units."""

    def test_identify_unit_type(self):
        assert identify_unit_type("kg") == ("weight", 1000.0)
        assert identify_unit_type("ml") == ("volume", 1.0)
        assert identify_unit_type("dozen") == ("count", 12.0)
        assert identify_unit_type("bunch") == ("unknown", 1.0)

    def test_weight(self):
        result = convert_quantity(500, "g", "kg")
        assert result.success is True
        assert result.quantity == pytest.approx(0.5)
        assert result.unit == "kg"

    def test_volume(self):
        result = convert_quantity(2, "liters", "ml")
        assert result.quantity == pytest.approx(2000)

    def test_same_unit_via_alias(self):
        result = convert_quantity(3, "kilo", "kg")
        assert result.success is True
        assert result.quantity == 3

    def test_incompatible_types(self):
        """Test weight cannot be converted to volume."""
        result = convert_quantity(200, "grams", "ml")
        assert result.success is False
        assert result.quantity == 200
        assert result.unit == "grams"

    def test_unknown_units(self):
        assert convert_quantity(1, "bunch", "grams").success is False

    def test_to_base_unit(self):
        assert convert_to_base_unit(1, "dozen").quantity == 12
        assert convert_to_base_unit(1, "dozen").unit == "pieces"
        assert convert_to_base_unit(1.5, "kg").quantity == pytest.approx(1500)
        assert convert_to_base_unit(1, "bunch").success is False
