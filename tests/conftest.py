"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from menucost.costing import CostSettings, Ingredient, IngredientComponent, Prep, PrepComponent

# =============================================================================
# Costing Fixtures
# =============================================================================


@pytest.fixture
def cost_settings():
    """Explicit cost rates so tests do not depend on the environment."""
    return CostSettings(
        labor_cost_per_hour=15.0,
        overhead_percentage=25.0,
        target_food_cost_percentage=30.0,
        wastage_percentage=5.0,
        vat_percentage=19.0,
    )


@pytest.fixture
def tomato():
    """Tomatoes bought by the kilo."""
    return Ingredient(
        id="ing-tomato",
        name="Tomato",
        unit="kg",
        cost_per_unit=2.0,
        name_de="Tomate",
        name_en="Tomato",
        category="vegetables",
    )


@pytest.fixture
def olive_oil():
    """Olive oil bought by the liter."""
    return Ingredient(
        id="ing-olive-oil",
        name="Olive Oil",
        unit="l",
        cost_per_unit=8.0,
        name_de="Olivenöl",
        category="oils",
    )


@pytest.fixture
def pesto():
    """Basil pesto made in 500ml batches."""
    return Prep(
        id="prep-pesto",
        name="Basil Pesto",
        batch_yield="500ml",
        cost_per_batch=10.0,
        name_de="Basilikumpesto",
    )


@pytest.fixture
def tomato_line(tomato):
    """2 kg of tomatoes: 2.0 x 2 x 1.05 = 4.20."""
    return IngredientComponent(ingredient=tomato, quantity=2, unit="kg")


@pytest.fixture
def pesto_line(pesto):
    """100 ml of pesto: 10.0 / 500 x 100 = 2.00."""
    return PrepComponent(prep=pesto, quantity=100, unit="ml")


# =============================================================================
# Voice Fixtures
# =============================================================================


@pytest.fixture
def small_catalog():
    """A short ingredient catalog for matching tests."""
    return ["avocado", "tomato", "onion", "garlic", "olive oil", "lemon", "lemon juice"]


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client():
    """Test client for the FastAPI app."""
    from menucost.main import app

    return TestClient(app)
