"""Exceptions raised by menucost."""


class MenucostError(Exception):
    """Base class for menucost errors."""


class InvalidCostInputError(MenucostError, ValueError):
    """Raised when a cost calculation receives input it cannot clamp to a safe value."""
