"""API routers for the menucost application."""

from menucost.routers.costing import router as costing_router
from menucost.routers.voice import router as voice_router

__all__ = [
    "costing_router",
    "voice_router",
]
