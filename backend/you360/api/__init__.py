"""API module."""

from .auth import router as auth_router
from .wellness import router as wellness_router
from .food import router as food_router
from .chat import router as chat_router
from .routines import router as routines_router

__all__ = ['auth_router', 'wellness_router', 'food_router', 'chat_router', 'routines_router']
