"""API routers for the groceryplanner application."""

from groceryplanner.routers.grocery_lists import router as grocery_lists_router

__all__ = [
    "grocery_lists_router",
]
