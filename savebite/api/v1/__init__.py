"""API v1 endpoints package."""

from savebite.api.v1 import auth, food, recipe

__all__ = ["auth", "food", "recipe"]
