"""CRUD operations package."""

from savebite.crud import food

__all__ = ["food"]
