"""Abstract base class for recipe providers."""

from __future__ import annotations

import abc


class RecipeProviderError(Exception):
    """The provider call failed or returned nothing usable."""


class RecipeProviderConfigError(RecipeProviderError):
    """The provider cannot be constructed from the current configuration."""


class RecipeProvider(abc.ABC):
    """Interface for services that turn a food name into recipe text.

    Implementations make exactly one upstream call per request and do not
    retry. Timeouts and cancellation are enforced by the caller.
    """

    @abc.abstractmethod
    async def generate_recipe(self, food_name: str) -> str:
        """Generate a recipe for ``food_name``.

        Args:
            food_name: Food the recipe should be built around.

        Returns:
            Recipe text with every returned content fragment on its own line.

        Raises:
            RecipeProviderError: If the call fails or returns no usable content.
        """
