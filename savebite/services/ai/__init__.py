"""AI recipe providers for SaveBite."""

from savebite.services.ai.base import RecipeProvider, RecipeProviderConfigError, RecipeProviderError
from savebite.services.ai.factory import AIServiceFactory

__all__ = [
    "AIServiceFactory",
    "RecipeProvider",
    "RecipeProviderConfigError",
    "RecipeProviderError",
]
