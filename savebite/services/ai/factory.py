"""AI service factory for creating recipe provider instances."""

from __future__ import annotations

from savebite.core.config import Settings
from savebite.services.ai.base import RecipeProvider, RecipeProviderConfigError
from savebite.services.ai.openai_service import OpenAIRecipeProvider


class AIServiceFactory:
    """Factory for creating recipe provider instances."""

    @staticmethod
    def create_recipe_provider(settings: Settings, provider: str = "openai") -> RecipeProvider:
        """Create a recipe provider from settings.

        Args:
            settings: Application settings holding provider credentials.
            provider: Provider name (default: "openai").

        Returns:
            Recipe provider instance.

        Raises:
            RecipeProviderConfigError: If the provider is unknown or not configured.
        """
        if provider.lower() == "openai":
            return OpenAIRecipeProvider(
                api_key=settings.OPENAI_API_KEY,
                model=settings.OPENAI_MODEL,
                timeout=settings.RECIPE_PROVIDER_TIMEOUT_SECONDS,
            )
        raise RecipeProviderConfigError(f"Unsupported AI provider: {provider}")
