"""OpenAI implementation of the recipe provider."""

from __future__ import annotations

import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError
from openai.types.chat import (
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam
)

from savebite.services.ai.base import RecipeProvider, RecipeProviderConfigError, RecipeProviderError
from savebite.services.ai.prompt_templates import build_recipe_prompt

logger = logging.getLogger(__name__)


class OpenAIRecipeProvider(RecipeProvider):
    """Recipe provider backed by the OpenAI chat completions API."""

    def __init__(
            self,
            api_key: str | None,
            model: str = "gpt-4o-mini",
            timeout: float = 30.0,
            client: Any | None = None,
    ):
        """Initialize the provider.

        Args:
            api_key: OpenAI API key.
            model: OpenAI model to use.
            timeout: Per-request timeout in seconds.
            client: Pre-built async client (used by tests).
        """
        if not api_key and client is None:
            raise RecipeProviderConfigError("OpenAI API key is not configured")

        self.model = model
        self.timeout = timeout
        self.client = client or AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        logger.debug(f"Initialized OpenAIRecipeProvider with model: {model}")

    async def generate_recipe(self, food_name: str, **kwargs: Any) -> str:
        """Generate a recipe with a single chat completion call.

        Raises:
            RecipeProviderError: If the call fails or the response is empty.
        """
        system_prompt, user_prompt = build_recipe_prompt(food_name)
        messages = [
            ChatCompletionSystemMessageParam(role="system", content=system_prompt),
            ChatCompletionUserMessageParam(role="user", content=user_prompt)
        ]

        logger.info(f"Requesting recipe from OpenAI for {food_name!r}")
        logger.debug(f"Model: {self.model}")

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=kwargs.get("max_tokens", 1500),
                temperature=kwargs.get("temperature", 0.7),
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed for {food_name!r}: {str(e)}")
            raise RecipeProviderError(f"Recipe request failed: {str(e)}") from e

        fragments = self._collect_fragments(completion)
        if not fragments:
            logger.error(f"OpenAI returned no usable content for {food_name!r}")
            raise RecipeProviderError("Empty response from OpenAI")

        logger.debug(f"Response ID: {getattr(completion, 'id', None)}")
        logger.debug(f"Usage: {getattr(completion, 'usage', None)}")
        return "".join(f"{fragment}\n" for fragment in fragments)

    @staticmethod
    def _collect_fragments(completion: Any) -> list[str]:
        """Return the non-empty text content of every returned choice."""
        fragments: list[str] = []
        for choice in getattr(completion, "choices", None) or []:
            message = getattr(choice, "message", None)
            content = getattr(message, "content", None)
            if isinstance(content, str) and content.strip():
                fragments.append(content)
        return fragments
