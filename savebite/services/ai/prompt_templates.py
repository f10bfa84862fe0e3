"""Prompt templates for recipe generation."""

from __future__ import annotations

RECIPE_SYSTEM_PROMPT = (
    "You are Chef SaveBite, a friendly home cook who helps people use up food "
    "before it expires. Answer in plain text."
)

RECIPE_USER_PROMPT = (
    "Act as a chef. Give an easy but tasty recipe with exact measurements for: "
    "{food_name}. At the end, write 'by Chef SaveBite'."
)


def build_recipe_prompt(food_name: str) -> tuple[str, str]:
    """Return the (system, user) prompt pair for ``food_name``."""
    return RECIPE_SYSTEM_PROMPT, RECIPE_USER_PROMPT.format(food_name=food_name.strip())
