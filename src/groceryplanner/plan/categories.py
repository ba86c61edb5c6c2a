"""Pluggable ingredient categorization."""

from collections.abc import Mapping
from typing import Protocol


class Categorizer(Protocol):
    """Returns a category for an ingredient, or None when it has no opinion."""

    def __call__(self, ingredient_id: str, ingredient_name: str) -> str | None: ...


class MappingCategorizer:
    """Looks categories up by ingredient_id, then by lower-cased name."""

    def __init__(self, categories: Mapping[str, str]):
        self.categories = {key.strip().lower(): value for key, value in categories.items()}

    def __call__(self, ingredient_id: str, ingredient_name: str) -> str | None:
        return self.categories.get(ingredient_id.strip().lower()) or self.categories.get(
            ingredient_name.strip().lower()
        )


def no_category(ingredient_id: str, ingredient_name: str) -> str | None:
    """Default categorizer: leaves every ingredient to the configured default."""
    return None
