"""Grocery list planning: aggregation, pantry reconciliation and prioritization."""

from groceryplanner.plan.categories import Categorizer, MappingCategorizer
from groceryplanner.plan.items import (
    AggregatedGroceryItem,
    PantryRecord,
    PantryStatus,
    Priority,
    RawIngredientRequirement,
)
from groceryplanner.plan.options import AggregationOptions
from groceryplanner.plan.shopping_list import (
    AggregationResult,
    GroceryListAggregator,
    GroceryListSummary,
    summarize,
)

__all__ = [
    "AggregatedGroceryItem",
    "AggregationOptions",
    "AggregationResult",
    "Categorizer",
    "GroceryListAggregator",
    "GroceryListSummary",
    "MappingCategorizer",
    "PantryRecord",
    "PantryStatus",
    "Priority",
    "RawIngredientRequirement",
    "summarize",
]
