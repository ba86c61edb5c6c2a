"""Grocery planning records: requirements in, pantry stock, aggregated list items out."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class Priority(str, Enum):
    """Shopping priority of an aggregated item."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


class PantryStatus(str, Enum):
    """How well on-hand stock covers an item's requirement."""

    NONE = "none"
    PARTIAL = "partial"
    SUFFICIENT = "sufficient"

    @property
    def rank(self) -> int:
        return _PANTRY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
_PANTRY_RANK = {PantryStatus.NONE: 0, PantryStatus.PARTIAL: 1, PantryStatus.SUFFICIENT: 2}


@dataclass(frozen=True)
class RawIngredientRequirement:
    """One ingredient line from one recipe on one meal-plan day."""

    ingredient_id: str
    ingredient_name: str
    quantity: float
    unit_code: str
    source_recipe_id: str = ""
    source_recipe_title: str = ""
    meal_date: date | None = None
    meal_type: str = ""
    servings_multiplier_applied: float = 1.0
    preparation_note: str | None = None


@dataclass(frozen=True)
class PantryRecord:
    """On-hand stock for one ingredient, in canonical units."""

    ingredient_id: str
    ingredient_name: str = ""
    on_hand_grams: float | None = None
    on_hand_milliliters: float | None = None
    expiry_date: date | None = None
    last_audited_at: datetime | None = None


@dataclass
class AggregatedGroceryItem:
    """A single line of the final shopping list."""

    ingredient_id: str
    ingredient_name: str
    display_quantity: float
    display_unit: str
    display_text: str = ""
    category: str = ""
    priority: Priority = Priority.LOW
    pantry_status: PantryStatus = PantryStatus.NONE
    combinable: bool = True

    total_needed_grams: float | None = None
    total_needed_milliliters: float | None = None
    pantry_available_grams: float | None = None
    pantry_available_milliliters: float | None = None
    deficit_grams: float | None = None
    deficit_milliliters: float | None = None
    expires_in_days: int | None = None

    contributing_requirements: list[RawIngredientRequirement] = field(default_factory=list)
    notes: str = ""

    @property
    def has_deficit(self) -> bool:
        return bool(self.deficit_grams) or bool(self.deficit_milliliters)

    def sort_key(self) -> tuple[int, int, str, str, str, str]:
        """Ordering for the final list: priority, pantry status, category, name."""
        return (
            self.priority.rank,
            self.pantry_status.rank,
            self.category,
            self.ingredient_name.lower(),
            self.ingredient_id,
            # Lines split by unit share everything above
            self.display_unit.lower(),
        )
