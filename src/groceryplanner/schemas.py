"""Common data schemas for grocery list aggregation."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from groceryplanner.plan.items import (
    AggregatedGroceryItem,
    PantryRecord,
    PantryStatus,
    Priority,
    RawIngredientRequirement,
)
from groceryplanner.plan.options import AggregationOptions

# =============================================================================
# Request/Response Schemas
# =============================================================================


class RequirementSchema(BaseModel):
    """One ingredient requirement from a recipe on a meal-plan day."""

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

    def to_requirement(self) -> RawIngredientRequirement:
        return RawIngredientRequirement(**self.model_dump())


class PantryRecordSchema(BaseModel):
    """On-hand pantry stock for one ingredient."""

    ingredient_id: str
    ingredient_name: str = ""
    on_hand_grams: float | None = Field(None, ge=0)
    on_hand_milliliters: float | None = Field(None, ge=0)
    expiry_date: date | None = None
    last_audited_at: datetime | None = None

    def to_record(self) -> PantryRecord:
        return PantryRecord(**self.model_dump())


class AggregateRequest(BaseModel):
    """Request to aggregate a meal plan's requirements into a grocery list."""

    meal_plan_id: str | None = None
    household_id: str | None = None
    requirements: list[RequirementSchema]
    pantry: list[PantryRecordSchema] = Field(default_factory=list)
    options: AggregationOptions = Field(default_factory=AggregationOptions)
    today: date | None = Field(None, description="Reference date; defaults to the server date")


class ContributingRequirement(BaseModel):
    """A requirement as it contributed to an item, in its original unit."""

    model_config = ConfigDict(from_attributes=True)

    source_recipe_id: str
    source_recipe_title: str
    meal_date: date | None
    meal_type: str
    quantity: float
    unit_code: str
    preparation_note: str | None = None


class GroceryItemResponse(BaseModel):
    """Single line of the aggregated grocery list."""

    model_config = ConfigDict(from_attributes=True)

    ingredient_id: str
    ingredient_name: str
    display_quantity: float
    display_unit: str
    display_text: str
    category: str
    priority: Priority
    pantry_status: PantryStatus
    combinable: bool
    total_needed_grams: float | None = None
    total_needed_milliliters: float | None = None
    pantry_available_grams: float | None = None
    pantry_available_milliliters: float | None = None
    deficit_grams: float | None = None
    deficit_milliliters: float | None = None
    expires_in_days: int | None = None
    contributing_requirements: list[ContributingRequirement] = Field(default_factory=list)
    notes: str = ""

    @classmethod
    def from_item(cls, item: AggregatedGroceryItem) -> "GroceryItemResponse":
        return cls.model_validate(item)


class GroceryListSummarySchema(BaseModel):
    """Counts over an aggregated list."""

    model_config = ConfigDict(from_attributes=True)

    total_items: int
    items_by_category: dict[str, int]
    items_by_priority: dict[str, int]
    items_by_pantry_status: dict[str, int]
    pantry_savings_count: int


class AggregateResponse(BaseModel):
    """Aggregated grocery list with validation findings."""

    meal_plan_id: str | None = None
    items: list[GroceryItemResponse]
    warnings: list[str]
    errors: list[str]
    is_valid: bool
    summary: GroceryListSummarySchema


class UnitResponse(BaseModel):
    """Unit catalog entry."""

    code: str
    display_name: str
    family: str
    canonical_factor: float | None = None
    normalizable: bool
