"""Shopping priority, item notes, and final list ordering."""

from datetime import date, timedelta

from groceryplanner.config import Settings
from groceryplanner.plan.items import (
    AggregatedGroceryItem,
    PantryStatus,
    Priority,
    RawIngredientRequirement,
)

NOTE_SEPARATOR = " • "


def assign_priority(
    requirements: list[RawIngredientRequirement],
    display_quantity: float,
    expires_in_days: int | None,
    today: date,
    settings: Settings,
) -> Priority:
    """
    Assign a shopping priority; the first matching rule wins.

    High: a meal is coming up soon, the quantity is large, or the pantry
    stock is about to expire. Medium: a moderate quantity or many
    requirements. Low otherwise.
    """
    soon = today + timedelta(days=settings.near_meal_days)
    has_early_meal = any(
        req.meal_date is not None and req.meal_date <= soon for req in requirements
    )
    is_large = display_quantity > settings.large_quantity_threshold
    is_expiring = expires_in_days is not None and expires_in_days <= settings.expiry_window_days

    if has_early_meal or is_large or is_expiring:
        return Priority.HIGH

    if (
        display_quantity > settings.medium_quantity_threshold
        or len(requirements) > settings.medium_requirement_count
    ):
        return Priority.MEDIUM

    return Priority.LOW


def _expiry_note(days: int, settings: Settings) -> str | None:
    if days > settings.expiry_window_days:
        return None
    marker = "🔴" if days <= settings.expiry_critical_days else "🟡"
    if days < 0:
        return f"{marker} Pantry item expired {-days} days ago"
    if days == 0:
        return f"{marker} Pantry item expires today"
    return f"{marker} Pantry item expires in {days} days"


def build_notes(
    requirements: list[RawIngredientRequirement],
    pantry_status: PantryStatus,
    expires_in_days: int | None,
    settings: Settings,
    aggregation_notes: list[str] | None = None,
) -> str:
    """Join the human-readable notes for one item; empty when nothing applies."""
    notes: list[str] = list(aggregation_notes or [])

    if pantry_status is PantryStatus.SUFFICIENT:
        notes.append("✅ Sufficient quantity in pantry")
    elif pantry_status is PantryStatus.PARTIAL:
        notes.append("⚠️ Partial quantity in pantry - need to buy more")

    if expires_in_days is not None:
        expiry = _expiry_note(expires_in_days, settings)
        if expiry:
            notes.append(expiry)

    if len(requirements) > settings.many_recipes_threshold:
        notes.append(f"Used in {len(requirements)} different recipes")

    preparations = list(
        dict.fromkeys(
            req.preparation_note.strip()
            for req in requirements
            if req.preparation_note and req.preparation_note.strip()
        )
    )
    if preparations:
        notes.append(f"Prep notes: {', '.join(preparations)}")

    return NOTE_SEPARATOR.join(notes)


def sort_items(items: list[AggregatedGroceryItem]) -> list[AggregatedGroceryItem]:
    """Order by priority, pantry status (need-to-buy first), category and name."""
    return sorted(items, key=lambda item: item.sort_key())
