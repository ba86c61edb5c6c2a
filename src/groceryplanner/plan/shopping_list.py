"""Grocery list generation from meal-plan ingredient requirements."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from groceryplanner.config import Settings, get_settings
from groceryplanner.logging_config import get_logger
from groceryplanner.normalize.catalog import MeasurementFamily, UnitCatalog
from groceryplanner.normalize.units import convert_canonical
from groceryplanner.plan.aggregator import RequirementGroup, aggregate_requirements
from groceryplanner.plan.categories import Categorizer, no_category
from groceryplanner.plan.display import (
    format_for_display,
    optimize_for_shopping,
    round_half_up,
    select_display,
)
from groceryplanner.plan.items import (
    AggregatedGroceryItem,
    PantryRecord,
    PantryStatus,
    RawIngredientRequirement,
)
from groceryplanner.plan.options import AggregationOptions
from groceryplanner.plan.pantry import PantryReconciliation, index_pantry, reconcile
from groceryplanner.plan.priority import NOTE_SEPARATOR, assign_priority, build_notes, sort_items
from groceryplanner.plan.validation import screen_requirements, validate_items

logger = get_logger(__name__)


def _other_family_note(
    shown: MeasurementFamily,
    grams: float | None,
    milliliters: float | None,
) -> str | None:
    """Note the amount in the family the display quantity leaves out."""
    if not grams or not milliliters:
        return None
    if shown is MeasurementFamily.MASS:
        other = format_for_display(round_half_up(milliliters), "ml")
    else:
        other = format_for_display(round_half_up(grams), "g")
    return f"Needed by weight and by volume - also {other}"


@dataclass
class AggregationResult:
    """Sorted grocery items plus validation findings."""

    items: list[AggregatedGroceryItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class GroceryListSummary:
    """Counts over an aggregated grocery list."""

    total_items: int
    items_by_category: dict[str, int]
    items_by_priority: dict[str, int]
    items_by_pantry_status: dict[str, int]
    pantry_savings_count: int


def summarize(items: list[AggregatedGroceryItem]) -> GroceryListSummary:
    """Count items by category, priority and pantry status."""
    return GroceryListSummary(
        total_items=len(items),
        items_by_category=dict(Counter(item.category for item in items)),
        items_by_priority=dict(Counter(item.priority.value for item in items)),
        items_by_pantry_status=dict(Counter(item.pantry_status.value for item in items)),
        pantry_savings_count=sum(
            1 for item in items if item.pantry_status is PantryStatus.SUFFICIENT
        ),
    )


class GroceryListAggregator:
    """
    Builds a prioritized grocery list from meal-plan requirements with:
    - Unit normalization into grams / milliliters
    - Quantity aggregation across recipes and days
    - Pantry deficit computation
    - Readable display units, priorities and notes
    """

    def __init__(
        self,
        catalog: UnitCatalog,
        categorizer: Categorizer = no_category,
        settings: Settings | None = None,
    ):
        self.catalog = catalog
        self.categorizer = categorizer
        self.settings = settings or get_settings()

    def aggregate(
        self,
        raw_requirements: list[RawIngredientRequirement],
        pantry_snapshot: list[PantryRecord],
        options: AggregationOptions | None = None,
        *,
        today: date | None = None,
    ) -> AggregationResult:
        """
        Aggregate requirements into a sorted grocery list.

        Args:
            raw_requirements: Flat per-recipe, per-day requirements.
            pantry_snapshot: Current pantry records for the household.
            options: Aggregation options (defaults when omitted).
            today: Reference date for meal and expiry urgency.

        Returns:
            AggregationResult with items, warnings and errors. Malformed
            requirements are reported as errors and left out; the rest of
            the list is still built.
        """
        options = options or AggregationOptions()
        today = today or date.today()

        logger.info(
            f"Aggregating {len(raw_requirements)} requirements "
            f"against {len(pantry_snapshot)} pantry records"
        )

        requirements, report = screen_requirements(raw_requirements)
        pantry = index_pantry(pantry_snapshot) if options.include_pantry_check else {}

        groups = aggregate_requirements(
            requirements,
            self.catalog,
            split_mismatched_units=options.split_mismatched_units,
        )

        items: list[AggregatedGroceryItem] = []
        for group in groups:
            item = self._build_item(group, pantry.get(group.ingredient_id), options, today)
            if item.display_quantity < options.minimum_quantity_threshold:
                logger.debug(
                    f"Dropping {item.ingredient_name}: {item.display_quantity} "
                    f"below threshold {options.minimum_quantity_threshold}"
                )
                continue
            if options.optimize_quantities:
                self._optimize(item)
            items.append(item)

        items = sort_items(items)
        report.extend(validate_items(items))

        logger.info(
            f"Aggregated grocery list: {len(items)} items, "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )

        return AggregationResult(items=items, warnings=report.warnings, errors=report.errors)

    def _display_for(
        self,
        group: RequirementGroup,
        reconciliation: PantryReconciliation,
        options: AggregationOptions,
    ) -> tuple[float, str, str | None]:
        """Display quantity and unit, plus a note for the family left out of the display."""
        if not group.is_normalized:
            quantity, unit_label = select_display(
                None, None, group.fallback_quantity, group.fallback_unit
            )
            return quantity, unit_label, None

        # Show what still has to be bought; fall back to the full need when covered
        if reconciliation.has_deficit:
            grams = reconciliation.deficit_grams or None
            milliliters = reconciliation.deficit_milliliters or None
        else:
            grams, milliliters = group.total_grams, group.total_milliliters

        preferred = options.preferred_units.get(group.ingredient_id)
        if preferred:
            converted = convert_canonical(grams, milliliters, preferred, self.catalog)
            unit = self.catalog.lookup(preferred)
            if converted is not None and unit is not None:
                note = _other_family_note(unit.family, grams, milliliters)
                return round_half_up(converted), unit.display_name, note
            logger.debug(f"Preferred unit '{preferred}' not usable for {group.ingredient_id}")

        # The ladder prefers mass when both families are needed
        quantity, unit_label = select_display(grams, milliliters)
        shown = MeasurementFamily.MASS if grams else MeasurementFamily.VOLUME
        return quantity, unit_label, _other_family_note(shown, grams, milliliters)

    def _build_item(
        self,
        group: RequirementGroup,
        pantry_record: PantryRecord | None,
        options: AggregationOptions,
        today: date,
    ) -> AggregatedGroceryItem:
        reconciliation = reconcile(group, pantry_record, today)
        display_quantity, display_unit, family_note = self._display_for(
            group, reconciliation, options
        )
        aggregation_notes = [*group.notes, family_note] if family_note else group.notes

        category = (
            self.categorizer(group.ingredient_id, group.ingredient_name)
            or self.settings.default_category
        )

        return AggregatedGroceryItem(
            ingredient_id=group.ingredient_id,
            ingredient_name=group.ingredient_name,
            display_quantity=display_quantity,
            display_unit=display_unit,
            display_text=format_for_display(display_quantity, display_unit),
            category=category,
            priority=assign_priority(
                group.requirements,
                display_quantity,
                reconciliation.expires_in_days,
                today,
                self.settings,
            ),
            pantry_status=reconciliation.status,
            combinable=group.combinable,
            total_needed_grams=group.total_grams,
            total_needed_milliliters=group.total_milliliters,
            pantry_available_grams=reconciliation.available_grams,
            pantry_available_milliliters=reconciliation.available_milliliters,
            deficit_grams=reconciliation.deficit_grams,
            deficit_milliliters=reconciliation.deficit_milliliters,
            expires_in_days=reconciliation.expires_in_days,
            contributing_requirements=list(group.requirements),
            notes=build_notes(
                group.requirements,
                reconciliation.status,
                reconciliation.expires_in_days,
                self.settings,
                aggregation_notes=aggregation_notes,
            ),
        )

    @staticmethod
    def _optimize(item: AggregatedGroceryItem) -> None:
        optimized = optimize_for_shopping(item.display_quantity)
        if optimized == item.display_quantity:
            return
        note = f"(Optimized from {item.display_quantity:g})"
        item.notes = NOTE_SEPARATOR.join(part for part in (item.notes, note) if part)
        item.display_quantity = optimized
        item.display_text = format_for_display(optimized, item.display_unit)
