"""Consistency checks over requirements and the aggregated list."""

import math
from dataclasses import dataclass, field

from groceryplanner.logging_config import get_logger
from groceryplanner.plan.items import AggregatedGroceryItem, PantryStatus, RawIngredientRequirement

logger = get_logger(__name__)


@dataclass
class ValidationReport:
    """Errors block downstream use of a list; warnings are advisory."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationReport") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


def screen_requirements(
    requirements: list[RawIngredientRequirement],
) -> tuple[list[RawIngredientRequirement], ValidationReport]:
    """Split requirements into usable records and input shape errors."""
    report = ValidationReport()
    usable: list[RawIngredientRequirement] = []

    for index, req in enumerate(requirements):
        if not req.ingredient_id or not req.ingredient_name:
            report.errors.append(f"Requirement #{index}: missing ingredient_id or ingredient_name")
        elif req.quantity is None or not math.isfinite(req.quantity):
            report.errors.append(
                f"Requirement #{index} ({req.ingredient_name}): "
                f"non-finite quantity {req.quantity}"
            )
        elif req.quantity <= 0:
            report.errors.append(
                f"Requirement #{index} ({req.ingredient_name}): "
                f"non-positive quantity {req.quantity}"
            )
        else:
            usable.append(req)

    if report.errors:
        logger.warning(f"Excluded {len(report.errors)} malformed requirement(s)")
    return usable, report


def validate_items(items: list[AggregatedGroceryItem]) -> ValidationReport:
    """Check the aggregated list; never raises and never drops items."""
    report = ValidationReport()

    for item in items:
        if not item.ingredient_id or not item.ingredient_name:
            report.errors.append("Invalid item: missing ingredient_id or name")

        if item.display_quantity <= 0:
            report.errors.append(
                f"Invalid quantity for {item.ingredient_name}: {item.display_quantity}"
            )

        if item.pantry_status is PantryStatus.SUFFICIENT and item.has_deficit:
            report.warnings.append(f"{item.ingredient_name}: marked as sufficient but has deficit")

        if not item.contributing_requirements:
            report.warnings.append(f"{item.ingredient_name}: not used in any recipes")

    for warning in report.warnings:
        logger.warning(warning)
    return report
