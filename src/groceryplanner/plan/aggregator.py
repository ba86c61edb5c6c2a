"""Group per-recipe ingredient requirements and sum them in canonical units."""

from collections import Counter
from dataclasses import dataclass, field

from groceryplanner.logging_config import get_logger
from groceryplanner.normalize.catalog import UnitCatalog
from groceryplanner.normalize.units import NormalizedAmount, combine_amounts, normalize
from groceryplanner.plan.items import RawIngredientRequirement

logger = get_logger(__name__)

VERIFICATION_NOTE = "manual verification recommended"


@dataclass
class RequirementGroup:
    """All requirements for one ingredient (or one unit of it), with their totals."""

    ingredient_id: str
    ingredient_name: str
    requirements: list[RawIngredientRequirement] = field(default_factory=list)
    total_grams: float | None = None
    total_milliliters: float | None = None

    # Best-effort total when nothing could be normalized
    fallback_quantity: float | None = None
    fallback_unit: str | None = None

    # Requirements left out of the combined total
    excluded: list[NormalizedAmount] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def is_normalized(self) -> bool:
        return self.total_grams is not None or self.total_milliliters is not None

    @property
    def combinable(self) -> bool:
        return self.is_normalized and not self.excluded


def group_by_ingredient(
    requirements: list[RawIngredientRequirement],
) -> dict[str, list[RawIngredientRequirement]]:
    """Group requirements by ingredient_id, keeping first-seen order."""
    groups: dict[str, list[RawIngredientRequirement]] = {}
    for requirement in requirements:
        groups.setdefault(requirement.ingredient_id, []).append(requirement)
    return groups


def display_name(requirements: list[RawIngredientRequirement]) -> str:
    """Most frequent name among the requirements; ties go to the alphabetically first."""
    counts = Counter(req.ingredient_name for req in requirements)
    return min(counts, key=lambda name: (-counts[name], name))


def _format_amount(quantity: float, unit: str) -> str:
    qty = f"{quantity:.2f}".rstrip("0").rstrip(".")
    return f"{qty} {unit}".strip()


def _fallback_group(
    ingredient_id: str,
    ingredient_name: str,
    requirements: list[RawIngredientRequirement],
) -> RequirementGroup:
    """Sum raw quantities, assuming the first requirement's unit applies to all."""
    unit = requirements[0].unit_code
    group = RequirementGroup(
        ingredient_id=ingredient_id,
        ingredient_name=ingredient_name,
        requirements=list(requirements),
        fallback_quantity=sum(req.quantity for req in requirements),
        fallback_unit=unit,
    )

    note = f"Non-standard unit ({unit}) - {VERIFICATION_NOTE}"
    distinct_units = list(dict.fromkeys(req.unit_code.strip().lower() for req in requirements))
    if len(distinct_units) > 1:
        note += f" (mixed units: {', '.join(distinct_units)})"
        logger.warning(
            f"Summed {ingredient_id} across mismatched units {distinct_units} as '{unit}'"
        )
    group.notes.append(note)
    return group


def _split_by_unit(
    requirements: list[RawIngredientRequirement],
) -> list[list[RawIngredientRequirement]]:
    by_unit: dict[str, list[RawIngredientRequirement]] = {}
    for requirement in requirements:
        by_unit.setdefault(requirement.unit_code.strip().lower(), []).append(requirement)
    return list(by_unit.values())


def aggregate_group(
    ingredient_id: str,
    requirements: list[RawIngredientRequirement],
    catalog: UnitCatalog,
    split_mismatched_units: bool = False,
) -> list[RequirementGroup]:
    """
    Aggregate the requirements of one ingredient.

    Combinable requirements are summed per family. When none are combinable
    the raw quantities are summed under the first unit and flagged for manual
    verification; with ``split_mismatched_units`` each distinct unit becomes
    its own group instead. Non-combinable requirements in a group that also
    has combinable ones never enter the combined total.
    """
    name = display_name(requirements)
    normalized = [(req, normalize(req.quantity, req.unit_code, catalog)) for req in requirements]
    combinable = [(req, amount) for req, amount in normalized if amount.combinable]
    non_combinable = [(req, amount) for req, amount in normalized if not amount.combinable]

    if not combinable:
        if split_mismatched_units:
            return [
                _fallback_group(ingredient_id, name, unit_reqs)
                for unit_reqs in _split_by_unit([req for req, _ in non_combinable])
            ]
        return [_fallback_group(ingredient_id, name, requirements)]

    total_grams, total_milliliters = combine_amounts(amount for _, amount in combinable)
    group = RequirementGroup(
        ingredient_id=ingredient_id,
        ingredient_name=name,
        requirements=[req for req, _ in combinable],
        total_grams=total_grams,
        total_milliliters=total_milliliters,
    )

    if not non_combinable:
        return [group]

    if split_mismatched_units:
        return [group] + [
            _fallback_group(ingredient_id, name, unit_reqs)
            for unit_reqs in _split_by_unit([req for req, _ in non_combinable])
        ]

    # Keep the unconvertible requirements attached but out of the total
    group.requirements = list(requirements)
    group.excluded = [amount for _, amount in non_combinable]
    excluded_text = ", ".join(
        _format_amount(amount.original_quantity, amount.original_unit)
        for amount in group.excluded
    )
    group.notes.append(f"Not combined: {excluded_text} - {VERIFICATION_NOTE}")
    logger.debug(f"{ingredient_id}: {len(group.excluded)} requirement(s) left out of total")
    return [group]


def aggregate_requirements(
    requirements: list[RawIngredientRequirement],
    catalog: UnitCatalog,
    split_mismatched_units: bool = False,
) -> list[RequirementGroup]:
    """
    Aggregate a meal plan's requirements into per-ingredient groups.

    Args:
        requirements: Flat list of per-recipe, per-day requirements.
        catalog: Unit catalog used for normalization.
        split_mismatched_units: Keep each unconvertible unit as its own group
            instead of summing across units.

    Returns:
        Groups in first-seen ingredient order.
    """
    groups: list[RequirementGroup] = []
    for ingredient_id, ingredient_reqs in group_by_ingredient(requirements).items():
        groups.extend(
            aggregate_group(ingredient_id, ingredient_reqs, catalog, split_mismatched_units)
        )
    return groups
