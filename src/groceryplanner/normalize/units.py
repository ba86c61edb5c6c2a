"""Quantity normalization into canonical units (grams / milliliters)."""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from groceryplanner.normalize.catalog import MeasurementFamily, UnitCatalog


@dataclass(frozen=True)
class NormalizedAmount:
    """A quantity converted into its canonical unit, or flagged as not normalizable."""

    original_quantity: float
    original_unit: str
    normalized_grams: float | None = None
    normalized_milliliters: float | None = None
    combinable: bool = False

    @property
    def family(self) -> MeasurementFamily | None:
        if self.normalized_grams is not None:
            return MeasurementFamily.MASS
        if self.normalized_milliliters is not None:
            return MeasurementFamily.VOLUME
        return None


def normalize(quantity: float, unit_code: str, catalog: UnitCatalog) -> NormalizedAmount:
    """
    Convert a quantity into grams or milliliters.

    Unknown units and units without a conversion factor are never an error:
    the result is returned with ``combinable=False`` and the original quantity
    and unit echoed for display.
    """
    unit = catalog.lookup(unit_code)
    if unit is None or unit.canonical_factor is None:
        return NormalizedAmount(original_quantity=quantity, original_unit=unit_code)

    value = quantity * unit.canonical_factor
    if unit.family is MeasurementFamily.MASS:
        return NormalizedAmount(
            original_quantity=quantity,
            original_unit=unit_code,
            normalized_grams=value,
            combinable=True,
        )
    return NormalizedAmount(
        original_quantity=quantity,
        original_unit=unit_code,
        normalized_milliliters=value,
        combinable=True,
    )


def denormalize(amount: NormalizedAmount, unit_code: str, catalog: UnitCatalog) -> float | None:
    """
    Convert a normalized amount back into ``unit_code``.

    Returns None when the unit is unknown, has no factor, or measures the
    other family.
    """
    unit = catalog.lookup(unit_code)
    if unit is None or unit.canonical_factor is None:
        return None
    if unit.family is MeasurementFamily.MASS and amount.normalized_grams is not None:
        return amount.normalized_grams / unit.canonical_factor
    if unit.family is MeasurementFamily.VOLUME and amount.normalized_milliliters is not None:
        return amount.normalized_milliliters / unit.canonical_factor
    return None


def convert_canonical(
    grams: float | None,
    milliliters: float | None,
    unit_code: str,
    catalog: UnitCatalog,
) -> float | None:
    """Express a canonical total in ``unit_code`` (same family only)."""
    amount = NormalizedAmount(
        original_quantity=0.0,
        original_unit="",
        normalized_grams=grams,
        normalized_milliliters=milliliters,
        combinable=True,
    )
    return denormalize(amount, unit_code, catalog)


def combine_amounts(amounts: Iterable[NormalizedAmount]) -> tuple[float | None, float | None]:
    """
    Sum grams and milliliters independently.

    Mass and volume are never cross-added; a family without contributions
    stays None.
    """
    total_grams: float | None = None
    total_milliliters: float | None = None
    for amount in amounts:
        if amount.normalized_grams is not None:
            total_grams = (total_grams or 0.0) + amount.normalized_grams
        if amount.normalized_milliliters is not None:
            total_milliliters = (total_milliliters or 0.0) + amount.normalized_milliliters
    return total_grams, total_milliliters


# =============================================================================
# Parsing Functions
# =============================================================================

_MIXED_OR_FRACTION = re.compile(r"^(?:(\d+)\s+)?(\d+)\s*/\s*(\d+)\s*(.*)$")
_DECIMAL = re.compile(r"^(\d*\.?\d+)\s*(.*)$")


def parse_quantity_string(quantity_str: str) -> tuple[float, str]:
    """
    Parse a combined quantity string into (quantity, unit).

    Handles formats like:
    - "2 cups"
    - "1.5kg"
    - "1/2 tsp"
    - "2 1/2 cups" (mixed fraction)

    A missing unit becomes "unit"; text without a leading number is treated
    as a unit with quantity 1.
    """
    text = (quantity_str or "").strip().lower()

    fraction_match = _MIXED_OR_FRACTION.match(text)
    if fraction_match:
        whole = int(fraction_match.group(1) or 0)
        numerator = int(fraction_match.group(2))
        denominator = int(fraction_match.group(3))
        if denominator != 0:
            unit = fraction_match.group(4).strip()
            return whole + numerator / denominator, unit or "unit"

    decimal_match = _DECIMAL.match(text)
    if decimal_match:
        unit = decimal_match.group(2).strip()
        return float(decimal_match.group(1)), unit or "unit"

    return 1.0, text or "unit"
