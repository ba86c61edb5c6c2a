"""Choose readable display units and format quantities for a shopping list."""

import math

# Common cooking fractions, as (value, label)
COOKING_FRACTIONS: tuple[tuple[float, str], ...] = (
    (1 / 8, "1/8"),
    (1 / 4, "1/4"),
    (1 / 3, "1/3"),
    (3 / 8, "3/8"),
    (1 / 2, "1/2"),
    (5 / 8, "5/8"),
    (2 / 3, "2/3"),
    (3 / 4, "3/4"),
    (7 / 8, "7/8"),
)
FRACTION_TOLERANCE = 0.05
COOKING_UNIT_MARKERS = ("cup", "tsp", "tbsp")


def round_half_up(value: float, digits: int = 2) -> float:
    """Round with halves going up, e.g. 0.125 -> 0.13."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def select_display(
    grams: float | None,
    milliliters: float | None,
    original_quantity: float | None = None,
    original_unit: str | None = None,
) -> tuple[float, str]:
    """
    Pick the most readable unit for a canonical amount.

    Mass goes to kg / g / mg and volume to L / ml / µl, rounded to two
    decimals. When neither amount is present the original quantity and unit
    are passed through unchanged.
    """
    if grams:
        if grams >= 1000:
            return round_half_up(grams / 1000), "kg"
        if grams >= 1:
            return round_half_up(grams), "g"
        return round_half_up(grams * 1000), "mg"

    if milliliters:
        if milliliters >= 1000:
            return round_half_up(milliliters / 1000), "L"
        if milliliters >= 5:
            return round_half_up(milliliters), "ml"
        return round_half_up(milliliters * 1000), "µl"

    return (original_quantity if original_quantity is not None else 1.0), original_unit or "unit"


def _format_number(value: float, decimals: int = 3) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:.{decimals}f}".rstrip("0").rstrip(".")


def _round_for_display(quantity: float) -> tuple[float, int]:
    if quantity >= 100:
        return round_half_up(quantity, 0), 0
    if quantity >= 10:
        return round_half_up(quantity, 1), 1
    if quantity >= 1:
        return round_half_up(quantity, 2), 2
    return round_half_up(quantity, 3), 3


def is_cooking_unit(unit: str) -> bool:
    unit_lower = unit.lower()
    return any(marker in unit_lower for marker in COOKING_UNIT_MARKERS)


def _format_as_fraction(value: float, decimals: int, unit: str) -> str:
    whole = math.floor(value)
    remainder = value - whole
    closest_value, closest_label = min(
        COOKING_FRACTIONS, key=lambda fraction: abs(fraction[0] - remainder)
    )

    if abs(closest_value - remainder) < FRACTION_TOLERANCE:
        if whole > 0:
            return f"{whole} {closest_label} {unit}"
        return f"{closest_label} {unit}"

    return f"{_format_number(value, decimals)} {unit}"


def format_for_display(quantity: float, unit: str) -> str:
    """
    Format a quantity with cooking-friendly precision.

    Examples:
        (1.5, "cup") -> "1 1/2 cup"
        (0.33, "tsp") -> "1/3 tsp"
        (123.4, "g") -> "123 g"
        (0.1234, "kg") -> "0.123 kg"
    """
    rounded, decimals = _round_for_display(quantity)
    if is_cooking_unit(unit):
        return _format_as_fraction(rounded, decimals, unit)
    return f"{_format_number(rounded, decimals)} {unit}".strip()


def optimize_for_shopping(quantity: float) -> float:
    """Round a display quantity up to a practical amount to buy."""
    optimized = quantity

    if 0.5 < optimized < 1:
        optimized = 1.0
    elif 0.25 < optimized < 0.5:
        optimized = 0.5

    if optimized > 10:
        optimized = float(math.ceil(optimized))
    elif optimized > 1:
        optimized = math.ceil(optimized * 2) / 2

    return optimized
