"""Reconcile aggregated requirements against on-hand pantry stock."""

from dataclasses import dataclass
from datetime import date

from groceryplanner.plan.aggregator import RequirementGroup
from groceryplanner.plan.items import PantryRecord, PantryStatus


@dataclass(frozen=True)
class PantryReconciliation:
    """Outcome of comparing one group's need with its pantry record."""

    status: PantryStatus = PantryStatus.NONE
    available_grams: float | None = None
    available_milliliters: float | None = None
    deficit_grams: float | None = None
    deficit_milliliters: float | None = None
    expires_in_days: int | None = None

    @property
    def has_deficit(self) -> bool:
        return bool(self.deficit_grams) or bool(self.deficit_milliliters)


def index_pantry(records: list[PantryRecord]) -> dict[str, PantryRecord]:
    """Index pantry records by ingredient_id (first record wins)."""
    index: dict[str, PantryRecord] = {}
    for record in records:
        index.setdefault(record.ingredient_id, record)
    return index


def days_until_expiry(record: PantryRecord | None, today: date) -> int | None:
    """Whole days until the record expires; negative when already expired."""
    if record is None or record.expiry_date is None:
        return None
    return (record.expiry_date - today).days


def _reconcile_family(
    needed: float | None,
    on_hand: float | None,
) -> tuple[PantryStatus | None, float | None]:
    if needed is None:
        return None, None
    if on_hand is not None and on_hand > 0:
        if on_hand >= needed:
            return PantryStatus.SUFFICIENT, 0.0
        return PantryStatus.PARTIAL, needed - on_hand
    return PantryStatus.NONE, needed


def _combine_statuses(statuses: list[PantryStatus]) -> PantryStatus:
    if not statuses:
        return PantryStatus.NONE
    if all(status is PantryStatus.SUFFICIENT for status in statuses):
        return PantryStatus.SUFFICIENT
    if all(status is PantryStatus.NONE for status in statuses):
        return PantryStatus.NONE
    return PantryStatus.PARTIAL


def reconcile(
    group: RequirementGroup,
    record: PantryRecord | None,
    today: date,
) -> PantryReconciliation:
    """
    Compute pantry status and deficits for one aggregated group.

    Grams are compared with grams and milliliters with milliliters; the two
    families never offset each other. Groups that could not be normalized
    always report ``none`` since pantry stock is kept in canonical units.
    The record is only read.
    """
    expires_in_days = days_until_expiry(record, today)

    if not group.is_normalized:
        return PantryReconciliation(expires_in_days=expires_in_days)

    on_hand_grams = record.on_hand_grams if record else None
    on_hand_milliliters = record.on_hand_milliliters if record else None

    grams_status, deficit_grams = _reconcile_family(group.total_grams, on_hand_grams)
    ml_status, deficit_milliliters = _reconcile_family(group.total_milliliters, on_hand_milliliters)

    statuses = [status for status in (grams_status, ml_status) if status is not None]

    return PantryReconciliation(
        status=_combine_statuses(statuses),
        available_grams=on_hand_grams if on_hand_grams and on_hand_grams > 0 else None,
        available_milliliters=(
            on_hand_milliliters if on_hand_milliliters and on_hand_milliliters > 0 else None
        ),
        deficit_grams=deficit_grams,
        deficit_milliliters=deficit_milliliters,
        expires_in_days=expires_in_days,
    )
