"""Tests for pantry reconciliation."""

from datetime import timedelta

import pytest

from groceryplanner.plan.aggregator import RequirementGroup
from groceryplanner.plan.items import PantryRecord, PantryStatus
from groceryplanner.plan.pantry import days_until_expiry, index_pantry, reconcile


def _group(grams=None, milliliters=None, fallback=None) -> RequirementGroup:
    return RequirementGroup(
        ingredient_id="item",
        ingredient_name="Item",
        total_grams=grams,
        total_milliliters=milliliters,
        fallback_quantity=fallback,
        fallback_unit="each" if fallback is not None else None,
    )


class TestReconcile:
    """Tests for reconcile function."""

    def test_no_record_is_full_deficit(self, today):
        result = reconcile(_group(grams=490.0), None, today)
        assert result.status is PantryStatus.NONE
        assert result.deficit_grams == 490.0
        assert result.available_grams is None
        assert result.expires_in_days is None

    def test_sufficient(self, today, make_pantry):
        """Test a fully covered need has zero deficit."""
        result = reconcile(_group(milliliters=30.0), make_pantry("item", milliliters=500), today)
        assert result.status is PantryStatus.SUFFICIENT
        assert result.deficit_milliliters == 0.0
        assert result.available_milliliters == 500
        assert not result.has_deficit

    def test_partial(self, today, make_pantry):
        result = reconcile(_group(grams=490.0), make_pantry("item", grams=200), today)
        assert result.status is PantryStatus.PARTIAL
        assert result.deficit_grams == pytest.approx(290.0)
        assert result.has_deficit

    def test_zero_on_hand_counts_as_none(self, today, make_pantry):
        result = reconcile(_group(grams=100.0), make_pantry("item", grams=0), today)
        assert result.status is PantryStatus.NONE
        assert result.deficit_grams == 100.0
        assert result.available_grams is None

    def test_families_do_not_offset(self, today, make_pantry):
        """Test milliliters on hand never cover a gram requirement."""
        result = reconcile(_group(grams=100.0), make_pantry("item", milliliters=1000), today)
        assert result.status is PantryStatus.NONE
        assert result.deficit_grams == 100.0
        assert result.deficit_milliliters is None

    def test_both_families_mixed_status_is_partial(self, today, make_pantry):
        result = reconcile(
            _group(grams=100.0, milliliters=50.0),
            make_pantry("item", grams=500),
            today,
        )
        assert result.status is PantryStatus.PARTIAL
        assert result.deficit_grams == 0.0
        assert result.deficit_milliliters == 50.0

    def test_both_families_sufficient(self, today, make_pantry):
        result = reconcile(
            _group(grams=100.0, milliliters=50.0),
            make_pantry("item", grams=100, milliliters=50),
            today,
        )
        assert result.status is PantryStatus.SUFFICIENT

    def test_non_normalized_group_is_none(self, today, make_pantry):
        """Test counted items are never matched against canonical stock."""
        record = make_pantry("item", grams=1000, expires_in=2)
        result = reconcile(_group(fallback=3), record, today)
        assert result.status is PantryStatus.NONE
        assert result.deficit_grams is None
        assert result.expires_in_days == 2

    def test_record_not_modified(self, today, make_pantry):
        record = make_pantry("item", grams=200)
        reconcile(_group(grams=490.0), record, today)
        assert record.on_hand_grams == 200


class TestPantryHelpers:
    """Tests for pantry indexing and expiry."""

    def test_index_first_record_wins(self):
        records = [
            PantryRecord("flour", on_hand_grams=100),
            PantryRecord("flour", on_hand_grams=900),
            PantryRecord("salt", on_hand_grams=50),
        ]
        index = index_pantry(records)
        assert index["flour"].on_hand_grams == 100
        assert set(index) == {"flour", "salt"}

    def test_days_until_expiry(self, today):
        record = PantryRecord("milk", expiry_date=today + timedelta(days=4))
        assert days_until_expiry(record, today) == 4

    def test_already_expired_is_negative(self, today):
        record = PantryRecord("milk", expiry_date=today - timedelta(days=2))
        assert days_until_expiry(record, today) == -2

    def test_no_expiry(self, today):
        assert days_until_expiry(PantryRecord("salt"), today) is None
        assert days_until_expiry(None, today) is None
