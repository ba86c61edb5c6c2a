"""Tests for structured logging helpers."""

import json
import logging

from groceryplanner.logging_config import (
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    clear_context,
    household_id_ctx,
    meal_plan_id_ctx,
    set_context,
)


def _record(message: str = "aggregated") -> logging.LogRecord:
    return logging.LogRecord("groceryplanner.test", logging.INFO, __file__, 10, message, None, None)


class TestLoggingContext:
    """Tests for context variable handling."""

    def test_context_manager_resets(self):
        with LoggingContext(meal_plan_id="plan-42", household_id="household-7"):
            assert meal_plan_id_ctx.get() == "plan-42"
            assert household_id_ctx.get() == "household-7"
        assert meal_plan_id_ctx.get() is None
        assert household_id_ctx.get() is None

    def test_nested_context_restores_outer(self):
        with LoggingContext(meal_plan_id="outer"):
            with LoggingContext(meal_plan_id="inner"):
                assert meal_plan_id_ctx.get() == "inner"
            assert meal_plan_id_ctx.get() == "outer"

    def test_set_and_clear(self):
        set_context(meal_plan_id="plan-1")
        assert meal_plan_id_ctx.get() == "plan-1"
        clear_context()
        assert meal_plan_id_ctx.get() is None


class TestFormatters:
    """Tests for log formatters."""

    def test_json_includes_context(self):
        with LoggingContext(meal_plan_id="plan-42"):
            data = json.loads(StructuredJsonFormatter().format(_record()))
        assert data["message"] == "aggregated"
        assert data["level"] == "INFO"
        assert data["meal_plan_id"] == "plan-42"
        assert "household_id" not in data

    def test_contextual_format(self):
        with LoggingContext(meal_plan_id="plan-42-long-identifier"):
            line = ContextualFormatter().format(_record())
        assert "[plan=plan-42-]" in line
        assert line.endswith("| aggregated")
