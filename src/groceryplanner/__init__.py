"""Groceryplanner - grocery quantity normalization and aggregation for meal plans."""

__version__ = "0.1.0"
