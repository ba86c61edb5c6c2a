"""Normalize ingredient quantities into canonical units."""

from groceryplanner.normalize.catalog import (
    DatabaseUnitSource,
    MeasurementFamily,
    Unit,
    UnitCatalog,
    build_unit_catalog,
    builtin_units,
)
from groceryplanner.normalize.units import (
    NormalizedAmount,
    combine_amounts,
    convert_canonical,
    denormalize,
    normalize,
    parse_quantity_string,
)

__all__ = [
    "DatabaseUnitSource",
    "MeasurementFamily",
    "NormalizedAmount",
    "Unit",
    "UnitCatalog",
    "build_unit_catalog",
    "builtin_units",
    "combine_amounts",
    "convert_canonical",
    "denormalize",
    "normalize",
    "parse_quantity_string",
]
