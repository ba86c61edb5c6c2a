"""Unit reference catalog: unit codes, measurement families and canonical factors."""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from groceryplanner.config import Settings, get_settings
from groceryplanner.database import create_db_engine, create_session_factory
from groceryplanner.logging_config import get_logger
from groceryplanner.models import UnitRecord

logger = get_logger(__name__)


class MeasurementFamily(str, Enum):
    """Physical family a unit measures."""

    MASS = "mass"  # canonical unit: gram
    VOLUME = "volume"  # canonical unit: milliliter
    COUNT = "count"  # no physical conversion; never normalizable


@dataclass(frozen=True)
class Unit:
    """A unit code with its family and factor into the canonical unit."""

    code: str
    family: MeasurementFamily
    canonical_factor: float | None = None
    display_name: str = ""

    def __post_init__(self) -> None:
        if self.family is MeasurementFamily.COUNT and self.canonical_factor is not None:
            raise ValueError(f"Count unit '{self.code}' cannot carry a conversion factor")
        if self.canonical_factor is not None and self.canonical_factor <= 0:
            raise ValueError(f"Unit '{self.code}' has non-positive factor {self.canonical_factor}")
        if not self.display_name:
            object.__setattr__(self, "display_name", self.code)

    @property
    def is_normalizable(self) -> bool:
        """True when quantities in this unit can be converted to a canonical unit."""
        return self.canonical_factor is not None


UnitSource = Callable[[], Iterable[Unit]]


# =============================================================================
# Built-in Reference Table
# =============================================================================

# Weight conversions (base unit: g)
MASS_FACTORS: dict[str, float] = {
    # Metric
    "g": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "kg": 1000.0,
    "kilogram": 1000.0,
    "kilograms": 1000.0,
    "mg": 0.001,
    "milligram": 0.001,
    "milligrams": 0.001,
    # Imperial
    "oz": 28.3495,
    "ounce": 28.3495,
    "ounces": 28.3495,
    "lb": 453.592,
    "lbs": 453.592,
    "pound": 453.592,
    "pounds": 453.592,
}

# Volume conversions (base unit: ml)
VOLUME_FACTORS: dict[str, float] = {
    # Metric
    "ml": 1.0,
    "milliliter": 1.0,
    "milliliters": 1.0,
    "millilitre": 1.0,
    "millilitres": 1.0,
    "l": 1000.0,
    "liter": 1000.0,
    "liters": 1000.0,
    "litre": 1000.0,
    "litres": 1000.0,
    "dl": 100.0,
    "cl": 10.0,
    # US customary
    "cup": 236.588,
    "cups": 236.588,
    "tbsp": 14.787,
    "tablespoon": 14.787,
    "tablespoons": 14.787,
    "tsp": 4.929,
    "teaspoon": 4.929,
    "teaspoons": 4.929,
    "fl oz": 29.574,
    "pint": 473.176,
    "pints": 473.176,
    "quart": 946.353,
    "quarts": 946.353,
    "gallon": 3785.41,
    "gallons": 3785.41,
}

# Count-based units (recorded, but no canonical conversion)
COUNT_UNITS: tuple[str, ...] = (
    "each",
    "unit",
    "piece",
    "pieces",
    "whole",
    "slice",
    "slices",
    "clove",
    "cloves",
    "head",
    "bunch",
    "sprig",
    "sprigs",
    "can",
    "cans",
    "jar",
    "package",
    "pinch",
    "dash",
)


def builtin_units() -> list[Unit]:
    """Bundled reference units used when no external source is configured."""
    units = [Unit(code, MeasurementFamily.MASS, factor) for code, factor in MASS_FACTORS.items()]
    units.extend(
        Unit(code, MeasurementFamily.VOLUME, factor) for code, factor in VOLUME_FACTORS.items()
    )
    units.extend(Unit(code, MeasurementFamily.COUNT) for code in COUNT_UNITS)
    return units


class DatabaseUnitSource:
    """Loads units from the ``units`` reference table."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def __call__(self) -> list[Unit]:
        with self.session_factory() as session:
            rows = session.scalars(select(UnitRecord).order_by(UnitRecord.id)).all()

        units = []
        for row in rows:
            unit = self._to_unit(row)
            if unit is not None:
                units.append(unit)
        return units

    @staticmethod
    def _to_unit(row: UnitRecord) -> Unit | None:
        """Map a reference row onto a Unit, skipping rows with an unknown type."""
        try:
            family = MeasurementFamily(row.unit_type.strip().lower())
        except ValueError:
            logger.warning(f"Skipping unit '{row.id}' with unknown type '{row.unit_type}'")
            return None

        if family is MeasurementFamily.MASS:
            factor = row.conversion_to_grams
        elif family is MeasurementFamily.VOLUME:
            factor = row.conversion_to_milliliters
        else:
            factor = None

        # Zero or negative factors are treated as "no conversion known"
        if factor is not None and factor <= 0:
            factor = None

        return Unit(code=row.id, family=family, canonical_factor=factor, display_name=row.label)


# =============================================================================
# Catalog
# =============================================================================


class UnitCatalog:
    """
    Read-only, case-insensitive lookup over a unit source.

    The table is loaded on first use and kept until ``refresh()`` is called.
    Loading and refreshing are serialized, so one catalog can be shared across
    threads.
    """

    def __init__(self, source: UnitSource = builtin_units):
        self._source = source
        self._units: dict[str, Unit] | None = None
        self._lock = threading.Lock()

    @staticmethod
    def _key(unit_code: str) -> str:
        return unit_code.strip().lower()

    def _load(self) -> dict[str, Unit]:
        table: dict[str, Unit] = {}
        for unit in self._source():
            key = self._key(unit.code)
            if key in table:
                logger.debug(f"Duplicate unit code '{unit.code}', keeping first definition")
                continue
            table[key] = unit
        logger.info(f"Loaded unit catalog with {len(table)} units")
        return table

    def _table(self) -> dict[str, Unit]:
        units = self._units
        if units is None:
            with self._lock:
                if self._units is None:
                    self._units = self._load()
                units = self._units
        return units

    def lookup(self, unit_code: str | None) -> Unit | None:
        """Find a unit by code (case-insensitive). Returns None when unknown."""
        if not unit_code:
            return None
        return self._table().get(self._key(unit_code))

    def refresh(self) -> int:
        """Reload the table from the source. Returns the number of units loaded."""
        with self._lock:
            # A failing source leaves the previous table in place
            self._units = self._load()
            return len(self._units)

    @property
    def is_loaded(self) -> bool:
        return self._units is not None

    def units(self) -> list[Unit]:
        """All known units, in source order."""
        return list(self._table().values())

    def __contains__(self, unit_code: object) -> bool:
        return isinstance(unit_code, str) and self.lookup(unit_code) is not None

    def __len__(self) -> int:
        return len(self._table())


def build_unit_catalog(settings: Settings | None = None) -> UnitCatalog:
    """Create the catalog for the configured unit source."""
    settings = settings or get_settings()
    if settings.unit_source == "database":
        engine = create_db_engine(settings.database_url)
        logger.info("Using database unit source")
        return UnitCatalog(DatabaseUnitSource(create_session_factory(engine)))
    return UnitCatalog(builtin_units)
