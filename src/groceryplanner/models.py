"""SQLAlchemy database models."""

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from groceryplanner.database import Base


class UnitRecord(Base):
    """Measurement unit reference row."""

    __tablename__ = "units"

    id: Mapped[str] = mapped_column(Text, primary_key=True)  # unit code, e.g. "tbsp"
    label: Mapped[str] = mapped_column(Text, nullable=False)
    unit_type: Mapped[str] = mapped_column(String(16), nullable=False)  # "mass", "volume", "count"
    conversion_to_grams: Mapped[float | None] = mapped_column(
        Numeric(18, 6, asdecimal=False), nullable=True
    )
    conversion_to_milliliters: Mapped[float | None] = mapped_column(
        Numeric(18, 6, asdecimal=False), nullable=True
    )
