"""Closed set of options recognized by the grocery list aggregator."""

from pydantic import BaseModel, ConfigDict, Field


class AggregationOptions(BaseModel):
    """Every option the aggregator recognizes; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    include_pantry_check: bool = True
    minimum_quantity_threshold: float = Field(
        default=0.1, ge=0, description="Drop items whose display quantity falls below this"
    )
    preferred_units: dict[str, str] = Field(
        default_factory=dict, description="ingredient_id -> unit code to display in"
    )
    split_mismatched_units: bool = Field(
        default=False,
        description="List unconvertible units separately instead of summing them",
    )
    optimize_quantities: bool = Field(
        default=False, description="Round display quantities up to practical amounts"
    )
