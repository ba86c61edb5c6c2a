"""API routes for grocery list aggregation and unit reference data."""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from groceryplanner.logging_config import LoggingContext, get_logger
from groceryplanner.normalize.catalog import UnitCatalog
from groceryplanner.plan.categories import Categorizer, no_category
from groceryplanner.plan.shopping_list import GroceryListAggregator, summarize
from groceryplanner.schemas import (
    AggregateRequest,
    AggregateResponse,
    GroceryItemResponse,
    GroceryListSummarySchema,
    UnitResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery-lists", tags=["grocery-lists"])


# =============================================================================
# Dependencies
# =============================================================================


def get_unit_catalog(request: Request) -> UnitCatalog:
    """Unit catalog owned by the application."""
    return request.app.state.unit_catalog


def get_categorizer(request: Request) -> Categorizer:
    """Categorizer configured on the application, if any."""
    return getattr(request.app.state, "categorizer", no_category)


def get_aggregator(
    catalog: UnitCatalog = Depends(get_unit_catalog),
    categorizer: Categorizer = Depends(get_categorizer),
) -> GroceryListAggregator:
    return GroceryListAggregator(catalog, categorizer=categorizer)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/aggregate", response_model=AggregateResponse)
def aggregate_grocery_list(
    request: AggregateRequest,
    aggregator: GroceryListAggregator = Depends(get_aggregator),
) -> AggregateResponse:
    """
    Aggregate meal-plan requirements into a prioritized grocery list.

    Malformed requirements are reported in ``errors`` while the remaining
    records still produce a list; callers should not present a list with
    errors to a user.
    """
    with LoggingContext(meal_plan_id=request.meal_plan_id, household_id=request.household_id):
        result = aggregator.aggregate(
            [req.to_requirement() for req in request.requirements],
            [record.to_record() for record in request.pantry],
            request.options,
            today=request.today,
        )

    return AggregateResponse(
        meal_plan_id=request.meal_plan_id,
        items=[GroceryItemResponse.from_item(item) for item in result.items],
        warnings=result.warnings,
        errors=result.errors,
        is_valid=result.is_valid,
        summary=GroceryListSummarySchema.model_validate(summarize(result.items)),
    )


@router.get("/units/{code}", response_model=UnitResponse)
def get_unit(code: str, catalog: UnitCatalog = Depends(get_unit_catalog)) -> UnitResponse:
    """Look up a unit code (case-insensitive)."""
    unit = catalog.lookup(code)
    if unit is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown unit: {code}",
        )

    return UnitResponse(
        code=unit.code,
        display_name=unit.display_name,
        family=unit.family.value,
        canonical_factor=unit.canonical_factor,
        normalizable=unit.is_normalizable,
    )


@router.post("/units/refresh")
def refresh_units(catalog: UnitCatalog = Depends(get_unit_catalog)) -> dict:
    """Reload the unit catalog from its source."""
    count = catalog.refresh()
    logger.info(f"Unit catalog refreshed: {count} units")
    return {"status": "refreshed", "units_loaded": count}
