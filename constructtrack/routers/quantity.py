from fastapi import APIRouter

from .. import schemas
from ..calculators import calculate_quantity, list_calculators

router = APIRouter(prefix="/quantity", tags=["quantity"])


@router.get("/unit-types")
def unit_types():
    return list_calculators()


@router.post("/", response_model=schemas.QuantityResponse)
def evaluate_quantity(data: schemas.QuantityRequest):
    """Live quantity preview for the work item editor. Unknown unit types give 0."""
    quantity = calculate_quantity(
        data.unit_type,
        length=data.length,
        width=data.width,
        depth=data.depth,
        units=data.units,
        unit_multiplier=data.unit_multiplier,
    )
    return schemas.QuantityResponse(unit_type=data.unit_type, quantity=quantity)
