"""Calculation endpoint shared by every fit tool."""

from fastapi import APIRouter, Depends

from bikefit.api.deps import get_calculator
from bikefit.geometry import GeometryCalculator
from bikefit.models.schemas.calculator import CalculationRequest, CalculationResponse

router = APIRouter()


@router.post("", response_model=CalculationResponse)
def calculate(
    request: CalculationRequest,
    calculator: GeometryCalculator = Depends(get_calculator),
) -> CalculationResponse:
    """Run one calculation and wrap the result in the success envelope."""
    result = calculator.calculate(request.calculation_type, request.data)
    return CalculationResponse(success=True, result=result)


@router.get("/types")
def calculation_types(
    calculator: GeometryCalculator = Depends(get_calculator),
) -> dict[str, list[str]]:
    return {"calculationTypes": calculator.calculation_types}
