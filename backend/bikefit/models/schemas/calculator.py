"""Calculator request/response envelopes."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CalculationRequest(BaseModel):
    """One calculation: a kind discriminator plus its loosely-typed payload."""

    model_config = ConfigDict(populate_by_name=True)

    calculation_type: str = Field(..., alias="calculationType", min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


class CalculationResponse(BaseModel):
    success: bool
    result: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    code: Optional[str] = None
