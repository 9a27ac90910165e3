from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.config import (
    CALCULATOR_DEFAULTS,
    MAX_HUMIDITY_MULTIPLIER,
    MAX_KITCHEN_SIZE_SQFT,
    MAX_PRICE_PER_SQFT,
)


class SubmissionResponse(BaseModel):
    success: bool = True
    message: str


class QuoteResponse(SubmissionResponse):
    estimatedCost: int
    estimatedArea: float


class ErrorBody(BaseModel):
    error: str
    message: Optional[str] = None


class CalculatorRequest(BaseModel):
    """Inputs of the 5-year PVC vs wood calculator; omitted values use the widget defaults."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    kitchen_size: float = Field(
        CALCULATOR_DEFAULTS["kitchen_size"],
        gt=0,
        le=MAX_KITCHEN_SIZE_SQFT,
        alias="kitchenSize",
        description="sq ft",
    )
    pvc_price_per_sqft: float = Field(
        CALCULATOR_DEFAULTS["pvc_price_per_sqft"], ge=0, le=MAX_PRICE_PER_SQFT, alias="pvcPricePerSqFt"
    )
    wood_price_per_sqft: float = Field(
        CALCULATOR_DEFAULTS["wood_price_per_sqft"], ge=0, le=MAX_PRICE_PER_SQFT, alias="woodPricePerSqFt"
    )
    wood_maintenance_percent: float = Field(
        CALCULATOR_DEFAULTS["wood_maintenance_percent"], ge=0, le=100, alias="woodMaintenancePercent"
    )
    humidity_multiplier: float = Field(
        CALCULATOR_DEFAULTS["humidity_multiplier"],
        ge=0,
        le=MAX_HUMIDITY_MULTIPLIER,
        alias="humidityMultiplier",
    )
    wood_replacement_risk: float = Field(
        CALCULATOR_DEFAULTS["wood_replacement_risk"], ge=0, le=100, alias="woodReplacementRisk"
    )


class YearlyCostOut(BaseModel):
    year: int
    pvcCost: int
    woodCost: int


class CalculatorResponse(BaseModel):
    years: List[YearlyCostOut]
    totalSavings: int
    maxCost: int
    labels: Dict[str, str]
