"""Cost computations: the preliminary quote estimate and the 5-year PVC vs wood projection.

Both are pure functions of their inputs; nothing here is cached or persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from app.config import (
    BASE_PRICE_PER_SQFT,
    FEATURE_MULTIPLIERS,
    PROJECTION_YEARS,
    PVC_ANNUAL_MAINTENANCE_RATE,
)
from app.formatting import round_half_up
from app.schemas import RoomDimensions


@dataclass(frozen=True)
class CostEstimate:
    """Preliminary estimate derived from room dimensions and selected features."""

    area: float  # floor area, sq ft
    volume: float  # cubic ft
    base_cost: float  # HTG, before feature adjustments
    feature_multiplier: float
    estimated_cost: int  # HTG, rounded

    @property
    def price_per_sqft(self) -> float:
        return self.estimated_cost / self.area if self.area else 0.0


@dataclass(frozen=True)
class YearlyCost:
    """Cumulative cost of each material at the end of ``year``."""

    year: int
    pvc_cost: int
    wood_cost: int

    def to_dict(self) -> Dict[str, int]:
        return {"year": self.year, "pvcCost": self.pvc_cost, "woodCost": self.wood_cost}


def feature_multiplier(
    features: Optional[Iterable[str]], multipliers: Optional[Dict[str, float]] = None
) -> float:
    """Product of each selected feature's multiplier; unknown features count as 1."""
    table = FEATURE_MULTIPLIERS if multipliers is None else multipliers
    mult = 1.0
    for feature in features or ():
        mult *= table.get(feature, 1.0)
    return mult


def estimate_quote_cost(
    dimensions: Optional[RoomDimensions],
    features: Optional[Iterable[str]] = None,
    price_per_sqft: float = BASE_PRICE_PER_SQFT,
) -> CostEstimate:
    if dimensions is None:
        return CostEstimate(area=0, volume=0, base_cost=0, feature_multiplier=1.0, estimated_cost=0)

    area = dimensions.length * dimensions.width
    volume = area * dimensions.height
    base_cost = area * price_per_sqft
    mult = feature_multiplier(features)
    return CostEstimate(
        area=area,
        volume=volume,
        base_cost=base_cost,
        feature_multiplier=mult,
        estimated_cost=round_half_up(base_cost * mult),
    )


def calculate_pvc_vs_wood_cost(
    kitchen_size: float,
    pvc_price_per_sqft: float,
    wood_price_per_sqft: float,
    wood_maintenance_percent: float,
    humidity_multiplier: float,
    wood_replacement_risk: float,
) -> List[YearlyCost]:
    """Project cumulative PVC and wood cabinet costs over five years.

    PVC adds a flat 2% of its initial cost each year. Wood adds maintenance
    (a percentage of its initial cost, scaled by the humidity factor) and, from
    year 3, a probability-weighted replacement cost that grows linearly:
    ``base * risk% * (year - 2) * 0.5``.
    """
    base_pvc = kitchen_size * pvc_price_per_sqft
    base_wood = kitchen_size * wood_price_per_sqft
    annual_wood_maintenance = base_wood * (wood_maintenance_percent / 100) * humidity_multiplier

    results: List[YearlyCost] = []
    cumulative_pvc = base_pvc
    cumulative_wood = base_wood
    for year in range(1, PROJECTION_YEARS + 1):
        cumulative_pvc += base_pvc * PVC_ANNUAL_MAINTENANCE_RATE
        cumulative_wood += annual_wood_maintenance
        if year >= 3:
            replacement_probability = wood_replacement_risk / 100 * (year - 2) * 0.5
            cumulative_wood += base_wood * replacement_probability
        results.append(
            YearlyCost(
                year=year,
                pvc_cost=round_half_up(cumulative_pvc),
                wood_cost=round_half_up(cumulative_wood),
            )
        )
    return results


def projection_summary(costs: List[YearlyCost]) -> Dict[str, int]:
    """Total savings at the horizon and the largest value (chart scale)."""
    if not costs:
        return {"totalSavings": 0, "maxCost": 0}
    last = costs[-1]
    return {
        "totalSavings": last.wood_cost - last.pvc_cost,
        "maxCost": max(max(c.pvc_cost, c.wood_cost) for c in costs),
    }
