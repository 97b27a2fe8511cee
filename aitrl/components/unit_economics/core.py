"""
Core data models and reference calculation for unit economics simulation.
"""

import math
from pydantic import BaseModel, Field
from typing import Any, Literal, Mapping, Optional, Union

from aitrl.components.structured_assessment.core import AssessmentRecord

ECONOMICS_METRICS = ["unit_cost", "roi", "payback_period"]
NOT_APPLICABLE = "N/A"


class EconomicsParameters(BaseModel):
    production_scale: float = Field(..., gt=0, description="Production scale in units")
    cost_per_unit: float = Field(..., ge=0, description="Cost per unit in dollars")
    revenue_per_unit: float = Field(..., ge=0, description="Revenue per unit in dollars")

    @classmethod
    def from_context(cls, context: Mapping[str, Any]) -> Optional['EconomicsParameters']:
        try:
            params = cls(**{key: context.get(key) for key in cls.model_fields})
        except (TypeError, ValueError):
            return None
        if not all(math.isfinite(v) for v in params.model_dump().values()):
            return None
        return params

    def describe(self) -> str:
        return (
            f"Production Scale: {self.production_scale:g} units\n"
            f"Cost Per Unit: {self.cost_per_unit:g}\n"
            f"Revenue Per Unit: {self.revenue_per_unit:g}"
        )


class EconomicsMetric(AssessmentRecord):
    """One simulated metric; `source` tells whether the model's figure was kept."""
    value: Union[float, str]
    source: Literal["model", "computed"] = "computed"


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"


def format_years(value: float) -> str:
    return f"{value:.2f} years"


def compute_metrics(params: EconomicsParameters) -> dict:
    """
    Reference figures:
        ROI = (revenue - cost) / cost * 100
        payback = (cost * scale) / ((revenue - cost) * scale)
    ROI is N/A for a zero cost, payback is N/A when there is no positive return.
    """
    cost = params.cost_per_unit
    revenue = params.revenue_per_unit
    scale = params.production_scale

    roi = format_percentage((revenue - cost) / cost * 100) if cost > 0 else NOT_APPLICABLE

    total_investment = cost * scale
    annual_return = (revenue - cost) * scale
    payback = format_years(total_investment / annual_return) if annual_return > 0 else NOT_APPLICABLE

    return {"unit_cost": round(cost, 2), "roi": roi, "payback_period": payback}
