"""
Unit Economics Pipeline

Simulates unit cost, ROI and payback period for a production scale. The
result always holds all three metrics, falling back to the reference
calculation whenever the model's figure is missing or wrong.
"""

from typing import Dict, Optional

from aitrl.clock import Clock, TimestampFormatter
from aitrl.components.structured_assessment import StructuredAssessmentRunnable
from .core import EconomicsMetric, EconomicsParameters
from .evaluators import make_economics_detector, make_economics_request_builder, EconomicsMetricValidator


def get_unit_economics_runnable(
    llm,
    clock: Optional[Clock] = None,
    formatter: Optional[TimestampFormatter] = None,
    timeout: Optional[float] = None
) -> StructuredAssessmentRunnable:
    return StructuredAssessmentRunnable(
        llm=llm,
        detector=make_economics_detector(),
        request_builder=make_economics_request_builder(),
        validator=EconomicsMetricValidator(),
        clock=clock,
        formatter=formatter,
        timeout=timeout
    )


def _inputs(production_scale, cost_per_unit, revenue_per_unit):
    context = {
        "production_scale": production_scale,
        "cost_per_unit": cost_per_unit,
        "revenue_per_unit": revenue_per_unit,
    }
    params = EconomicsParameters.from_context(context)
    return (params.describe() if params else ""), context


async def asimulate_unit_economics(production_scale, cost_per_unit, revenue_per_unit, llm, **kwargs) -> Dict[str, EconomicsMetric]:
    text, context = _inputs(production_scale, cost_per_unit, revenue_per_unit)
    return await get_unit_economics_runnable(llm, **kwargs).arun(text, context)


def simulate_unit_economics(production_scale, cost_per_unit, revenue_per_unit, llm, **kwargs) -> Dict[str, EconomicsMetric]:
    """Invalid parameters (missing, negative, zero scale) give an empty result without calling the model."""
    text, context = _inputs(production_scale, cost_per_unit, revenue_per_unit)
    return get_unit_economics_runnable(llm, **kwargs).run(text, context)
