"""
Roadmap Phase Pipeline

Plans every remaining R&D phase between the project's current production
scale and industrial deployment, one validated plan per phase.
"""

from typing import Any, Dict, Mapping, Optional

from aitrl.clock import Clock, TimestampFormatter
from aitrl.components.structured_assessment import StructuredAssessmentRunnable
from .core import RoadmapPhase
from .evaluators import make_roadmap_detector, make_roadmap_request_builder, RoadmapPhaseValidator


def get_roadmap_runnable(
    llm,
    clock: Optional[Clock] = None,
    formatter: Optional[TimestampFormatter] = None,
    timeout: Optional[float] = None
) -> StructuredAssessmentRunnable:
    return StructuredAssessmentRunnable(
        llm=llm,
        detector=make_roadmap_detector(),
        request_builder=make_roadmap_request_builder(),
        validator=RoadmapPhaseValidator(),
        clock=clock,
        formatter=formatter,
        timeout=timeout
    )


def _roadmap_context(production_scale, cost_per_unit, revenue_per_unit) -> Dict[str, Any]:
    return {
        "production_scale": production_scale,
        "cost_per_unit": cost_per_unit,
        "revenue_per_unit": revenue_per_unit,
    }


async def agenerate_roadmap_phases(
    technical_documentation: str,
    llm,
    production_scale: Optional[str] = None,
    cost_per_unit: Optional[str] = None,
    revenue_per_unit: Optional[str] = None,
    **kwargs
) -> Dict[str, RoadmapPhase]:
    context = _roadmap_context(production_scale, cost_per_unit, revenue_per_unit)
    return await get_roadmap_runnable(llm, **kwargs).arun(technical_documentation, context)


def generate_roadmap_phases(
    technical_documentation: str,
    llm,
    production_scale: Optional[str] = None,
    cost_per_unit: Optional[str] = None,
    revenue_per_unit: Optional[str] = None,
    **kwargs
) -> Dict[str, RoadmapPhase]:
    """
    Args:
        technical_documentation: Source text describing the system
        llm: Chat model used for planning
        production_scale: e.g. "lab scale", "pilot scale", "industrial scale"
        cost_per_unit: Estimated cost per unit, free text
        revenue_per_unit: Estimated revenue per unit, free text

    Returns:
        Ordered mapping of phase name -> RoadmapPhase
    """
    context = _roadmap_context(production_scale, cost_per_unit, revenue_per_unit)
    return get_roadmap_runnable(llm, **kwargs).run(technical_documentation, context)
