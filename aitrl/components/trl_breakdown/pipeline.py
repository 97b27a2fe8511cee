"""
TRL Breakdown Pipeline

Scores every detected component of a technical document with a Technology
Readiness Level. Components the model skips or scores badly get the
theoretical-stage default, so the breakdown always covers every component.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from aitrl.clock import Clock, TimestampFormatter
from aitrl.components.structured_assessment import StructuredAssessmentRunnable, run_batch_assessment
from .core import TRLAssessment
from .evaluators import make_trl_detector, make_trl_request_builder, TRLRecordValidator


def get_trl_breakdown_runnable(
    llm,
    clock: Optional[Clock] = None,
    formatter: Optional[TimestampFormatter] = None,
    timeout: Optional[float] = None,
    terms: Optional[Iterable[str]] = None
) -> StructuredAssessmentRunnable:
    """
    Factory function to create the TRL breakdown pipeline.

    Args:
        llm: Chat model used for scoring
        clock: Observation clock (defaults to UTC now)
        formatter: Observation timestamp formatter
        timeout: Seconds to wait for the model
        terms: Optional replacement component lexicon

    Returns:
        StructuredAssessmentRunnable producing TRLAssessment records
    """
    return StructuredAssessmentRunnable(
        llm=llm,
        detector=make_trl_detector(terms),
        request_builder=make_trl_request_builder(),
        validator=TRLRecordValidator(),
        clock=clock,
        formatter=formatter,
        timeout=timeout
    )


async def aget_trl_breakdown(technical_documentation: str, llm, **kwargs) -> Dict[str, TRLAssessment]:
    return await get_trl_breakdown_runnable(llm, **kwargs).arun(technical_documentation)


def get_trl_breakdown(technical_documentation: str, llm, **kwargs) -> Dict[str, TRLAssessment]:
    """Return `component -> TRLAssessment` for every component found in the text."""
    return get_trl_breakdown_runnable(llm, **kwargs).run(technical_documentation)


async def run_batch_trl_breakdown(
    documents: Mapping[Any, str],
    llm,
    max_concurrent: int = 3,
    **kwargs
) -> Dict[Any, Dict[str, TRLAssessment]]:
    runnable = get_trl_breakdown_runnable(llm, **kwargs)
    return await run_batch_assessment(runnable, documents, max_concurrent=max_concurrent)
