"""
Grant Detail Extraction Pipeline

Extracts funding source, grant id, amount, duration and institutions from a
document. Every field is always present in the result; fields the model could
not supply in a usable form are marked `found=False`.
"""

from typing import Dict, Optional

from aitrl.clock import Clock, TimestampFormatter
from aitrl.components.structured_assessment import StructuredAssessmentRunnable
from .core import GrantDetailField, GrantDetails
from .evaluators import make_grant_detector, make_grant_request_builder, GrantFieldValidator


def get_grant_details_runnable(
    llm,
    clock: Optional[Clock] = None,
    formatter: Optional[TimestampFormatter] = None,
    timeout: Optional[float] = None
) -> StructuredAssessmentRunnable:
    return StructuredAssessmentRunnable(
        llm=llm,
        detector=make_grant_detector(),
        request_builder=make_grant_request_builder(),
        validator=GrantFieldValidator(),
        clock=clock,
        formatter=formatter,
        timeout=timeout
    )


async def aextract_grant_details(document_text: str, llm, **kwargs) -> Dict[str, GrantDetailField]:
    return await get_grant_details_runnable(llm, **kwargs).arun(document_text)


def extract_grant_details(document_text: str, llm, **kwargs) -> Dict[str, GrantDetailField]:
    return get_grant_details_runnable(llm, **kwargs).run(document_text)


def extract_grant_summary(document_text: str, llm, **kwargs) -> GrantDetails:
    """Same as `extract_grant_details`, flattened into a single GrantDetails model."""
    return GrantDetails.from_result(extract_grant_details(document_text, llm, **kwargs))
