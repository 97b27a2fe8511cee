"""
Structured Assessment Pipeline

Detect candidates in free text, ask a generative model to assess exactly those
candidates, then validate and repair its answer so that every candidate ends up
with one schema-valid record.
"""

from .core import (
    AssessmentRecord,
    AssessmentRequest,
    AssessmentState,
    CandidateDetector,
    RequestBuilder,
    RecordValidator
)

from .strategies import (
    LexiconDetector,
    FixedCandidates,
    PromptRequestBuilder,
    coerce_int
)

from .parsing import parse_llm_json_like

from .pipeline import (
    StructuredAssessmentRunnable,
    run_batch_assessment
)

__all__ = [
    'AssessmentRecord',
    'AssessmentRequest',
    'AssessmentState',
    'CandidateDetector',
    'RequestBuilder',
    'RecordValidator',
    'LexiconDetector',
    'FixedCandidates',
    'PromptRequestBuilder',
    'coerce_int',
    'parse_llm_json_like',
    'StructuredAssessmentRunnable',
    'run_batch_assessment'
]
