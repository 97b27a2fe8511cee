"""
TRL Breakdown

Technology Readiness Level assessment of the components named in technical
documentation.
"""

from .core import (
    TRLAssessment,
    TRL_LEXICON,
    DEFAULT_JUSTIFICATION
)

from .evaluators import (
    make_trl_detector,
    make_trl_request_builder,
    TRLRecordValidator
)

from .pipeline import (
    get_trl_breakdown_runnable,
    get_trl_breakdown,
    aget_trl_breakdown,
    run_batch_trl_breakdown
)

__all__ = [
    'TRLAssessment',
    'TRL_LEXICON',
    'DEFAULT_JUSTIFICATION',
    'make_trl_detector',
    'make_trl_request_builder',
    'TRLRecordValidator',
    'get_trl_breakdown_runnable',
    'get_trl_breakdown',
    'aget_trl_breakdown',
    'run_batch_trl_breakdown'
]
