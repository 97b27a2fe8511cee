"""
Strategy factories for the TRL breakdown.

Creates the detector, request builder and validator that configure the generic
structured assessment pipeline for component readiness scoring.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from aitrl.components.structured_assessment import (
    AssessmentRequest,
    LexiconDetector,
    PromptRequestBuilder,
    RecordValidator,
    coerce_int
)
from .core import (
    DEFAULT_JUSTIFICATION,
    DEFAULT_TRL_SCORE,
    TRL_LEXICON,
    TRL_MAX,
    TRL_MIN,
    TRLAssessment
)

SYSTEM_PROMPT = """You are a TRL assessment expert. You assign a Technology Readiness Level (TRL) from 1 to 9 to components described in technical documentation:

1 - Basic principles observed
2 - Technology concept formulated
3 - Experimental proof of concept
4 - Technology validated in lab
5 - Technology validated in relevant environment
6 - Technology demonstrated in relevant environment
7 - System prototype demonstration in operational environment
8 - System complete and qualified
9 - Actual system proven in operational environment

Base every level only on evidence in the documentation and justify it in one or two sentences."""

USER_PROMPT = """Assign a TRL (1-9) to each of the following components: {candidates}

Return ONLY a valid JSON object mapping the components you were asked to assess to their TRL levels and justifications. Do not assess any other components. Do not use Markdown.

Example Output Format:
{{
  "sensor": {{"score": 4, "justification": "Lab validated"}},
  "pump": {{"score": 3, "justification": "Proof of concept"}}
}}

Technical Documentation:
{source_text}"""


def make_trl_detector(terms: Optional[Iterable[str]] = None) -> LexiconDetector:
    """Create the component detector, optionally with a custom lexicon."""
    return LexiconDetector(terms or TRL_LEXICON)


def make_trl_request_builder() -> PromptRequestBuilder:
    return PromptRequestBuilder(SYSTEM_PROMPT, USER_PROMPT)


class TRLRecordValidator(RecordValidator):
    """
    A raw entry is accepted only when both fields are usable: an integral score
    in [1, 9] (under "score", or "trl" as older prompts asked for) and a
    non-blank justification. Anything else falls back to the theoretical-stage
    default.
    """
    record_model = TRLAssessment

    def validate(self, candidate: str, entry: Any, request: AssessmentRequest) -> Optional[Dict[str, Any]]:
        if not isinstance(entry, Mapping):
            return None
        score = coerce_int(entry["score"] if "score" in entry else entry.get("trl"))
        if score is None or not TRL_MIN <= score <= TRL_MAX:
            return None
        justification = entry.get("justification")
        if not isinstance(justification, str) or not justification.strip():
            return None
        return {"score": score, "justification": justification}

    def default(self, candidate: str, request: AssessmentRequest) -> Dict[str, Any]:
        return {"score": DEFAULT_TRL_SCORE, "justification": DEFAULT_JUSTIFICATION}
