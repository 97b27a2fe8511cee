"""
Core data models for the TRL (Technology Readiness Level) breakdown.
"""

from pydantic import Field, field_validator

from aitrl.components.structured_assessment.core import AssessmentRecord

TRL_MIN = 1
TRL_MAX = 9

TRL_LEXICON = [
    "bioreactor",
    "reactor",
    "sensor",
    "control system",
    "pump",
    "valve",
]

DEFAULT_TRL_SCORE = TRL_MIN
DEFAULT_JUSTIFICATION = "No specific data found, defaulting to theoretical stage."


class TRLAssessment(AssessmentRecord):
    """Validated TRL record for one detected component."""
    score: int = Field(..., ge=TRL_MIN, le=TRL_MAX, description="Technology Readiness Level (1-9)")
    justification: str = Field(..., description="Why this level was assigned")

    @field_validator("justification")
    @classmethod
    def justification_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("justification must not be blank")
        return value
