"""
Core data models for R&D roadmap phase generation.
"""

import re
from pydantic import Field, field_validator
from typing import List

from aitrl.components.structured_assessment.core import AssessmentRecord

ROADMAP_PHASES = [
    "lab validation",
    "pilot scale",
    "scale-up",
    "industrial deployment",
]

MAX_PHASE_MONTHS = 60

# scale keyword -> index of the phase the project is currently in
SCALE_KEYWORDS = [
    (re.compile(r"\b(industrial|commercial)\b", re.IGNORECASE), 3),
    (re.compile(r"\b(scale[\s-]?up|demonstration)\b", re.IGNORECASE), 2),
    (re.compile(r"\bpilot\b", re.IGNORECASE), 1),
    (re.compile(r"\b(lab|laboratory|bench)\b", re.IGNORECASE), 0),
]

DEFAULT_PHASE_PLANS = {
    "lab validation": ("Validate core components and process parameters at bench scale.", 12),
    "pilot scale": ("Demonstrate continuous operation and collect performance data at pilot scale.", 18),
    "scale-up": ("Scale the process and qualify equipment for production volumes.", 24),
    "industrial deployment": ("Deploy, certify and operate the system in its operational environment.", 24),
}
DEFAULT_MILESTONE = "Define scope, success criteria and resourcing for this phase."


class RoadmapPhase(AssessmentRecord):
    """Plan for one roadmap phase; `generated` is False when the default plan was used."""
    objective: str
    duration_months: int = Field(..., ge=1, le=MAX_PHASE_MONTHS)
    milestones: List[str] = Field(..., min_length=1)
    generated: bool = False

    @field_validator("objective")
    @classmethod
    def objective_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("objective must not be blank")
        return value
