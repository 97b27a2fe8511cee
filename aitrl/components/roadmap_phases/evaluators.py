"""
Strategy factories for roadmap phase generation.
"""

from typing import Any, Dict, List, Mapping, Optional

from aitrl.components.structured_assessment import (
    AssessmentRequest,
    CandidateDetector,
    PromptRequestBuilder,
    RecordValidator,
    coerce_int
)
from .core import (
    DEFAULT_MILESTONE,
    DEFAULT_PHASE_PLANS,
    MAX_PHASE_MONTHS,
    ROADMAP_PHASES,
    SCALE_KEYWORDS,
    RoadmapPhase
)

SYSTEM_PROMPT = """You are an expert in bioreactor technology and R&D planning. You plan the phases that take a system from the lab to deployment, grounded in its technical documentation and economics."""

USER_PROMPT = """Plan each of the following R&D phases: {candidates}

For every phase give an objective, a duration in whole months (1-60) and a list of concrete milestones. Plan only the phases listed above.

Production Scale: {production_scale}
Cost per Unit: {cost_per_unit}
Revenue per Unit: {revenue_per_unit}

Return ONLY a valid JSON object keyed by phase name. Do not use Markdown.

Example Output Format:
{{
  "pilot scale": {{"objective": "...", "duration_months": 18, "milestones": ["...", "..."]}}
}}

Technical Documentation:
{source_text}"""


def current_phase_index(text: str, context: Mapping[str, Any]) -> int:
    """Phase the project is in: from the production scale if given, else the first scale keyword in the text."""
    scale = context.get("production_scale")
    if isinstance(scale, str) and scale.strip():
        for pattern, index in SCALE_KEYWORDS:
            if pattern.search(scale):
                return index

    first_hit = None
    for pattern, index in SCALE_KEYWORDS:
        match = pattern.search(text)
        if match and (first_hit is None or match.start() < first_hit[0]):
            first_hit = (match.start(), index)
    return first_hit[1] if first_hit else 0


class RoadmapPhaseDetector(CandidateDetector):
    """Remaining phases, from the current one through deployment."""

    def __init__(self, phases: Optional[List[str]] = None):
        self.phases = list(phases or ROADMAP_PHASES)

    def __call__(self, text: str, context: Optional[Dict[str, Any]] = None) -> List[str]:
        if not text or not text.strip():
            return []
        start = min(current_phase_index(text, context or {}), len(self.phases) - 1)
        return self.phases[start:]


def roadmap_extra_inputs(request: AssessmentRequest) -> Dict[str, Any]:
    inputs = {}
    for key in ("production_scale", "cost_per_unit", "revenue_per_unit"):
        value = request.context.get(key)
        inputs[key] = "not provided" if value is None or value == "" else value
    return inputs


def make_roadmap_detector() -> RoadmapPhaseDetector:
    return RoadmapPhaseDetector()


def make_roadmap_request_builder() -> PromptRequestBuilder:
    return PromptRequestBuilder(SYSTEM_PROMPT, USER_PROMPT, extra_inputs=roadmap_extra_inputs)


class RoadmapPhaseValidator(RecordValidator):
    record_model = RoadmapPhase

    def validate(self, candidate: str, entry: Any, request: AssessmentRequest) -> Optional[Dict[str, Any]]:
        if not isinstance(entry, Mapping):
            return None
        objective = entry.get("objective")
        if not isinstance(objective, str) or not objective.strip():
            return None
        duration = coerce_int(entry.get("duration_months"))
        if duration is None or not 1 <= duration <= MAX_PHASE_MONTHS:
            return None
        milestones = entry.get("milestones")
        if not isinstance(milestones, list):
            return None
        milestones = [m.strip() for m in milestones if isinstance(m, str) and m.strip()]
        if not milestones:
            return None
        return {
            "objective": objective.strip(),
            "duration_months": duration,
            "milestones": milestones,
            "generated": True
        }

    def default(self, candidate: str, request: AssessmentRequest) -> Dict[str, Any]:
        objective, months = DEFAULT_PHASE_PLANS.get(candidate, (f"Plan the {candidate} phase.", 12))
        return {
            "objective": objective,
            "duration_months": months,
            "milestones": [DEFAULT_MILESTONE],
            "generated": False
        }
