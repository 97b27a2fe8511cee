"""
Strategy factories for unit economics simulation.

The model's figures are kept only when they agree, at two decimals, with the
reference calculation in `core.compute_metrics`; otherwise the reference
figure is used.
"""

import re
import math
from typing import Any, Dict, Optional

from aitrl.components.structured_assessment import (
    AssessmentRequest,
    FixedCandidates,
    PromptRequestBuilder,
    RecordValidator
)
from .core import (
    ECONOMICS_METRICS,
    NOT_APPLICABLE,
    EconomicsMetric,
    EconomicsParameters,
    compute_metrics,
    format_percentage,
    format_years
)

SYSTEM_PROMPT = """You are a financial analyst. You calculate unit economics exactly as instructed and report figures with two decimal places."""

USER_PROMPT = """Based on the provided scale parameters, calculate: {candidates}

- The unit cost is the same as the input cost per unit.
- ROI should be calculated as ((Revenue - Cost) / Cost) * 100.
- Assume the total investment is (cost_per_unit * production_scale).
- Assume the annual return is ((revenue_per_unit - cost_per_unit) * production_scale).
- The payback period should be Total Investment / Annual Return.

Format the ROI as a percentage string with two decimal places (e.g. "50.00%").
Format the payback period as a string with two decimal places followed by " years" (e.g. "2.00 years").
Use "N/A" when a figure is undefined.

Parameters:
{source_text}

Return ONLY the calculated JSON object with the keys unit_cost, roi and payback_period. Do not use Markdown."""

NUMBER_PAT = re.compile(r"^[^\d\-]*(-?\d[\d,]*(?:\.\d+)?)\s*(%|years?)?\s*$", re.IGNORECASE)


def has_parameters(text: str, context: Dict[str, Any]) -> bool:
    return EconomicsParameters.from_context(context) is not None


def make_economics_detector() -> FixedCandidates:
    return FixedCandidates(ECONOMICS_METRICS, is_applicable=has_parameters)


def make_economics_request_builder() -> PromptRequestBuilder:
    return PromptRequestBuilder(SYSTEM_PROMPT, USER_PROMPT)


def to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = NUMBER_PAT.match(value.strip())
        if not match:
            return None
        number = float(match.group(1).replace(",", ""))
    else:
        return None
    return number if math.isfinite(number) else None


def normalize_metric(candidate: str, value: Any) -> Any:
    """Render a model figure the way the reference calculation does, or None."""
    if isinstance(value, str) and value.strip().upper() == NOT_APPLICABLE:
        return NOT_APPLICABLE
    number = to_number(value)
    if number is None:
        return None
    if candidate == "unit_cost":
        return round(number, 2)
    if candidate == "roi":
        return format_percentage(number)
    if candidate == "payback_period":
        return format_years(number)
    return None


class EconomicsMetricValidator(RecordValidator):
    record_model = EconomicsMetric

    @staticmethod
    def expected(candidate: str, request: AssessmentRequest) -> Any:
        params = EconomicsParameters.from_context(request.context)
        return compute_metrics(params)[candidate]

    def validate(self, candidate: str, entry: Any, request: AssessmentRequest) -> Optional[Dict[str, Any]]:
        value = normalize_metric(candidate, entry)
        if value is None or value != self.expected(candidate, request):
            return None
        return {"value": value, "source": "model"}

    def default(self, candidate: str, request: AssessmentRequest) -> Dict[str, Any]:
        return {"value": self.expected(candidate, request), "source": "computed"}
