"""
Strategy factories for grant detail extraction.
"""

import re
import math
from typing import Any, Callable, Dict, List, Mapping, Optional

from aitrl.components.structured_assessment import (
    AssessmentRequest,
    FixedCandidates,
    PromptRequestBuilder,
    RecordValidator
)
from .core import GRANT_FIELDS, GrantDetailField

SYSTEM_PROMPT = """You are an expert at extracting grant information from documents. You only report details that are stated in the text and never guess."""

USER_PROMPT = """Analyze the following text and extract these details: {candidates}

- funding_source: the organisation providing the funding (e.g. "National Science Foundation")
- grant_id: the unique identifier of the grant (e.g. "NSF-12345")
- funding_amount: the total amount as a number (e.g. 500000)
- duration: the duration of the grant (e.g. "2 years")
- associated_institutions: a list of institutions associated with the grant

If a detail is not present in the text, set it to null. Return ONLY a valid JSON object with exactly these keys. Do not use Markdown.

Text:
{source_text}"""

AMOUNT_MULTIPLIERS = {
    "k": 1e3, "thousand": 1e3, "thousands": 1e3,
    "m": 1e6, "mm": 1e6, "mn": 1e6, "mln": 1e6, "million": 1e6, "millions": 1e6,
    "b": 1e9, "bn": 1e9, "billion": 1e9, "billions": 1e9,
}
AMOUNT_PAT = re.compile(
    r"^[^\d\-]*?((?:\d[\d,]*)?\.?\d+(?:[eE][+-]?\d+)?)"
    r"\s*([A-Za-z]+)?\s*([A-Za-z]+)?\s*\.?\s*$"
)
CURRENCY_CODE_PAT = re.compile(r"[A-Z]{3}")


def make_grant_detector() -> FixedCandidates:
    return FixedCandidates(GRANT_FIELDS)


def make_grant_request_builder() -> PromptRequestBuilder:
    return PromptRequestBuilder(SYSTEM_PROMPT, USER_PROMPT)


def clean_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_amount(value: Any) -> Optional[float]:
    """Parse 500000, "500,000", "$1.2M", "EUR 2mn" or "250 thousand USD" into a non-negative float."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        match = AMOUNT_PAT.match(value.strip())
        if not match:
            return None
        words = [word for word in match.group(2, 3) if word]
        multiplier = 1.0
        if words and words[0].lower() in AMOUNT_MULTIPLIERS:
            multiplier = AMOUNT_MULTIPLIERS[words.pop(0).lower()]
        # anything left over may only be a currency code such as "USD"
        if any(not CURRENCY_CODE_PAT.fullmatch(word) for word in words):
            return None
        amount = float(match.group(1).replace(",", "")) * multiplier
    else:
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def clean_institutions(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        value = re.split(r"[;\n]", value)
    if not isinstance(value, list):
        return None
    names = [name.strip() for name in value if isinstance(name, str) and name.strip()]
    if not names:
        return None
    return list(dict.fromkeys(names))


FIELD_CLEANERS: Dict[str, Callable[[Any], Any]] = {
    "funding_source": clean_text,
    "grant_id": clean_text,
    "funding_amount": parse_amount,
    "duration": clean_text,
    "associated_institutions": clean_institutions,
}


class GrantFieldValidator(RecordValidator):
    """Cleans each field with its own rule; an unusable value counts as not found."""
    record_model = GrantDetailField

    def validate(self, candidate: str, entry: Any, request: AssessmentRequest) -> Optional[Dict[str, Any]]:
        # accept both bare values and {"value": ...} wrappers
        if isinstance(entry, Mapping) and "value" in entry:
            entry = entry["value"]
        cleaner = FIELD_CLEANERS.get(candidate)
        if cleaner is None:
            return None
        value = cleaner(entry)
        if value is None:
            return None
        return {"value": value, "found": True}

    def default(self, candidate: str, request: AssessmentRequest) -> Dict[str, Any]:
        empty = [] if candidate == "associated_institutions" else None
        return {"value": empty, "found": False}
