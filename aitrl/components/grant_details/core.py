"""
Core data models for grant detail extraction.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from aitrl.components.structured_assessment.core import AssessmentRecord

GRANT_FIELDS = [
    "funding_source",
    "grant_id",
    "funding_amount",
    "duration",
    "associated_institutions",
]


class GrantDetailField(AssessmentRecord):
    """One extracted grant field; `found` is False when the default was used."""
    value: Any = None
    found: bool = False


class GrantDetails(BaseModel):
    """Flat view of a grant detail extraction result."""
    funding_source: Optional[str] = None
    grant_id: Optional[str] = None
    funding_amount: Optional[float] = None
    duration: Optional[str] = None
    associated_institutions: List[str] = Field(default_factory=list)
    observed_at: Optional[str] = None

    @classmethod
    def from_result(cls, result: Dict[str, GrantDetailField]) -> 'GrantDetails':
        values = {name: record.value for name, record in result.items() if record.found}
        observed = [record.observed_at for record in result.values()]
        return cls(**values, observed_at=observed[0] if observed else None)
