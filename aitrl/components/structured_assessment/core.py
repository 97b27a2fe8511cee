"""
Core data models for the structured assessment pipeline.

Defines the Pydantic request/record models, the TypedDict state shared by the
LangGraph nodes, and the three strategy interfaces a flow plugs in:
candidate detection, request building and record validation.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Type, TypedDict
from langchain_core.prompts.chat import ChatPromptTemplate


class AssessmentRecord(BaseModel):
    """Base class for the validated record a flow produces per candidate."""
    observed_at: str = Field(..., description="Shared observation timestamp of the run")


class AssessmentRequest(BaseModel):
    """Bounded request handed to the generative service."""
    source_text: str = ""
    candidates: List[str] = Field(default_factory=list)
    context: Dict[str, Any] = Field(default_factory=dict)


class AssessmentState(TypedDict, total=False):
    """State for the LangGraph assessment pipeline."""
    source_text: str
    context: Dict[str, Any]
    candidates: List[str]
    raw_assessment: Dict[str, Any]  # untrusted model output, never returned
    records: Dict[str, Dict[str, Any]]  # validated or defaulted fields per candidate
    observed_at: str
    result: Dict[str, AssessmentRecord]


class CandidateDetector:
    """Extracts the ordered, distinct candidates to assess from the source text."""

    def __call__(self, text: str, context: Dict[str, Any]) -> List[str]:
        raise NotImplementedError


class RequestBuilder:
    """Builds the prompt template and its inputs for one assessment request."""

    def build_template(self) -> ChatPromptTemplate:
        raise NotImplementedError

    def build_inputs(self, request: AssessmentRequest) -> Dict[str, Any]:
        raise NotImplementedError


class RecordValidator:
    """
    Per-candidate validation and repair.

    `validate` must be total: it returns the record fields when the raw entry is
    acceptable and None otherwise. `default` returns the fields substituted for
    an invalid or missing entry and must always satisfy `record_model`.
    """
    record_model: Type[AssessmentRecord] = AssessmentRecord

    def validate(self, candidate: str, entry: Any, request: AssessmentRequest) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def default(self, candidate: str, request: AssessmentRequest) -> Dict[str, Any]:
        raise NotImplementedError
