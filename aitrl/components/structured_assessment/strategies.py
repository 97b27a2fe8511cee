"""
Reusable strategy implementations shared by the assessment flows.
"""

import re
import math
import json
from typing import Any, Callable, Dict, Iterable, List, Optional

from langchain_core.prompts.chat import ChatPromptTemplate

from .core import AssessmentRequest, CandidateDetector, RequestBuilder


def normalize_term(term: str) -> str:
    return " ".join(term.lower().split())


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop repeats, keeping first-seen order."""
    return list(dict.fromkeys(items))


class LexiconDetector(CandidateDetector):
    """
    Case-insensitive lexicon scan.

    Longer terms are tried first so "bioreactor" is not reported as "reactor";
    words inside a multi-word term may be separated by any whitespace run.
    """

    def __init__(self, terms: Iterable[str]):
        self.terms = dedupe(normalize_term(t) for t in terms if t and t.strip())
        if not self.terms:
            raise ValueError("LexiconDetector requires at least one term")
        alternatives = sorted(self.terms, key=len, reverse=True)
        pattern = "|".join(r"\s+".join(re.escape(w) for w in t.split()) for t in alternatives)
        self.pattern = re.compile(f"({pattern})", re.IGNORECASE)

    def __call__(self, text: str, context: Optional[Dict[str, Any]] = None) -> List[str]:
        if not text:
            return []
        return dedupe(normalize_term(m.group(0)) for m in self.pattern.finditer(text))


class FixedCandidates(CandidateDetector):
    """Always the same candidates, provided the run has something to work on."""

    def __init__(self, candidates: Iterable[str], is_applicable: Optional[Callable[[str, Dict[str, Any]], bool]] = None):
        self.candidates = dedupe(candidates)
        self.is_applicable = is_applicable or (lambda text, context: bool(text and text.strip()))

    def __call__(self, text: str, context: Optional[Dict[str, Any]] = None) -> List[str]:
        if not self.is_applicable(text or "", context or {}):
            return []
        return list(self.candidates)


class PromptRequestBuilder(RequestBuilder):
    """
    System/user prompt pair with `{candidates}` and `{source_text}` slots.

    Additional slots are filled from the request context through `extra_inputs`.
    """

    def __init__(
        self,
        system_prompt: str,
        user_prompt: str,
        extra_inputs: Optional[Callable[[AssessmentRequest], Dict[str, Any]]] = None
    ):
        self.system_prompt = system_prompt
        self.user_prompt = user_prompt
        self.extra_inputs = extra_inputs

    def build_template(self) -> ChatPromptTemplate:
        return ChatPromptTemplate.from_messages([
            ("system", self.system_prompt),
            ("human", self.user_prompt)
        ])

    def build_inputs(self, request: AssessmentRequest) -> Dict[str, Any]:
        inputs = {
            "candidates": ", ".join(request.candidates),
            "candidates_json": json.dumps(request.candidates),
            "source_text": request.source_text,
        }
        if self.extra_inputs is not None:
            inputs.update(self.extra_inputs(request))
        return inputs


def coerce_int(value: Any) -> Optional[int]:
    """Return `value` as an int if it is a finite integral number, else None.

    Booleans and numeric strings are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None
