"""
Node implementations for the structured assessment pipeline.

Each node reads from and writes to AssessmentState. Only RequesterNode talks to
the generative service; every other node is synchronous and pure.
"""

import re
import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from langchain_core.messages import BaseMessage
from langgraph.graph import END

import aitrl
from aitrl.clock import Clock, TimestampFormatter
from aitrl.prj_exception import CustomException, exception_logger
from aitrl.prj_logger import get_logs
from .core import AssessmentRequest, AssessmentState, CandidateDetector, RecordValidator, RequestBuilder
from .parsing import parse_llm_json_like
from .strategies import dedupe

LOGGERNAME = f"{aitrl.BASE_LOGGERNAME}.pipeline"
REQUESTER_LOGGERNAME = f"{aitrl.BASE_LOGGERNAME}.requester"


def build_request(state: AssessmentState) -> AssessmentRequest:
    return AssessmentRequest(
        source_text=state.get("source_text") or "",
        candidates=state.get("candidates") or [],
        context=state.get("context") or {}
    )


class DetectorNode:

    def __init__(self, detector: CandidateDetector):
        self.detector = detector

    def __call__(self, state: AssessmentState) -> Dict[str, Any]:
        text = state.get("source_text") or ""
        candidates = dedupe(self.detector(text, state.get("context") or {}))
        logging.getLogger(LOGGERNAME).debug(f"Detected {len(candidates)} candidates: {candidates}")
        # an empty result is already the final answer when nothing was detected
        return {"candidates": candidates, "result": {}}


def route_after_detection(state: AssessmentState) -> str:
    return "request" if state.get("candidates") else END


class RequesterNode:
    """
    Sends one bounded request to the generative service.

    Transport errors, timeouts and unparsable answers all become an empty raw
    assessment; this node never raises to the graph.
    """

    def __init__(self, llm, request_builder: RequestBuilder, timeout: Optional[float] = None):
        self.llm = llm
        self.request_builder = request_builder
        self.timeout = timeout
        self.chain = request_builder.build_template() | llm

    @exception_logger(REQUESTER_LOGGERNAME, default=None, level=logging.WARNING)
    async def call_service(self, request: AssessmentRequest) -> Any:
        inputs = self.request_builder.build_inputs(request)
        if self.timeout:
            return await asyncio.wait_for(self.chain.ainvoke(inputs), timeout=self.timeout)
        return await self.chain.ainvoke(inputs)

    @exception_logger(REQUESTER_LOGGERNAME, default=dict, level=logging.INFO)
    def parse_response(self, output: Any) -> Dict[str, Any]:
        """Chat models answer with a message; plain runnables may return text or a mapping."""
        if isinstance(output, BaseMessage):
            output = output.content
        if isinstance(output, Mapping):
            return dict(output)
        if isinstance(output, str):
            return parse_llm_json_like(output) if output.strip() else {}
        raise TypeError(f"Unsupported service output: {type(output).__name__}")

    @get_logs(REQUESTER_LOGGERNAME)
    async def __call__(self, state: AssessmentState) -> Dict[str, Any]:
        request = build_request(state)
        output = await self.call_service(request)
        raw = self.parse_response(output) if output is not None else {}
        return {"raw_assessment": raw}


def _key_signature(key: Any) -> str:
    return re.sub(r"[^0-9a-z]", "", str(key).lower())


def lookup_entry(raw: Dict[str, Any], candidate: str) -> Any:
    """Exact key first, then a match ignoring case, spacing and punctuation."""
    if candidate in raw:
        return raw[candidate]
    signature = _key_signature(candidate)
    for key, value in raw.items():
        if _key_signature(key) == signature:
            return value
    return None


class ValidatorNode:
    """Validates every candidate's raw entry, substituting the flow default when invalid."""

    def __init__(self, validator: RecordValidator):
        self.validator = validator

    def check(self, candidate: str, entry: Any, request: AssessmentRequest) -> Optional[Dict[str, Any]]:
        if entry is None:
            return None
        try:
            fields = self.validator.validate(candidate, entry, request)
            if fields is None:
                return None
            # the record model is the final gate on what a flow accepts
            self.validator.record_model.model_validate({**fields, "observed_at": "pending"})
            return fields
        except Exception as e:
            ce = CustomException(e)
            logging.getLogger(LOGGERNAME).info(f"Rejected entry for {candidate!r}: {ce.error_message}")
            return None

    def __call__(self, state: AssessmentState) -> Dict[str, Any]:
        logger = logging.getLogger(LOGGERNAME)
        request = build_request(state)
        raw = state.get("raw_assessment")
        if not isinstance(raw, dict):
            raw = {}

        records: Dict[str, Dict[str, Any]] = {}
        defaulted: List[str] = []
        for candidate in request.candidates:
            fields = self.check(candidate, lookup_entry(raw, candidate), request)
            if fields is None:
                fields = self.validator.default(candidate, request)
                defaulted.append(candidate)
            records[candidate] = fields

        if defaulted:
            logger.info(f"Defaulted {len(defaulted)}/{len(request.candidates)} candidates: {defaulted}")
        return {"records": records}


class StampingNode:

    def __init__(self, clock: Clock, formatter: TimestampFormatter):
        self.clock = clock
        self.formatter = formatter

    def __call__(self, state: AssessmentState) -> Dict[str, Any]:
        return {"observed_at": self.formatter(self.clock())}


class AssemblerNode:
    """Builds the final mapping: one record per candidate, in detection order."""

    def __init__(self, validator: RecordValidator):
        self.record_model = validator.record_model

    def __call__(self, state: AssessmentState) -> Dict[str, Any]:
        records = state.get("records") or {}
        observed_at = state["observed_at"]
        result = {
            candidate: self.record_model.model_validate({**records[candidate], "observed_at": observed_at})
            for candidate in state.get("candidates") or []
        }
        return {"result": result}
