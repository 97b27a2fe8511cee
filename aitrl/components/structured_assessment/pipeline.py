"""
Structured Assessment Pipeline

LangGraph workflow that turns free text into a complete, schema-valid
candidate -> record mapping, whatever the generative service returns.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from langgraph.graph import StateGraph, START, END

import aitrl
from aitrl.clock import Clock, TimestampFormatter, utc_now
from .core import AssessmentRecord, AssessmentState, CandidateDetector, RecordValidator, RequestBuilder
from .nodes import (
    AssemblerNode,
    DetectorNode,
    RequesterNode,
    StampingNode,
    ValidatorNode,
    route_after_detection
)

LOGGERNAME = f"{aitrl.BASE_LOGGERNAME}.pipeline"


class StructuredAssessmentRunnable:
    """
    Generic detect -> request -> validate -> stamp -> assemble pipeline.

    Graph structure:
        START
          ↓
        detect ──(no candidates)──→ END
          ↓
        request
          ↓
        validate
          ↓
        stamp
          ↓
        assemble
          ↓
        END

    The runnable keeps no per-run state, so one instance can serve concurrent
    invocations.
    """

    def __init__(
        self,
        llm,
        detector: CandidateDetector,
        request_builder: RequestBuilder,
        validator: RecordValidator,
        clock: Optional[Clock] = None,
        formatter: Optional[TimestampFormatter] = None,
        timeout: Optional[float] = None
    ):
        """
        Args:
            llm: Chat model or runnable used as the generative service
            detector: Candidate extraction strategy
            request_builder: Prompt building strategy
            validator: Per-candidate validation/default strategy
            clock: Returns the run's observation time (defaults to UTC now)
            formatter: Renders the observation time (defaults to Asia/Kolkata, IST suffix)
            timeout: Seconds to wait for the service before treating it as unavailable
        """
        self.llm = llm
        self.detector = detector
        self.request_builder = request_builder
        self.validator = validator
        self.clock = clock or utc_now
        self.formatter = formatter or TimestampFormatter()
        self.timeout = timeout
        self.logger = logging.getLogger(LOGGERNAME)
        self.graph = self.build_graph()

    def build_graph(self) -> Any:
        graph = StateGraph(AssessmentState)

        graph.add_node("detect", DetectorNode(self.detector))
        graph.add_node("request", RequesterNode(self.llm, self.request_builder, self.timeout))
        graph.add_node("validate", ValidatorNode(self.validator))
        graph.add_node("stamp", StampingNode(self.clock, self.formatter))
        graph.add_node("assemble", AssemblerNode(self.validator))

        graph.add_edge(START, "detect")
        graph.add_conditional_edges("detect", route_after_detection, {"request": "request", END: END})
        graph.add_edge("request", "validate")
        graph.add_edge("validate", "stamp")
        graph.add_edge("stamp", "assemble")
        graph.add_edge("assemble", END)

        return graph.compile()

    @staticmethod
    def initial_state(text: Optional[str], context: Optional[Mapping[str, Any]] = None) -> AssessmentState:
        return {"source_text": text or "", "context": dict(context or {})}

    async def ainvoke(self, state: Dict[str, Any], **kwargs) -> Dict[str, Any]:
        """Async invocation of the graph; returns the full final state."""
        return await self.graph.ainvoke(state, **kwargs)

    async def arun(self, text: Optional[str], context: Optional[Mapping[str, Any]] = None) -> Dict[str, AssessmentRecord]:
        """Assess `text` and return only the final candidate -> record mapping."""
        final_state = await self.ainvoke(self.initial_state(text, context))
        result = final_state.get("result") or {}
        self.logger.info(f"Assessment completed with {len(result)} records")
        return dict(result)

    def run(self, text: Optional[str], context: Optional[Mapping[str, Any]] = None) -> Dict[str, AssessmentRecord]:
        """Sync wrapper around `arun`; must not be called from a running event loop."""
        return asyncio.run(self.arun(text, context))


async def run_batch_assessment(
    runnable: StructuredAssessmentRunnable,
    documents: Mapping[Any, str],
    contexts: Optional[Mapping[Any, Mapping[str, Any]]] = None,
    max_concurrent: int = 3
) -> Dict[Any, Dict[str, AssessmentRecord]]:
    """
    Run many independent assessments concurrently.

    Args:
        runnable: Pipeline to run for every document
        documents: Mapping of document id -> source text
        contexts: Optional mapping of document id -> flow context
        max_concurrent: Maximum in-flight service calls

    Returns:
        Mapping of document id -> result mapping, in input order
    """
    logger = logging.getLogger(LOGGERNAME)
    semaphore = asyncio.Semaphore(max_concurrent)
    contexts = contexts or {}

    async def assess_single(doc_id, text):
        async with semaphore:
            logger.info(f"Assessing document {doc_id}")
            return await runnable.arun(text, contexts.get(doc_id))

    doc_ids = list(documents.keys())
    results = await asyncio.gather(*(assess_single(doc_id, documents[doc_id]) for doc_id in doc_ids))
    return dict(zip(doc_ids, results))
