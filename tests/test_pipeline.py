import asyncio
from datetime import datetime, timedelta, timezone

from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from aitrl.clock import TimestampFormatter
from aitrl.components.structured_assessment import (
    AssessmentRecord,
    FixedCandidates,
    PromptRequestBuilder,
    RecordValidator,
    StructuredAssessmentRunnable,
    run_batch_assessment,
)
from aitrl.components.trl_breakdown import TRLAssessment, get_trl_breakdown_runnable
from conftest import OBSERVED_AT


class Label(AssessmentRecord):
    label: str


class ExplodingValidator(RecordValidator):
    """Raises for "bad", accepts any string otherwise."""
    record_model = Label

    def validate(self, candidate, entry, request):
        if candidate == "bad":
            raise RuntimeError("validator bug")
        return {"label": entry} if isinstance(entry, str) else None

    def default(self, candidate, request):
        return {"label": "unknown"}


def make_label_runnable(llm, clock):
    return StructuredAssessmentRunnable(
        llm=llm,
        detector=FixedCandidates(["good", "bad", "missing"]),
        request_builder=PromptRequestBuilder("Label things.", "Label {candidates} in {source_text}"),
        validator=ExplodingValidator(),
        clock=clock,
    )


def test_validator_errors_fall_back_to_default(fake_llm, clock):
    runnable = make_label_runnable(fake_llm('{"good": "fine", "bad": "boom"}'), clock)

    result = runnable.run("some text")

    assert {k: v.label for k, v in result.items()} == {"good": "fine", "bad": "unknown", "missing": "unknown"}


def test_values_failing_the_record_model_are_defaulted(fake_llm, clock):
    class LooseValidator(ExplodingValidator):
        def validate(self, candidate, entry, request):
            return {"label": 123}

    runnable = StructuredAssessmentRunnable(
        llm=fake_llm('{"good": "fine"}'),
        detector=FixedCandidates(["good", "missing"]),
        request_builder=PromptRequestBuilder("Label things.", "Label {candidates} in {source_text}"),
        validator=LooseValidator(),
        clock=clock,
    )

    result = runnable.run("some text")

    assert all(record.label == "unknown" for record in result.values())


def test_clock_is_read_once_per_run(fake_llm):
    ticks = []

    def ticking_clock():
        moment = datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=len(ticks))
        ticks.append(moment)
        return moment

    runnable = get_trl_breakdown_runnable(fake_llm("{}"), clock=ticking_clock)

    result = runnable.run("sensor pump valve reactor")

    assert len(ticks) == 1
    assert len({record.observed_at for record in result.values()}) == 1


def test_custom_formatter(fake_llm, clock):
    formatter = TimestampFormatter(tz="UTC", fmt="%H:%M", suffix=None)
    runnable = get_trl_breakdown_runnable(fake_llm("{}"), clock=clock, formatter=formatter)

    result = runnable.run("pump")

    assert result["pump"].observed_at == "08:04"


def test_final_state_keeps_raw_assessment_out_of_result(fake_llm, clock):
    runnable = get_trl_breakdown_runnable(fake_llm('{"pump": {"score": 2, "justification": "concept"}}'), clock=clock)

    state = asyncio.run(runnable.ainvoke(runnable.initial_state("pump")))

    assert state["raw_assessment"] == {"pump": {"score": 2, "justification": "concept"}}
    assert state["result"] == {"pump": TRLAssessment(score=2, justification="concept", observed_at=OBSERVED_AT)}


def test_short_circuit_stops_after_detection(recording_llm, clock):
    llm = recording_llm()
    runnable = get_trl_breakdown_runnable(llm.runnable, clock=clock)

    state = asyncio.run(runnable.ainvoke(runnable.initial_state("")))

    assert state["candidates"] == []
    assert state["result"] == {}
    assert "raw_assessment" not in state
    assert llm.prompts == []


def test_batch_runs_every_document_independently(fake_llm, clock):
    runnable = get_trl_breakdown_runnable(fake_llm("{}"), clock=clock)
    documents = {"a": "pump and valve", "b": "", "c": "sensor"}

    results = asyncio.run(run_batch_assessment(runnable, documents, max_concurrent=2))

    assert list(results) == ["a", "b", "c"]
    assert list(results["a"]) == ["pump", "valve"]
    assert results["b"] == {}
    assert list(results["c"]) == ["sensor"]


def test_service_returning_a_mapping_is_validated(clock):
    llm = RunnableLambda(lambda prompt_value: {"sensor": {"score": 4, "justification": "Lab validated"}})
    runnable = get_trl_breakdown_runnable(llm, clock=clock)

    result = runnable.run("A sensor array.")

    assert result == {"sensor": TRLAssessment(score=4, justification="Lab validated", observed_at=OBSERVED_AT)}


def test_service_returning_a_message_is_parsed(clock):
    llm = RunnableLambda(lambda prompt_value: AIMessage(content='{"pump": {"score": 6, "justification": "Prototype"}}'))
    runnable = get_trl_breakdown_runnable(llm, clock=clock)

    result = runnable.run("The pump.")

    assert result["pump"].score == 6


def test_service_returning_something_else_is_defaulted(clock):
    runnable = get_trl_breakdown_runnable(RunnableLambda(lambda prompt_value: 42), clock=clock)

    result = runnable.run("The pump.")

    assert result["pump"].score == 1


def test_stamp_replaces_any_timestamp_a_validator_supplies(fake_llm, clock):
    class StampingValidator(ExplodingValidator):
        def validate(self, candidate, entry, request):
            return {"label": entry, "observed_at": "yesterday"}

        def default(self, candidate, request):
            return {"label": "unknown", "observed_at": "yesterday"}

    runnable = StructuredAssessmentRunnable(
        llm=fake_llm('{"good": "fine"}'),
        detector=FixedCandidates(["good", "missing"]),
        request_builder=PromptRequestBuilder("Label things.", "Label {candidates} in {source_text}"),
        validator=StampingValidator(),
        clock=clock,
    )

    result = runnable.run("some text")

    assert {k: (v.label, v.observed_at) for k, v in result.items()} == {
        "good": ("fine", OBSERVED_AT),
        "missing": ("unknown", OBSERVED_AT),
    }
