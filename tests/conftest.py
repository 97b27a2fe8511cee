import asyncio
from datetime import datetime, timezone

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.runnables import RunnableLambda

from aitrl.clock import fixed_clock

# 13:34:00 in Asia/Kolkata
OBSERVED = datetime(2025, 7, 22, 8, 4, 0, tzinfo=timezone.utc)
OBSERVED_AT = "2025-07-22 13:34:00 IST"


class RecordingLLM:
    """Runnable stand-in for the model that remembers every prompt it was sent."""

    def __init__(self, response="{}"):
        self.response = response
        self.prompts = []
        self.runnable = RunnableLambda(self._respond)

    def _respond(self, prompt_value):
        self.prompts.append(prompt_value.to_string())
        return self.response


def _raise_connection_error(prompt_value):
    raise ConnectionError("service unavailable")


async def _never_answers(prompt_value):
    await asyncio.sleep(5)
    return "{}"


@pytest.fixture
def clock():
    return fixed_clock(OBSERVED)


@pytest.fixture
def fake_llm():
    def _make(*responses):
        return FakeListChatModel(responses=list(responses))
    return _make


@pytest.fixture
def recording_llm():
    def _make(response="{}"):
        return RecordingLLM(response)
    return _make


@pytest.fixture
def failing_llm():
    return RunnableLambda(_raise_connection_error)


@pytest.fixture
def slow_llm():
    return RunnableLambda(_never_answers)
