import pytest

from aitrl.components.structured_assessment import FixedCandidates, LexiconDetector
from aitrl.components.trl_breakdown import make_trl_detector


@pytest.fixture
def detect():
    return make_trl_detector()


def test_empty_text_has_no_candidates(detect):
    assert detect("", {}) == []
    assert detect(None, {}) == []


def test_detection_is_case_insensitive(detect):
    assert detect("SENSOR", {}) == ["sensor"]
    assert detect("sensor", {}) == ["sensor"]
    assert detect("Sensor", {}) == ["sensor"]


def test_dedup_keeps_first_seen_order(detect):
    assert detect("pump sensor pump", {}) == ["pump", "sensor"]


def test_detection_is_deterministic(detect):
    text = "The Valve feeds the reactor; a second valve and a PUMP follow."
    assert detect(text, {}) == detect(text, {})
    assert detect(text, {}) == ["valve", "reactor", "pump"]


def test_longest_term_wins(detect):
    assert detect("The bioreactor is stirred.", {}) == ["bioreactor"]
    assert detect("bioreactor and reactor", {}) == ["bioreactor", "reactor"]


def test_multi_word_terms_tolerate_whitespace(detect):
    assert detect("The Control\n  System was upgraded", {}) == ["control system"]


def test_no_matches():
    assert make_trl_detector()("Nothing relevant here.", {}) == []


def test_custom_lexicon():
    detect = LexiconDetector(["heat exchanger", "Membrane"])
    assert detect("A membrane and a HEAT EXCHANGER", {}) == ["membrane", "heat exchanger"]


def test_lexicon_requires_terms():
    with pytest.raises(ValueError):
        LexiconDetector(["", "  "])


def test_fixed_candidates_skip_blank_text():
    detect = FixedCandidates(["a", "b", "a"])
    assert detect("   ", {}) == []
    assert detect("some text", {}) == ["a", "b"]
