import pytest

from aitrl.components.structured_assessment import parse_llm_json_like


def test_strict_json():
    assert parse_llm_json_like('{"sensor": {"score": 4}}') == {"sensor": {"score": 4}}


def test_markdown_fence_is_stripped():
    raw = 'Here you go:\n```json\n{"pump": {"score": 3, "justification": "PoC"}}\n```\nThanks'
    assert parse_llm_json_like(raw) == {"pump": {"score": 3, "justification": "PoC"}}


def test_prose_around_object():
    raw = 'Sure! {"valve": {"score": 2, "justification": "concept"}} Hope this helps.'
    assert parse_llm_json_like(raw)["valve"]["score"] == 2


def test_python_literal_dict():
    assert parse_llm_json_like("{'sensor': {'score': 5, 'ok': True}}") == {"sensor": {"score": 5, "ok": True}}


def test_trailing_comma_repair():
    assert parse_llm_json_like('{"sensor": {"score": 5,},}') == {"sensor": {"score": 5}}


@pytest.mark.parametrize("raw", ["", "not json at all", "[1, 2, 3]", "42", None])
def test_unparsable_or_non_object_raises(raw):
    with pytest.raises(ValueError):
        parse_llm_json_like(raw)
