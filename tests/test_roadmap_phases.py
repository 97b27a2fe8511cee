import json

from aitrl.components.roadmap_phases import (
    ROADMAP_PHASES,
    RoadmapPhaseDetector,
    generate_roadmap_phases,
)

DOC = "Our bioreactor completed bench trials and is moving to a pilot plant."


def test_phases_start_from_production_scale():
    detect = RoadmapPhaseDetector()
    assert detect(DOC, {"production_scale": "pilot scale"}) == ROADMAP_PHASES[1:]
    assert detect(DOC, {"production_scale": "industrial scale"}) == ["industrial deployment"]


def test_phases_fall_back_to_first_scale_keyword_in_text():
    detect = RoadmapPhaseDetector()
    assert detect(DOC, {}) == ROADMAP_PHASES
    assert detect("Ready for scale-up after pilot runs.", {}) == ROADMAP_PHASES[2:]
    assert detect("No scale mentioned.", {}) == ROADMAP_PHASES


def test_blank_text_has_no_phases():
    assert RoadmapPhaseDetector()("", {"production_scale": "pilot"}) == []


def test_valid_plans_are_kept_and_the_rest_defaulted(fake_llm, clock):
    llm = fake_llm(json.dumps({
        "pilot scale": {"objective": "Run 500 L pilot", "duration_months": 18, "milestones": ["Install", "", "Run 3 batches"]},
        "scale-up": {"objective": "Scale to 5 m3", "duration_months": 120, "milestones": ["Design"]},
        "industrial deployment": {"objective": "Deploy", "duration_months": 24, "milestones": []},
    }))

    result = generate_roadmap_phases(DOC, llm, production_scale="pilot scale", clock=clock)

    assert list(result) == ["pilot scale", "scale-up", "industrial deployment"]
    pilot = result["pilot scale"]
    assert pilot.generated is True
    assert pilot.milestones == ["Install", "Run 3 batches"]
    assert result["scale-up"].generated is False
    assert result["scale-up"].duration_months == 24
    assert result["industrial deployment"].generated is False
    assert len({r.observed_at for r in result.values()}) == 1


def test_prompt_carries_economics_context(recording_llm, clock):
    llm = recording_llm()

    generate_roadmap_phases(DOC, llm.runnable, production_scale="lab scale", cost_per_unit="$4", clock=clock)

    prompt = llm.prompts[0]
    assert "Production Scale: lab scale" in prompt
    assert "Cost per Unit: $4" in prompt
    assert "Revenue per Unit: not provided" in prompt
