import json

import pandas as pd
import pytest
from langchain_ollama import ChatOllama

from aitrl.components.clients import get_llm
from aitrl.components.workflow import AssessmentWorkflow
from aitrl.prj_exception import ConfigurationError

CONFIG = {
    "TEXT_COLUMN": "text",
    "ID_COLUMN": "document_id",
    "MAX_CONCURRENT": 2,
    "TIMESTAMP": {"TIMEZONE": "Asia/Kolkata", "SUFFIX": "IST"},
}


def test_get_llm_builds_ollama_model():
    llm = get_llm({"PROVIDER": "ollama", "MODEL": "llama3.1", "BASE_URL": "http://localhost:11435"})
    assert isinstance(llm, ChatOllama)
    assert llm.base_url == "http://localhost:11435"


def test_get_llm_rejects_bad_provider_and_missing_key():
    with pytest.raises(ConfigurationError):
        get_llm({"PROVIDER": "nonsense"})
    with pytest.raises(ConfigurationError):
        get_llm({"PROVIDER": "openai"}, env_file=None)


def test_unknown_flow_is_rejected(fake_llm):
    with pytest.raises(ConfigurationError):
        AssessmentWorkflow(CONFIG, flow="summaries", llm=fake_llm("{}"))


def test_trl_workflow_end_to_end(tmp_path, fake_llm):
    input_file = tmp_path / "docs.csv"
    pd.DataFrame({
        "document_id": ["d1", "d2"],
        "text": ["The pump feeds a valve.", "Nothing to see."],
    }).to_csv(input_file, index=False)
    llm = fake_llm(json.dumps({"pump": {"score": 5, "justification": "Relevant environment"}}))

    wf = AssessmentWorkflow(CONFIG, flow="trl", llm=llm)
    wf.load_documents(str(input_file))
    results = wf.run()
    path = wf.save_output(fmt="csv", output_folder=str(tmp_path))

    assert list(results["d1"]) == ["pump", "valve"]
    assert results["d1"]["pump"].score == 5
    assert results["d2"] == {}
    df = pd.read_csv(path)
    assert list(df["document_id"]) == ["d1", "d2"]
    assert df.loc[0, "valve.score"] == 1


def test_economics_workflow_reads_parameters(tmp_path, failing_llm):
    input_file = tmp_path / "scales.csv"
    pd.DataFrame({
        "production_scale": [1000, 0],
        "cost_per_unit": [10, 10],
        "revenue_per_unit": [15, 15],
    }).to_csv(input_file, index=False)

    wf = AssessmentWorkflow(CONFIG, flow="economics", llm=failing_llm)
    wf.load_documents(str(input_file))
    results = wf.run()

    assert results[1]["roi"].value == "50.00%"
    assert results[2] == {}


def test_missing_text_column(tmp_path, fake_llm):
    input_file = tmp_path / "docs.csv"
    pd.DataFrame({"body": ["pump"]}).to_csv(input_file, index=False)

    wf = AssessmentWorkflow(CONFIG, flow="trl", llm=fake_llm("{}"))
    with pytest.raises(ConfigurationError):
        wf.load_documents(str(input_file))


@pytest.mark.parametrize("ids", [["a", "a"], ["a", None]])
def test_duplicate_or_empty_document_ids_are_rejected(tmp_path, fake_llm, ids):
    input_file = tmp_path / "docs.csv"
    pd.DataFrame({"document_id": ids, "text": ["pump", "valve"]}).to_csv(input_file, index=False)

    wf = AssessmentWorkflow(CONFIG, flow="trl", llm=fake_llm("{}"))
    with pytest.raises(ConfigurationError):
        wf.load_documents(str(input_file))
