import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
from tqdm import tqdm

import aitrl
from aitrl import utils
from aitrl.clock import TimestampFormatter
from aitrl.prj_exception import ConfigurationError
from aitrl.prj_logger import get_logs
from aitrl.components.clients import get_llm
from aitrl.components.structured_assessment import run_batch_assessment
from aitrl.components.trl_breakdown import get_trl_breakdown_runnable
from aitrl.components.grant_details import get_grant_details_runnable
from aitrl.components.roadmap_phases import get_roadmap_runnable
from aitrl.components.unit_economics import EconomicsParameters, get_unit_economics_runnable

FLOWS = {
    "trl": (get_trl_breakdown_runnable, []),
    "grants": (get_grant_details_runnable, []),
    "roadmap": (get_roadmap_runnable, ["production_scale", "cost_per_unit", "revenue_per_unit"]),
    "economics": (get_unit_economics_runnable, ["production_scale", "cost_per_unit", "revenue_per_unit"]),
}


class AssessmentWorkflow:
    """
    Batch runner for the assessment flows.

    Loads one document per row from a CSV/Excel file (or a single text file),
    runs the selected flow on every row concurrently and writes the flattened
    results to a timestamped run folder.
    """
    LOGGER_NAME = f"{aitrl.BASE_LOGGERNAME}.workflow"

    def __init__(self, config: dict, flow: str = "trl", llm=None):
        """
        Args:
            config: Dictionary containing configuration parameters
            flow: One of FLOWS
            llm: Optional chat model; built from the config when omitted
        """
        if flow not in FLOWS:
            raise ConfigurationError(f"Unknown flow {flow!r}; expected one of {sorted(FLOWS)}")
        self.config = config
        self.flow = flow
        self.text_col = config.get("TEXT_COLUMN", "text")
        self.id_col = config.get("ID_COLUMN", "document_id")
        self.max_concurrent = config.get("MAX_CONCURRENT", 3)
        self.llm = llm if llm is not None else get_llm(config)

        factory, self.context_cols = FLOWS[flow]
        self.runnable = factory(
            self.llm,
            formatter=TimestampFormatter.from_config(config),
            timeout=config.get("REQUEST_TIMEOUT")
        )

        # Data containers
        self.documents_df = None
        self.results = None
        self.results_df = None
        self.output_data_folder = None

        self.logger = logging.getLogger(self.LOGGER_NAME)

    @get_logs(LOGGER_NAME)
    def load_documents(self, input_file: str) -> pd.DataFrame:
        if Path(input_file).suffix.lower() in (".txt", ".md"):
            text = Path(input_file).read_text(encoding="utf-8")
            df = pd.DataFrame({self.id_col: [Path(input_file).stem], self.text_col: [text]})
        else:
            df = utils.load_input_data(input_file)
            if self.id_col not in df.columns:
                df[self.id_col] = range(1, len(df) + 1)
            if self.text_col not in df.columns and self.flow != "economics":
                raise ConfigurationError(f"Missing text column {self.text_col!r} in {input_file}")
            # results are keyed by document id
            ids = df[self.id_col]
            if ids.isna().any() or ids.duplicated().any():
                duplicates = sorted(set(ids[ids.duplicated()].astype(str)))
                raise ConfigurationError(
                    f"Column {self.id_col!r} in {input_file} must hold unique, non-empty ids; duplicates: {duplicates}"
                )
        self.documents_df = df
        self.logger.info(f"Loaded {len(df)} documents from {input_file}")
        return df

    def _document_text(self, item: Dict[str, Any]) -> str:
        if self.flow == "economics":
            params = EconomicsParameters.from_context(item)
            return params.describe() if params else ""
        text = item.get(self.text_col)
        return text if isinstance(text, str) else ""

    def _context(self, item: Dict[str, Any]) -> Dict[str, Any]:
        # pandas reports empty cells as NaN
        return {col: item.get(col) for col in self.context_cols if col in item and pd.notna(item.get(col))}

    @get_logs(LOGGER_NAME)
    def run(self) -> Dict[Any, Dict[str, Any]]:
        if self.documents_df is None:
            raise ConfigurationError("load_documents must be called before run")
        columns = [c for c in [self.id_col, self.text_col, *self.context_cols] if c in self.documents_df.columns]
        items = utils.df_to_prompt_items(self.documents_df, columns)
        documents = {}
        contexts = {}
        for item in tqdm(items, desc=f"Preparing {self.flow}"):
            doc_id = item[self.id_col]
            documents[doc_id] = self._document_text(item)
            contexts[doc_id] = self._context(item)

        self.logger.info(f"Running {self.flow} assessment on {len(documents)} documents...")
        self.results = asyncio.run(
            run_batch_assessment(self.runnable, documents, contexts, max_concurrent=self.max_concurrent)
        )
        self.logger.info("Assessment results fetched")
        return self.results

    @get_logs(LOGGER_NAME)
    def save_output(self, fmt: str = "xlsx", output_folder: Optional[str] = None) -> Path:
        if self.results is None:
            raise ConfigurationError("run must be called before save_output")
        if output_folder is None:
            output_folder = utils.make_output_directory(self.config["FILE_LOCATIONS"], "OUTPUT_FOLDER")
        self.output_data_folder = output_folder
        self.results_df = utils.results_to_df(self.results, id_col=self.id_col)
        path = utils.to_output_file(self.results_df, output_folder, f"{self.flow}_results", fmt)
        self.logger.info(f"Results written to {path}")
        return path
