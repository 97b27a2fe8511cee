import os
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import flatdict
import pandas as pd
import yaml

import aitrl
from aitrl.prj_exception import ConfigurationError
from aitrl.prj_logger import get_logs


def load_yaml(file_path):
    """
    Load a YAML file and return the contents.

    Parameters:
    file_path (str): The path to the YAML file.

    Returns:
    dict: The contents of the YAML file as a dictionary, or None if it cannot be parsed.
    """
    with open(file_path, 'r') as file:
        try:
            return yaml.safe_load(file)
        except yaml.YAMLError as e:
            print(f"Error loading YAML file: {e}")
            return None


def load_config(config_file='config.yaml'):
    if not os.path.exists(config_file):
        raise ConfigurationError(f"Config file not found: {config_file}")
    config = load_yaml(config_file)
    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {config_file} did not contain a mapping")
    return config


def get_current_date_time():
    return datetime.now().strftime("%Y-%m-%d-%H-%M-%S")


def make_output_directory(file_locations, output_folder_name='OUTPUT_FOLDER'):
    run_name = f"run-{get_current_date_time()}"
    output_directory = f"{file_locations[output_folder_name]}/{run_name}"
    Path(output_directory).mkdir(parents=True, exist_ok=True)
    return output_directory


def load_input_data(input_file: str) -> pd.DataFrame:
    """
    Load CSV or Excel file into a pandas DataFrame.

    Args:
        input_file: Path to CSV or Excel file

    Returns:
        DataFrame with loaded data

    Raises:
        ConfigurationError: If file extension is not supported or file path is invalid
    """
    if not input_file:
        raise ConfigurationError("input_file is not provided")

    _, ext = os.path.splitext(input_file)
    ext = ext.lower()

    if ext == ".csv":
        return pd.read_csv(input_file)
    if ext in (".xlsx", ".xls"):
        return pd.read_excel(input_file)
    raise ConfigurationError(f"Unsupported input file extension: {ext}")


def df_to_prompt_items(
    df: pd.DataFrame,
    columns: Optional[Sequence[str]] = None
) -> List[Dict[str, Any]]:
    """
    Convert each row of DataFrame into a dict, one per document.

    Args:
        df: Input DataFrame
        columns: List of column names to extract. If None, uses all columns.

    Raises:
        ConfigurationError: If any specified columns are missing from the DataFrame
    """
    if columns is None:
        columns = df.columns.tolist()

    missing_cols = [c for c in columns if c not in df.columns]
    if missing_cols:
        raise ConfigurationError(f"Missing columns: {missing_cols}")

    records = df[columns].to_dict(orient="records")
    return [{str(k): v for k, v in record.items()} for record in records]


@get_logs(aitrl.BASE_LOGGERNAME)
def results_to_df(results: Mapping[Any, Mapping[str, Any]], id_col: str = 'document_id') -> pd.DataFrame:
    """Flatten a mapping of document id -> result mapping into one row per document.

    Nested record fields become dotted columns, e.g. `sensor.score`.
    """
    rows = []
    for doc_id, result in results.items():
        flat = flatdict.FlatDict(_to_plain(result), delimiter='.')
        row = {id_col: doc_id}
        row.update(dict(flat))
        rows.append(row)
    return pd.DataFrame(rows)


def _to_plain(value):
    if hasattr(value, 'model_dump'):
        return value.model_dump()
    if isinstance(value, Mapping):
        return {str(k): _to_plain(v) for k, v in value.items()}
    return value


@get_logs(aitrl.BASE_LOGGERNAME)
def to_output_file(df: pd.DataFrame, output_folder: Union[str, Path], df_name: str, fmt: str = 'xlsx') -> Path:
    path = Path(output_folder) / f"{df_name}.{fmt}"
    if fmt == 'xlsx':
        df.to_excel(path, index=False)
    elif fmt == 'csv':
        df.to_csv(path, index=False)
    else:
        raise ConfigurationError(f"Unsupported output format: {fmt}")
    return path
