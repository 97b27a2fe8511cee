import re
import ast
import json
from typing import Any, Dict

FENCE_PAT = re.compile(r"```(?:json|JSON|python)?\s*(.*?)```", re.DOTALL)


def _first_object_block(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return text
    return text[start:end + 1]


def parse_llm_json_like(raw: str) -> Dict[str, Any]:
    """
    Robustly parses JSON-like object strings produced by LLMs.
    Handles:
      - Markdown code fences and chatter around the object
      - Escaped quotes
      - Python dict literals
      - Mixed quoting

    Raises ValueError if nothing resembling a JSON object can be recovered.
    """

    if not raw or not isinstance(raw, str):
        raise ValueError("Input must be a non-empty string")

    text = raw.strip()

    # ----------------------------------------------------
    # Step 1: Unwrap fences, quoting and surrounding prose
    # ----------------------------------------------------
    fenced = FENCE_PAT.search(text)
    if fenced:
        text = fenced.group(1).strip()

    if (text.startswith("'") and text.endswith("'")) or \
       (text.startswith('"') and text.endswith('"')):
        text = text[1:-1]
        text = text.replace("\\'", "'").replace('\\"', '"')

    text = _first_object_block(text)

    # ----------------------------------------------------
    # Step 2: Attempt strict JSON
    # ----------------------------------------------------
    try:
        result = json.loads(text)
    except json.JSONDecodeError:
        pass
    else:
        if isinstance(result, dict):
            return result
        raise ValueError(f"Parsed value is not an object: {type(result).__name__}")

    # ----------------------------------------------------
    # Step 3: Attempt Python literal parsing (SAFE)
    # ----------------------------------------------------
    try:
        result = ast.literal_eval(text)
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError):
        result = None
    if isinstance(result, dict):
        return result

    # ----------------------------------------------------
    # Step 4: Last-resort fixups, then JSON
    # ----------------------------------------------------
    repaired = text
    repaired = re.sub(r"\bTrue\b", "true", repaired)
    repaired = re.sub(r"\bFalse\b", "false", repaired)
    repaired = re.sub(r"\bNone\b", "null", repaired)
    repaired = re.sub(r"(?<!\\)'", '"', repaired)
    # trailing commas before a closing brace/bracket
    repaired = re.sub(r",\s*([}\]])", r"\1", repaired)

    try:
        result = json.loads(repaired)
    except json.JSONDecodeError as e:
        raise ValueError(f"Unable to parse model output as an object: {e}") from e
    if not isinstance(result, dict):
        raise ValueError(f"Parsed value is not an object: {type(result).__name__}")
    return result
