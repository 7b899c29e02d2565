import json
from pathlib import Path
from typing import Any


class ElementDefinitionError(ValueError):
    """Raised when an element definition file cannot be used."""


def write_json_file(content: list[Any] | dict[str, Any], filepath: str) -> None:
    """Write JSON content to a file.

    Args:
        content: JSON-serializable list or dict
        filepath: Output file path

    Raises:
        OSError: If file cannot be written
    """
    try:
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(content, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise OSError(f"Failed to write to file {filepath}: {str(e)}") from e


def read_json_file(filepath: str) -> Any:
    """Read JSON content from a file and return parsed data.

    Args:
        filepath: Path to JSON file.

    Returns:
        Parsed JSON object (list/dict) or raises OSError on failure.
    """
    p = Path(filepath)
    if not p.exists():
        raise FileNotFoundError(f"JSON file not found: {filepath}")
    try:
        with p.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise OSError(f"Failed to read JSON from {filepath}: {e}") from e


def load_element_definitions(filepath: str) -> dict[str, Any]:
    """Load a visualisation file describing a dataset and its elements.

    The file holds ``{"dataset": {"id": ..., "cut": {...}, "hierarchies":
    {...}}, "elements": [{...}, ...]}``. A bare list is read as the
    element list of an anonymous dataset.

    Raises:
        ElementDefinitionError: If the structure is not usable.
    """
    try:
        data = read_json_file(filepath)
    except OSError as e:
        raise ElementDefinitionError(str(e)) from e

    if isinstance(data, list):
        data = {"dataset": {}, "elements": data}
    if not isinstance(data, dict):
        raise ElementDefinitionError("Expected a JSON object or array")

    elements = data.get("elements")
    if not isinstance(elements, list):
        raise ElementDefinitionError("'elements' must be a list")
    for i, el in enumerate(elements):
        if not isinstance(el, dict):
            raise ElementDefinitionError(f"Element at index {i} is not an object")
        if not isinstance(el.get("dimensions", []), list):
            raise ElementDefinitionError(f"Element at index {i}: 'dimensions' must be a list")

    dataset = data.get("dataset") or {}
    if not isinstance(dataset, dict):
        raise ElementDefinitionError("'dataset' must be an object")
    return {"dataset": dataset, "elements": elements}
