import json
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml


def from_json_or_yaml(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a dict from a JSON or YAML file, chosen by extension.

    Args:
    filepath (str | Path): Path to a .json, .yaml or .yml file.

    Returns:
    data (dict): The parsed content; an empty file gives an empty dict.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    extension = os.path.splitext(path.name)[1].lower()
    with open(path, "r", encoding="utf-8") as f:
        if extension == ".json":
            data = json.load(f)
        elif extension in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported file extension '{extension}'. Use .json, .yaml or .yml.")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data
