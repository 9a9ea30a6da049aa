"""Auto-detect the format of a route table source."""

import json
import re
from pathlib import Path

PYTHON_REFERENCE = re.compile(r"^[A-Za-z_][\w.]*:[A-Za-z_]\w*$")


def detect_format(source: str) -> str:
    """Detect the format of a route table source.

    Returns: 'yaml', 'json', or 'python' (a ``module:attribute`` reference).
    """
    path = Path(source)
    if not path.exists():
        if PYTHON_REFERENCE.match(source):
            return "python"
        raise FileNotFoundError(source)

    if path.suffix.lower() == ".json":
        return "json"
    if path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"

    text = path.read_text(encoding="utf-8")
    try:
        json.loads(text)
        return "json"
    except (json.JSONDecodeError, ValueError):
        pass

    return "yaml"
