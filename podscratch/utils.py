import json
import math
import os
from typing import Any

from .constants import FALSE, TRUE


def ensure_dir(path: str) -> None:
    if path:
        os.makedirs(path, exist_ok=True)


def write_json_file(path: str, data: Any) -> None:
    ensure_dir(os.path.dirname(path))
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=4)


def load_json_file(path: str, default: Any) -> Any:
    if not os.path.exists(path):
        return default
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def truthy(value: Any) -> bool:
    """Scratch truthiness: only the value ``"true"`` counts as true."""
    if isinstance(value, bool):
        return value
    return str(value) == TRUE


def to_bool_string(value: bool) -> str:
    return TRUE if value else FALSE


def to_number(value: Any) -> float:
    """Convert a block value to a number, treating anything unparsable as 0."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0.0
    if math.isnan(number):
        return 0.0
    return number


def to_text(value: Any) -> str:
    """Render a block value the way it is compared and joined."""
    if isinstance(value, bool):
        return to_bool_string(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def plain_number(value: float) -> Any:
    """Return ``value`` as an int when it has no fractional part."""
    if math.isfinite(value) and float(value).is_integer():
        return int(value)
    return value
