"""Environment options and the JSON file they can be loaded from.

An options file looks like::

    {"fps": 30, "pod": {"scratch": {"seed": 7}}}

``pod`` maps a pod name to the options handed to that pod when the
environment creates it.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict

from .constants import DEFAULT_FPS
from .errors import ConfigError
from .utils import load_json_file


@dataclass
class Options:
    fps: float = DEFAULT_FPS
    pod: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_fps(self.fps)
        if not isinstance(self.pod, dict):
            raise ConfigError("'pod' options must be an object keyed by pod name")

    def pod_options(self, name: str) -> Dict[str, Any]:
        return dict(self.pod.get(name) or {})


def validate_fps(fps: Any) -> float:
    if isinstance(fps, bool) or not isinstance(fps, (int, float)):
        raise ConfigError("fps must be a number", detail=f"got {fps!r}")
    if not math.isfinite(fps) or fps <= 0:
        raise ConfigError("fps must be a positive number", detail=f"got {fps!r}")
    return fps


def options_from_dict(data: Dict[str, Any]) -> Options:
    if not isinstance(data, dict):
        raise ConfigError("Options must be a JSON object")
    unknown = set(data) - {"fps", "pod"}
    if unknown:
        raise ConfigError("Unknown option(s)", detail=", ".join(sorted(unknown)))
    return Options(fps=data.get("fps", DEFAULT_FPS), pod=data.get("pod", {}))


def load_options(path: str) -> Options:
    """Read options from ``path``. A missing file gives the defaults."""
    try:
        data = load_json_file(path, {})
    except ValueError as e:
        raise ConfigError(f"Could not parse options file: {path}", detail=str(e)) from e
    return options_from_dict(data)
