"""The environment: the pods in use and the fixed-rate loop that drives them."""

import logging
import math
import time
from typing import Any, Callable, Dict, List, Optional, Type, Union

from .config import Options, options_from_dict, validate_fps
from .diagnostics import DiagnosticCollector
from .errors import AssemblyError, UnknownPodError
from .pod import Pod, ScratchPod

logger = logging.getLogger(__name__)


POD_CLASSES: Dict[str, Type[Pod]] = {}


def register_pod_class(name: str, pod_class: Type[Pod]) -> None:
    if name in POD_CLASSES:
        raise AssemblyError(f"A pod named '{name}' is already registered")
    POD_CLASSES[name] = pod_class


register_pod_class(ScratchPod.pod_name, ScratchPod)


class Environment:
    """Owns one instance of each pod that has been asked for and ticks them all.

    ``sleep`` and ``timer`` are the pacing functions used by ``run``; tests
    replace them to run frames without waiting.
    """

    def __init__(
        self,
        options: Union[Options, Dict[str, Any], None] = None,
        clock=None,
        sleep: Callable[[float], None] = time.sleep,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if options is None:
            options = Options()
        elif isinstance(options, dict):
            options = options_from_dict(options)
        self.options = options
        self.clock = clock
        self.sleep = sleep
        self.timer = timer
        self._pods: Dict[str, Pod] = {}

    @property
    def fps(self) -> float:
        return self.options.fps

    def pod(self, name: str) -> Pod:
        """Return this environment's instance of the named pod, creating it on first use."""
        if name not in self._pods:
            if name not in POD_CLASSES:
                available = ", ".join(sorted(POD_CLASSES)) or "(none)"
                raise UnknownPodError(f"Unknown pod '{name}'", detail=f"available: {available}")
            logger.debug("Creating pod '%s'", name)
            self._pods[name] = POD_CLASSES[name](self.options.pod_options(name), clock=self.clock)
        return self._pods[name]

    def pods(self) -> List[Pod]:
        return list(self._pods.values())

    def tick(self) -> None:
        for pod in self._pods.values():
            pod.tick()

    def reset_all_scripts(self) -> None:
        for pod in self._pods.values():
            pod.reset_all_scripts()

    def run(self, ticks: Optional[int] = None, duration: Optional[float] = None, fps: Optional[float] = None) -> int:
        """Tick at a fixed rate and return the number of frames run.

        Stops after ``ticks`` frames or ``duration`` seconds worth of frames,
        whichever comes first. With neither it runs until interrupted.
        """
        fps = validate_fps(fps if fps is not None else self.fps)
        limit = ticks
        if duration is not None:
            frames = max(0, math.ceil(duration * fps))
            limit = frames if limit is None else min(limit, frames)

        period = 1.0 / fps
        start = self.timer()
        count = 0
        logger.info("Running at %s fps (%s frames)", fps, "unlimited" if limit is None else limit)
        while limit is None or count < limit:
            self.tick()
            count += 1
            delay = start + count * period - self.timer()
            if delay > 0:
                self.sleep(delay)
        return count

    def collect_diagnostics(self) -> DiagnosticCollector:
        collector = DiagnosticCollector()
        for pod in self._pods.values():
            collector.add_context_diagnostics(pod.diagnostics)
        return collector
