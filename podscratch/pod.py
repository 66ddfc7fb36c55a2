"""Pods: registries of resources together with the block kinds they provide.

``Pod`` is the abstract part every pod shares (naming and looking up
resources, ticking their scripts). ``ScratchPod`` adds sprites, the stage,
pod-wide variables and the shared event timestamps its event blocks poll.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from .blocks import BlockKind, BlockRegistry
from .catalog import get_block_types
from .clock import SystemClock
from .constants import DEFAULT_BACKDROP, RESOURCE_SPRITE, RESOURCE_STAGE, STAGE_NAME
from .diagnostics import DiagnosticContext
from .errors import (
    DuplicateResourceError,
    ExecutionError,
    PodError,
    UnknownResourceError,
    UnknownResourceTypeError,
)
from .resources import ListVariable, Resource, Sprite, Stage, VariableScope
from .script import Script

logger = logging.getLogger(__name__)


class Pod:
    """Base class for pods. Subclasses provide block kinds and resource types."""

    pod_name = "pod"
    resource_types: Tuple[str, ...] = ()

    def __init__(self, options: Optional[Dict[str, Any]] = None, clock=None) -> None:
        self.options: Dict[str, Any] = dict(options or {})
        self.clock = clock or SystemClock()
        self.diagnostics = DiagnosticContext(pod_name=self.pod_name)
        self._resources: Dict[str, Resource] = {}
        self.registry = BlockRegistry(self.get_block_kinds())

    def get_block_kinds(self) -> List[BlockKind]:
        raise NotImplementedError(f"{type(self).__name__} must provide get_block_kinds()")

    def get_resource_types(self) -> Tuple[str, ...]:
        return self.resource_types

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def new_resource(self, resource_type: str, name: str) -> Resource:
        if resource_type not in self.get_resource_types():
            raise UnknownResourceTypeError(
                f"Unknown resource type '{resource_type}'",
                detail=f"{self.pod_name} provides: {', '.join(self.get_resource_types()) or '(none)'}",
            )
        if name in self._resources:
            raise DuplicateResourceError(f"A resource named '{name}' already exists")
        resource = self._create_resource(resource_type, name)
        self._resources[name] = resource
        return resource

    def _create_resource(self, resource_type: str, name: str) -> Resource:
        return Resource(self, name, resource_type)

    def get_resource_by_name(self, name: str) -> Optional[Resource]:
        return self._resources.get(name)

    def get_resources_by_type(self, resource_type: str) -> Dict[str, Resource]:
        if resource_type not in self.get_resource_types():
            raise UnknownResourceTypeError(f"Unknown resource type '{resource_type}'")
        return {
            name: resource
            for name, resource in self._resources.items()
            if resource.resource_type == resource_type
        }

    def get_all_resources(self) -> List[Resource]:
        return list(self._resources.values())

    def delete_resource_by_name(self, name: str) -> None:
        if name not in self._resources:
            raise UnknownResourceError(f"No resource named '{name}'")
        del self._resources[name]

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    def all_scripts(self) -> List[Script]:
        return [script for resource in self._resources.values() for script in resource.scripts]

    def reset_all_scripts(self) -> None:
        for resource in self._resources.values():
            resource.reset_scripts()

    def tick(self) -> None:
        """Tick every script once. A failing script is halted; the rest keep running."""
        for script in self.all_scripts():
            try:
                script.tick()
            except PodError as e:
                self._record_failure(script, e)

    def _record_failure(self, script: Script, error: PodError) -> None:
        block_index = script.failed_at
        if isinstance(error, ExecutionError) and error.block_index is not None:
            block_index = error.block_index
        block_kind = None
        if block_index is not None and 0 <= block_index < len(script.sequence):
            block_kind = script.sequence[block_index].kind
        logger.error(
            "Script %d of '%s' halted at block %s: %s",
            script.index, script.resource.name, block_index, error,
        )
        self.diagnostics.error(
            str(error),
            resource=script.resource.name,
            script=script.index,
            block=block_index,
            block_kind=block_kind,
        )


class ScratchPod(VariableScope, Pod):
    """Pod that emulates the Scratch programming model without a canvas."""

    pod_name = "scratch"
    resource_types = (RESOURCE_SPRITE, RESOURCE_STAGE)

    def __init__(self, options: Optional[Dict[str, Any]] = None, clock=None) -> None:
        self._init_variables()
        # Shared event timestamps, written by event sources and polled by event blocks
        self.green_flag_time = 0.0
        self.broadcast_times: Dict[str, float] = {}
        self.running = False
        super().__init__(options, clock)
        self.random = random.Random(self.options.get("seed"))
        self._stage = self.new_resource(RESOURCE_STAGE, STAGE_NAME)
        self._stage.load_backdrop(DEFAULT_BACKDROP).switch_backdrop(DEFAULT_BACKDROP)

    def get_block_kinds(self) -> List[BlockKind]:
        return get_block_types()

    def _create_resource(self, resource_type: str, name: str) -> Resource:
        if resource_type == RESOURCE_SPRITE:
            return Sprite(self, name)
        return Stage(self, name)

    def new_sprite(self, name: str) -> Sprite:
        return self.new_resource(RESOURCE_SPRITE, name)  # type: ignore[return-value]

    def sprite(self, name: str) -> Sprite:
        result = self.get_resource_by_name(name)
        if result is None or result.resource_type != RESOURCE_SPRITE:
            raise UnknownResourceError(f"No sprite with the name '{name}' found.")
        return result  # type: ignore[return-value]

    def get_stage(self) -> Stage:
        return self._stage

    # ------------------------------------------------------------------
    # Variables: sprite-local names shadow pod-wide ones
    # ------------------------------------------------------------------

    def resolve_scope(self, resource: Resource, name: str, is_list: bool = False) -> VariableScope:
        local = resource.has_list_variable(name) if is_list else resource.has_variable(name)
        if resource.resource_type == RESOURCE_SPRITE and local:
            return resource
        return self

    def lookup_list(self, resource: Resource, name: str) -> ListVariable:
        return self.resolve_scope(resource, name, is_list=True).get_list_variable(name)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def click_green_flag(self) -> None:
        self.running = True
        self.green_flag_time = self.clock.now()
        self.reset_all_scripts()

    def stop(self) -> None:
        self.running = False
        self.green_flag_time = 0.0
        self.reset_all_scripts()
        self.stop_all_sounds()

    def broadcast(self, message: Any) -> None:
        self.broadcast_times[str(message)] = self.clock.now()

    def last_broadcast_time(self, message: Any) -> Optional[float]:
        return self.broadcast_times.get(str(message))

    def stop_all_sounds(self) -> None:
        for resource in self.get_all_resources():
            if isinstance(resource, (Sprite, Stage)):
                resource.stop_all_sounds()

    def tick(self) -> None:
        super().tick()
        self.running = any(script.ip != 0 for script in self.all_scripts())
