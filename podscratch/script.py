"""The script interpreter.

A script is a flat, append-only sequence of blocks bound to one resource. It is
driven from outside: every frame the driver calls ``tick()``, which resumes at
the persisted instruction pointer and runs blocks until one of them asks to
yield or the sequence ends. Nothing is kept on the Python call stack between
ticks; loops and conditionals keep their suspension state in their own block
state and in the script's control stack of saved instruction pointers.

Arguments are laid out as a prefix sequence right after the block consuming
them, so ``go_xy, c(1), random_from_to, c(2), c(3)`` reads
``go_xy(1, random_from_to(2, 3))``.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from .blocks import Block
from .constants import BEGIN, CONSTANT, END, FUNCTION
from .errors import AssemblyError, BlockExecutionError, ExecutionError, PodError, ScriptStructureError

if TYPE_CHECKING:
    from .pod import Pod
    from .resources import Resource

logger = logging.getLogger(__name__)


class Script:
    """An ordered sequence of blocks with its own execution state."""

    def __init__(self, resource: "Resource", index: int = 0) -> None:
        self.resource = resource
        self.index = index
        self.sequence: List[Block] = []
        self.ip = 0
        self.control_stack: List[int] = []
        self.yield_requested = False
        self.halted = False
        # Index of the block that was running when the script halted
        self.failed_at: Optional[int] = None
        self._warned_not_event = False

    @property
    def pod(self) -> "Pod":
        return self.resource.pod

    def __len__(self) -> int:
        return len(self.sequence)

    def __repr__(self) -> str:
        return f"<Script {self.resource.name}[{self.index}] ip={self.ip} blocks={len(self.sequence)}>"

    def append_block(self, block: Block) -> None:
        self.sequence.append(block)

    # ------------------------------------------------------------------
    # Driver interface
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Run this script for one frame."""
        if self.halted or not self.sequence:
            return
        if not self.sequence[0].is_event_block:
            self._warn_not_event()
            return

        self.yield_requested = False
        current = 0
        try:
            self._check_event()
            while not self.yield_requested and self.ip < len(self.sequence):
                current = self.ip
                block = self.sequence[current]
                if block.returns_value:
                    raise ScriptStructureError(
                        f"Value block '{block.kind}' cannot be used as a statement",
                        block_index=self.ip,
                    )
                logger.debug("%s[%d] ip=%d %s", self.resource.name, self.index, self.ip, block.kind)
                block.tick()
            if self.ip >= len(self.sequence):
                self.reset()
        except PodError as e:
            self.halted = True
            self.failed_at = current
            if isinstance(e, ExecutionError) and e.block_index is None:
                e.block_index = current
            raise
        except Exception as e:
            self.halted = True
            self.failed_at = current
            raise BlockExecutionError(
                f"Block '{self.sequence[current].kind}' failed",
                detail=f"{type(e).__name__}: {e}",
                block_index=current,
            ) from e

    def reset(self) -> None:
        """Return to the first block and discard all suspension state."""
        self.ip = 0
        self.control_stack.clear()
        self.yield_requested = False
        self.halted = False
        self.failed_at = None
        for block in self.sequence:
            block.reset()

    def _check_event(self) -> None:
        # The event block is re-evaluated every tick so it can restart the
        # script from the top even while the body is suspended elsewhere.
        saved_ip = self.ip
        self.ip = 0
        self.sequence[0].tick()
        if self.ip == 0:
            self.ip = saved_ip
        else:
            activated_ip = self.ip
            logger.debug("%s[%d] activated by %s", self.resource.name, self.index, self.sequence[0].kind)
            self.reset()
            self.ip = activated_ip
        self.yield_requested = False

    def _warn_not_event(self) -> None:
        if self._warned_not_event:
            return
        self._warned_not_event = True
        first = self.sequence[0].kind
        logger.warning(
            "Script %d of '%s' starts with '%s', which is not an event block; it will never run",
            self.index, self.resource.name, first,
        )
        self.pod.diagnostics.warning(
            "Script does not start with an event block and will never run",
            resource=self.resource.name,
            script=self.index,
            block=0,
            block_kind=first,
        )

    # ------------------------------------------------------------------
    # Primitives used by block kinds
    # ------------------------------------------------------------------

    def next_block(self) -> None:
        self.ip += 1

    def push_ip(self, ip: Optional[int] = None) -> None:
        """Remember a return address, the current IP unless ``ip`` is given."""
        self.control_stack.append(self.ip if ip is None else ip)

    def pop_ip(self) -> None:
        if not self.control_stack:
            raise ScriptStructureError(
                "'end' block has no matching loop or conditional",
                block_index=self.ip,
            )
        self.ip = self.control_stack.pop()

    def peek_block(self) -> Optional[Block]:
        """The block the IP points at, or None past the end of the script."""
        if self.ip < len(self.sequence):
            return self.sequence[self.ip]
        return None

    def skip_begin_end_block(self) -> None:
        """Move the IP from a ``begin`` block to just after its matching ``end``."""
        start = self.ip
        if start >= len(self.sequence) or self.sequence[start].kind != BEGIN:
            raise ScriptStructureError("Expected a 'begin' block", block_index=start)
        depth = 0
        while self.ip < len(self.sequence):
            kind = self.sequence[self.ip].kind
            if kind == BEGIN:
                depth += 1
            elif kind == END:
                depth -= 1
                if depth == 0:
                    self.ip += 1
                    return
            self.ip += 1
        raise ScriptStructureError("'begin' block has no matching 'end'", block_index=start)

    def next_argument(self) -> Any:
        """Evaluate the value block after the IP and leave the IP on it."""
        consumer = self.ip
        self.ip += 1
        if self.ip >= len(self.sequence):
            raise ScriptStructureError(
                f"Block '{self.sequence[consumer].kind}' is missing an argument",
                block_index=consumer,
            )
        block = self.sequence[self.ip]
        if not block.returns_value:
            raise ScriptStructureError(
                f"Block '{block.kind}' does not return a value and cannot be used as an argument",
                block_index=self.ip,
            )
        return block.tick()


class ScriptBuilder:
    """Appends blocks to a script.

    ``append`` returns the builder so scripts read top to bottom::

        sprite.new_script() \\
            .append("when_green_flag_clicked") \\
            .append("repeat", 3).begin() \\
                .append("move", 10) \\
            .end()
    """

    def __init__(self, script: Script) -> None:
        self.script = script

    def _add(self, kind: str, value: Any = None) -> "ScriptBuilder":
        block = self.script.pod.registry.new_block(kind, self.script, value)
        self.script.append_block(block)
        return self

    def append(self, kind: str, *constants: Any) -> "ScriptBuilder":
        """Append a block of ``kind`` followed by one constant block per value."""
        self._add(kind)
        for value in constants:
            self.c(value)
        return self

    def c(self, value: Any) -> "ScriptBuilder":
        return self._add(CONSTANT, value)

    def f(self, function: Callable[[], Any]) -> "ScriptBuilder":
        if not callable(function):
            raise AssemblyError("f() needs a callable", detail=repr(function))
        return self._add(FUNCTION, function)

    def begin(self) -> "ScriptBuilder":
        return self._add(BEGIN)

    def end(self) -> "ScriptBuilder":
        return self._add(END)
