"""Block kinds, block instances and the registry that ties them together.

A ``BlockKind`` describes a behaviour contributed by a pod: how one unit of
the block runs (``tick``), how its per-instance state is cleared (``reset``),
whether it reports a value and whether it may start a script. A ``Block`` is
one occurrence of a kind inside one script and owns the state bag that the
kind's behaviour may stash between ticks.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional, Tuple

from .errors import AssemblyError, IncompatibleBlockError, UnknownBlockKindError

if TYPE_CHECKING:
    from .pod import Pod
    from .resources import Resource
    from .script import Script


TickFn = Callable[["BlockContext"], Any]
ResetFn = Callable[["BlockContext"], None]
CompatibleFn = Callable[["Resource"], bool]


@dataclass(frozen=True)
class BlockKind:
    """A registered block behaviour."""
    kind: str
    tick: TickFn
    returns_value: bool = False
    is_event_block: bool = False
    compatible_with: Optional[CompatibleFn] = None
    reset: Optional[ResetFn] = None
    description: str = ""
    parameters: Tuple[str, ...] = ()

    def is_compatible(self, resource: "Resource") -> bool:
        if self.compatible_with is None:
            return True
        return bool(self.compatible_with(resource))


class BlockContext:
    """What a block kind sees when it runs."""

    def __init__(self, block: "Block") -> None:
        self.block = block

    @property
    def script(self) -> "Script":
        return self.block.script

    @property
    def resource(self) -> "Resource":
        return self.block.script.resource

    @property
    def pod(self) -> "Pod":
        return self.block.script.resource.pod

    @property
    def state(self) -> Dict[str, Any]:
        return self.block.state

    def now(self) -> float:
        return self.pod.clock.now()


class Block:
    """One block in a script's sequence."""

    def __init__(self, block_kind: BlockKind, script: "Script", value: Any = None) -> None:
        self.block_kind = block_kind
        self.script = script
        # Assembly-time payload (the constant of a ``c`` block, the callable
        # of an ``f`` block). Never touched by reset.
        self.value = value
        self.state: Dict[str, Any] = {}
        self.context = BlockContext(self)

    @property
    def kind(self) -> str:
        return self.block_kind.kind

    @property
    def returns_value(self) -> bool:
        return self.block_kind.returns_value

    @property
    def is_event_block(self) -> bool:
        return self.block_kind.is_event_block

    def tick(self) -> Any:
        return self.block_kind.tick(self.context)

    def reset(self) -> None:
        if self.block_kind.reset is not None:
            self.block_kind.reset(self.context)
        else:
            self.state.clear()

    def __repr__(self) -> str:
        if self.value is not None:
            return f"<Block {self.kind} {self.value!r}>"
        return f"<Block {self.kind}>"


class BlockRegistry:
    """The block kinds a pod provides, indexed by name."""

    def __init__(self, kinds: Optional[Iterable[BlockKind]] = None) -> None:
        self._kinds: Dict[str, BlockKind] = {}
        if kinds is not None:
            self.register_all(kinds)

    def register(self, block_kind: BlockKind) -> None:
        if block_kind.kind in self._kinds:
            raise AssemblyError(f"Block kind '{block_kind.kind}' is already registered")
        self._kinds[block_kind.kind] = block_kind

    def register_all(self, kinds: Iterable[BlockKind]) -> None:
        for block_kind in kinds:
            self.register(block_kind)

    def get(self, kind: str) -> BlockKind:
        try:
            return self._kinds[kind]
        except KeyError:
            raise UnknownBlockKindError(f"Unknown block kind '{kind}'") from None

    def kinds(self) -> List[BlockKind]:
        return list(self._kinds.values())

    def __contains__(self, kind: object) -> bool:
        return kind in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)

    def new_block(self, kind: str, script: "Script", value: Any = None) -> Block:
        """Create a block of ``kind`` for ``script``, checking it fits the script's resource."""
        block_kind = self.get(kind)
        resource = script.resource
        if not block_kind.is_compatible(resource):
            raise IncompatibleBlockError(
                f"Block '{kind}' is not compatible with {resource.resource_type} '{resource.name}'"
            )
        return Block(block_kind, script, value)
