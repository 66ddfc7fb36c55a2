"""Blocks the interpreter needs to lay out any script: constants and bodies."""

from typing import Any, List

from ..blocks import BlockContext, BlockKind
from ..constants import BEGIN, CONSTANT, END, FUNCTION


def _tick_constant(ctx: BlockContext) -> Any:
    return ctx.block.value


def _tick_function(ctx: BlockContext) -> Any:
    return ctx.block.value()


def _tick_begin(ctx: BlockContext) -> None:
    ctx.script.next_block()


def _tick_end(ctx: BlockContext) -> None:
    # Jump back to the header of the loop or conditional that owns this body
    ctx.script.pop_ip()


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind=CONSTANT,
        tick=_tick_constant,
        returns_value=True,
        reset=lambda ctx: None,
        description="Reports a constant value fixed when the script was assembled.",
        parameters=("value",),
    ),
    BlockKind(
        kind=FUNCTION,
        tick=_tick_function,
        returns_value=True,
        reset=lambda ctx: None,
        description="Reports the result of calling a Python function each time it is evaluated.",
        parameters=("function",),
    ),
    BlockKind(
        kind=BEGIN,
        tick=_tick_begin,
        description="Opens the body of the loop or conditional before it.",
    ),
    BlockKind(
        kind=END,
        tick=_tick_end,
        description="Closes a body opened by 'begin' and returns to the block that owns it.",
    ),
]
