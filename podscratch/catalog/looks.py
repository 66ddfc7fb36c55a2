"""Looks blocks."""

from typing import List

from ..blocks import BlockContext, BlockKind
from .common import finish_statement, sprite_only


def _tick_costume(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    ctx.resource.set_costume(str(name))
    finish_statement(ctx)


def _tick_hide(ctx: BlockContext) -> None:
    ctx.resource.hide()
    finish_statement(ctx)


def _tick_show(ctx: BlockContext) -> None:
    ctx.resource.show()
    finish_statement(ctx)


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind="costume",
        tick=_tick_costume,
        compatible_with=sprite_only,
        description="Switches the sprite to the named costume.",
        parameters=("costume",),
    ),
    BlockKind(
        kind="hide",
        tick=_tick_hide,
        compatible_with=sprite_only,
        description="Hides the sprite.",
    ),
    BlockKind(
        kind="show",
        tick=_tick_show,
        compatible_with=sprite_only,
        description="Shows the sprite.",
    ),
]
