"""Helpers shared by the block catalog modules."""

from typing import Any

from ..blocks import BlockContext
from ..constants import RESOURCE_SPRITE, RESOURCE_STAGE, LAST_SEEN


def sprite_only(resource: Any) -> bool:
    return resource.resource_type == RESOURCE_SPRITE


def sprite_or_stage(resource: Any) -> bool:
    return resource.resource_type in (RESOURCE_SPRITE, RESOURCE_STAGE)


def keep_last_seen(ctx: BlockContext) -> None:
    """Reset for event blocks: forget everything but the last event seen."""
    last_seen = ctx.state.get(LAST_SEEN)
    ctx.state.clear()
    if last_seen is not None:
        ctx.state[LAST_SEEN] = last_seen


def finish_statement(ctx: BlockContext, yield_frame: bool = False) -> None:
    """Step past a statement whose arguments have been read."""
    ctx.script.next_block()
    if yield_frame:
        ctx.script.yield_requested = True
