"""Motion blocks. Each one moves its sprite and then yields the frame."""

import logging
from typing import List

from ..blocks import BlockContext, BlockKind
from ..utils import to_number
from .common import finish_statement, sprite_only

logger = logging.getLogger(__name__)


def _tick_change_x(ctx: BlockContext) -> None:
    dx = to_number(ctx.script.next_argument())
    ctx.resource.translate(dx, 0)
    finish_statement(ctx, yield_frame=True)


def _tick_change_y(ctx: BlockContext) -> None:
    dy = to_number(ctx.script.next_argument())
    ctx.resource.translate(0, dy)
    finish_statement(ctx, yield_frame=True)


def _tick_move(ctx: BlockContext) -> None:
    steps = to_number(ctx.script.next_argument())
    ctx.resource.move_steps(steps)
    logger.debug("move %s to (%s, %s)", steps, ctx.resource.x, ctx.resource.y)
    finish_statement(ctx, yield_frame=True)


def _tick_point_dir(ctx: BlockContext) -> None:
    degrees = to_number(ctx.script.next_argument())
    ctx.resource.set_direction(degrees)
    finish_statement(ctx, yield_frame=True)


def _tick_go_xy(ctx: BlockContext) -> None:
    x = to_number(ctx.script.next_argument())
    y = to_number(ctx.script.next_argument())
    ctx.resource.go_xy(x, y)
    logger.debug("go_xy %s %s", x, y)
    finish_statement(ctx, yield_frame=True)


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind="change_x",
        tick=_tick_change_x,
        compatible_with=sprite_only,
        description="Changes the sprite's x position.",
        parameters=("dx",),
    ),
    BlockKind(
        kind="change_y",
        tick=_tick_change_y,
        compatible_with=sprite_only,
        description="Changes the sprite's y position.",
        parameters=("dy",),
    ),
    BlockKind(
        kind="move",
        tick=_tick_move,
        compatible_with=sprite_only,
        description="Moves the sprite the given number of steps in the direction it points.",
        parameters=("steps",),
    ),
    BlockKind(
        kind="point_dir",
        tick=_tick_point_dir,
        compatible_with=sprite_only,
        description="Points the sprite in a direction: 0 is up, 90 is right.",
        parameters=("degrees",),
    ),
    BlockKind(
        kind="go_xy",
        tick=_tick_go_xy,
        compatible_with=sprite_only,
        description="Moves the sprite to the given position.",
        parameters=("x", "y"),
    ),
]
