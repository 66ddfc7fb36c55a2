"""Sound blocks. Sounds are only recorded; nothing is played back here."""

import logging
from typing import List

from ..blocks import BlockContext, BlockKind
from .common import finish_statement, sprite_or_stage

logger = logging.getLogger(__name__)


def _tick_play_sound(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    logger.debug("play_sound %s on %s", name, ctx.resource.name)
    ctx.resource.play_sound(str(name))
    finish_statement(ctx)


def _tick_stop_all_sounds(ctx: BlockContext) -> None:
    ctx.pod.stop_all_sounds()
    finish_statement(ctx)


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind="play_sound",
        tick=_tick_play_sound,
        compatible_with=sprite_or_stage,
        description="Starts playing the named sound.",
        parameters=("sound",),
    ),
    BlockKind(
        kind="stop_all_sounds",
        tick=_tick_stop_all_sounds,
        compatible_with=sprite_or_stage,
        description="Stops every sound on every sprite and the stage.",
    ),
]
