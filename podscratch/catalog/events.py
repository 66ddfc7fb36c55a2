"""Event blocks and broadcasts.

Event blocks start scripts. They never receive a push: every tick the script
re-runs its event block, which compares the last event time it has seen
against a shared timestamp and steps past itself only when that timestamp has
moved on. The first evaluation just arms the block with the timestamp as it
stands, so only events raised after that count. An event block always asks
to yield; the script clears that request after its event check, so an idle
script stops on its event block while a fired one runs on in the same tick.
"""

import logging
from typing import List, Optional

from ..blocks import BlockContext, BlockKind
from ..constants import LAST_SEEN
from .common import finish_statement, keep_last_seen, sprite_only

logger = logging.getLogger(__name__)


def _fired(ctx: BlockContext, event_time: Optional[float]) -> bool:
    """Arm on first sight, then report whether ``event_time`` is newer than the last one seen."""
    last_seen = ctx.state.get(LAST_SEEN)
    if last_seen is None:
        # Events from before the block was first seen never fire it
        ctx.state[LAST_SEEN] = event_time or 0.0
        return False
    if event_time is not None and event_time > last_seen:
        ctx.state[LAST_SEEN] = event_time
        return True
    return False


def _tick_broadcast(ctx: BlockContext) -> None:
    message = ctx.script.next_argument()
    logger.debug("broadcast %s", message)
    ctx.pod.broadcast(message)
    finish_statement(ctx, yield_frame=True)


def _tick_when_green_flag_clicked(ctx: BlockContext) -> None:
    if _fired(ctx, ctx.pod.green_flag_time):
        logger.debug("when_green_flag_clicked")
        ctx.script.next_block()
    ctx.script.yield_requested = True


def _tick_when_receive(ctx: BlockContext) -> None:
    script = ctx.script
    state = ctx.state
    if "message" not in state:
        header = script.ip
        state["message"] = script.next_argument()
        state["next_ip"] = script.ip + 1
        script.ip = header
    if _fired(ctx, ctx.pod.last_broadcast_time(state["message"])):
        logger.debug("when_receive %s", state["message"])
        script.ip = state["next_ip"]
    script.yield_requested = True


def _tick_when_sprite_clicked(ctx: BlockContext) -> None:
    if _fired(ctx, ctx.resource.last_click_time):
        logger.debug("when_sprite_clicked %s", ctx.resource.name)
        ctx.script.next_block()
    ctx.script.yield_requested = True


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind="broadcast",
        tick=_tick_broadcast,
        description="Sends a message to every script that starts with a matching 'when_receive'.",
        parameters=("message",),
    ),
    BlockKind(
        kind="when_green_flag_clicked",
        tick=_tick_when_green_flag_clicked,
        is_event_block=True,
        reset=keep_last_seen,
        description="Starts the script when the green flag is clicked.",
    ),
    BlockKind(
        kind="when_receive",
        tick=_tick_when_receive,
        is_event_block=True,
        reset=keep_last_seen,
        description="Starts the script when the given message is broadcast.",
        parameters=("message",),
    ),
    BlockKind(
        kind="when_sprite_clicked",
        tick=_tick_when_sprite_clicked,
        is_event_block=True,
        compatible_with=sprite_only,
        reset=keep_last_seen,
        description="Starts the script when its sprite is clicked.",
    ),
]
