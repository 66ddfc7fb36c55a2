"""Control blocks: loops, conditionals and waits.

Every body is laid out as ``header, arguments..., begin, ..., end``. A header
that enters its body pushes its own position, so the body's ``end`` jumps back
to the header, which then decides whether to go round again or move past the
body. Whatever a header needs to remember between those visits lives in its
block state and is wiped on reset.
"""

import logging
import math
from typing import List

from ..blocks import BlockContext, BlockKind
from ..constants import OTHERWISE
from ..errors import ScriptStructureError
from ..utils import to_number, truthy

logger = logging.getLogger(__name__)


def _tick_otherwise(ctx: BlockContext) -> None:
    raise ScriptStructureError(
        "'otherwise' block cannot be used by itself",
        detail="it must follow the begin/end body of an 'if_then'; a missing 'end' before "
        "'otherwise' is a common cause",
        block_index=ctx.script.ip,
    )


def _tick_forever(ctx: BlockContext) -> None:
    script = ctx.script
    script.push_ip()
    script.next_block()


def _tick_if_then(ctx: BlockContext) -> None:
    script = ctx.script
    state = ctx.state
    if not state.get("evaluated"):
        header = script.ip
        condition = truthy(script.next_argument())
        script.next_block()
        state["evaluated"] = True
        state["body_ip"] = script.ip
        logger.debug("if_then %s", condition)
        if condition:
            script.push_ip(header)
            return
        script.skip_begin_end_block()
        following = script.peek_block()
        if following is not None and following.kind == OTHERWISE:
            script.next_block()
            script.push_ip(header)
            return
        # No body was entered, so there is nothing to come back for
        state.clear()
        return

    # Back from whichever body ran: skip the "then" body and any "otherwise" body
    script.ip = state["body_ip"]
    script.skip_begin_end_block()
    following = script.peek_block()
    if following is not None and following.kind == OTHERWISE:
        script.next_block()
        script.skip_begin_end_block()
    state.clear()


def _tick_repeat(ctx: BlockContext) -> None:
    script = ctx.script
    state = ctx.state
    header = script.ip
    if "remaining" not in state:
        count = to_number(script.next_argument())
        state["remaining"] = math.ceil(count) if math.isfinite(count) else 0
        script.next_block()
        state["body_ip"] = script.ip
    else:
        script.ip = state["body_ip"]

    if state["remaining"] > 0:
        logger.debug("repeat %s", state["remaining"])
        state["remaining"] -= 1
        script.push_ip(header)
    else:
        script.skip_begin_end_block()
        state.clear()
    script.yield_requested = True


def _tick_repeat_until(ctx: BlockContext) -> None:
    script = ctx.script
    header = script.ip
    condition = truthy(script.next_argument())
    script.next_block()
    logger.debug("repeat_until %s", condition)
    if condition:
        script.skip_begin_end_block()
    else:
        script.push_ip(header)
    script.yield_requested = True


def _tick_wait(ctx: BlockContext) -> None:
    script = ctx.script
    state = ctx.state
    now = ctx.now()
    if "deadline" not in state:
        header = script.ip
        delay = to_number(script.next_argument())
        state["next_ip"] = script.ip + 1
        state["deadline"] = now + delay
        script.ip = header
        logger.debug("wait %s", delay)
        script.yield_requested = True
        return
    if now >= state["deadline"]:
        script.ip = state["next_ip"]
        state.clear()
    else:
        script.yield_requested = True


def _tick_wait_until(ctx: BlockContext) -> None:
    script = ctx.script
    header = script.ip
    condition = truthy(script.next_argument())
    if condition:
        script.next_block()
    else:
        script.ip = header
        script.yield_requested = True


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind=OTHERWISE,
        tick=_tick_otherwise,
        description="Placed right after the begin/end body of an 'if_then'; its own begin/end body runs "
        "when the condition is false. Not legal by itself.",
    ),
    BlockKind(
        kind="forever",
        tick=_tick_forever,
        description="Runs its body in a loop that never ends until the script is reset.",
    ),
    BlockKind(
        kind="if_then",
        tick=_tick_if_then,
        description="Runs its body if the condition is true; otherwise runs the body of a following "
        "'otherwise' block, if there is one.",
        parameters=("condition",),
    ),
    BlockKind(
        kind="repeat",
        tick=_tick_repeat,
        description="Runs its body the given number of times (rounded up), then continues.",
        parameters=("count",),
    ),
    BlockKind(
        kind="repeat_until",
        tick=_tick_repeat_until,
        description="Runs its body until the condition is true, then continues.",
        parameters=("condition",),
    ),
    BlockKind(
        kind="wait",
        tick=_tick_wait,
        description="Pauses the script for the given number of seconds.",
        parameters=("seconds",),
    ),
    BlockKind(
        kind="wait_until",
        tick=_tick_wait_until,
        description="Pauses the script until the condition is true.",
        parameters=("condition",),
    ),
]
