"""Operator reporters. Each one reads its arguments left to right."""

import logging
import math
from typing import List

from ..blocks import BlockContext, BlockKind
from ..utils import to_bool_string, to_number, to_text, truthy

logger = logging.getLogger(__name__)


def _two_arguments(ctx: BlockContext):
    first = ctx.script.next_argument()
    second = ctx.script.next_argument()
    return first, second


def _tick_equals(ctx: BlockContext) -> str:
    first, second = _two_arguments(ctx)
    result = to_bool_string(to_text(first) == to_text(second))
    logger.debug("equals %s %s == %s", first, second, result)
    return result


def _tick_greater(ctx: BlockContext) -> str:
    first, second = _two_arguments(ctx)
    return to_bool_string(to_number(first) > to_number(second))


def _tick_less(ctx: BlockContext) -> str:
    first, second = _two_arguments(ctx)
    return to_bool_string(to_number(first) < to_number(second))


def _tick_join(ctx: BlockContext) -> str:
    first, second = _two_arguments(ctx)
    return to_text(first) + to_text(second)


def _tick_not(ctx: BlockContext) -> str:
    value = ctx.script.next_argument()
    return to_bool_string(not truthy(value))


def _tick_random_from_to(ctx: BlockContext):
    low, high = _two_arguments(ctx)
    # A decimal point in either bound asks for a fractional result
    floating_point = "." in str(low) or "." in str(high)
    low, high = to_number(low), to_number(high)
    rng = ctx.pod.random
    if floating_point:
        result = low + rng.random() * (high - low)
    else:
        result = low + rng.random() * (high - low + 1)
        # Infinite bounds have no whole number to round to
        if math.isfinite(result):
            result = math.floor(result)
    logger.debug("random_from_to %s to %s == %s", low, high, result)
    return result


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind="equals",
        tick=_tick_equals,
        returns_value=True,
        description="Reports true if both values are equal when compared as text.",
        parameters=("first_value", "second_value"),
    ),
    BlockKind(
        kind="greater",
        tick=_tick_greater,
        returns_value=True,
        description="Reports true if the first value is greater than the second.",
        parameters=("first_value", "second_value"),
    ),
    BlockKind(
        kind="less",
        tick=_tick_less,
        returns_value=True,
        description="Reports true if the first value is less than the second.",
        parameters=("first_value", "second_value"),
    ),
    BlockKind(
        kind="join",
        tick=_tick_join,
        returns_value=True,
        description="Reports both values joined together as text.",
        parameters=("first_value", "second_value"),
    ),
    BlockKind(
        kind="not",
        tick=_tick_not,
        returns_value=True,
        description="Reports true if the value is false, and false if it is true.",
        parameters=("value",),
    ),
    BlockKind(
        kind="random_from_to",
        tick=_tick_random_from_to,
        returns_value=True,
        description="Picks a random number between both bounds, inclusive. Whole numbers unless a "
        "bound has a decimal point.",
        parameters=("from", "to"),
    ),
]
