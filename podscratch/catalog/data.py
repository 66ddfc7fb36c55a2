"""Variable and list blocks.

Names are looked up on the sprite first and then pod-wide, so a sprite-local
variable shadows a global one with the same name.
"""

import logging
import math
from typing import Any, List

from ..blocks import BlockContext, BlockKind
from ..errors import BlockArgumentError
from ..utils import plain_number, to_number
from .common import finish_statement, sprite_or_stage

logger = logging.getLogger(__name__)


def _scope(ctx: BlockContext, name: Any, is_list: bool = False):
    return ctx.pod.resolve_scope(ctx.resource, str(name), is_list=is_list)


def _list_index(position: Any) -> int:
    """Turn a 1-based list position into a 0-based index; -1 when it is not finite."""
    number = to_number(position)
    if not math.isfinite(number):
        return -1
    return int(number) - 1


def _tick_set_to(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    value = ctx.script.next_argument()
    _scope(ctx, name).set_variable(str(name), value)
    logger.debug("set_to %s '%s'", name, value)
    finish_statement(ctx)


def _tick_change_by(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    delta = ctx.script.next_argument()
    if isinstance(delta, bool) or not isinstance(delta, (int, float)):
        raise BlockArgumentError(
            "For change_by block, delta must be a number",
            detail=f"got {delta!r}",
        )
    scope = _scope(ctx, name)
    old_value = scope.get_variable(str(name))
    new_value = plain_number(to_number(old_value) + delta)
    scope.set_variable(str(name), new_value)
    logger.debug("change_by %s %s + %s == %s", name, old_value, delta, new_value)
    finish_statement(ctx)


def _tick_variable(ctx: BlockContext) -> Any:
    name = ctx.script.next_argument()
    return _scope(ctx, name).get_variable(str(name))


def _tick_show_variable(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    _scope(ctx, name).show_variable(str(name), True)
    finish_statement(ctx)


def _tick_hide_variable(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    _scope(ctx, name).show_variable(str(name), False)
    finish_statement(ctx)


def _tick_add_to(ctx: BlockContext) -> None:
    value = ctx.script.next_argument()
    name = ctx.script.next_argument()
    ctx.pod.lookup_list(ctx.resource, str(name)).add(value)
    logger.debug("add_to %s %s", value, name)
    finish_statement(ctx)


def _tick_delete_of(ctx: BlockContext) -> None:
    what = ctx.script.next_argument()
    name = ctx.script.next_argument()
    list_variable = ctx.pod.lookup_list(ctx.resource, str(name))
    if what == "all":
        list_variable.delete_all()
    elif what == "last":
        list_variable.delete_at(list_variable.length() - 1)
    else:
        list_variable.delete_at(_list_index(what))
    finish_statement(ctx)


def _tick_item_of(ctx: BlockContext) -> Any:
    what = ctx.script.next_argument()
    name = ctx.script.next_argument()
    list_variable = ctx.pod.lookup_list(ctx.resource, str(name))
    if what == "last":
        index = list_variable.length() - 1
    elif what == "random":
        index = int(ctx.pod.random.random() * list_variable.length())
    else:
        index = _list_index(what)
    return list_variable.get_at(index)


def _tick_length_of(ctx: BlockContext) -> int:
    name = ctx.script.next_argument()
    return ctx.pod.lookup_list(ctx.resource, str(name)).length()


def _tick_show_list(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    _scope(ctx, name, is_list=True).show_list_variable(str(name), True)
    finish_statement(ctx)


def _tick_hide_list(ctx: BlockContext) -> None:
    name = ctx.script.next_argument()
    _scope(ctx, name, is_list=True).show_list_variable(str(name), False)
    finish_statement(ctx)


BLOCK_TYPES: List[BlockKind] = [
    BlockKind(
        kind="set_to",
        tick=_tick_set_to,
        compatible_with=sprite_or_stage,
        description="Sets the variable to the given value.",
        parameters=("variable", "value"),
    ),
    BlockKind(
        kind="change_by",
        tick=_tick_change_by,
        compatible_with=sprite_or_stage,
        description="Changes the variable by the given number; text values count as 0.",
        parameters=("variable", "delta"),
    ),
    BlockKind(
        kind="variable",
        tick=_tick_variable,
        returns_value=True,
        compatible_with=sprite_or_stage,
        description="Reports the value of the variable.",
        parameters=("variable",),
    ),
    BlockKind(
        kind="show_variable",
        tick=_tick_show_variable,
        compatible_with=sprite_or_stage,
        description="Shows the variable's monitor.",
        parameters=("variable",),
    ),
    BlockKind(
        kind="hide_variable",
        tick=_tick_hide_variable,
        compatible_with=sprite_or_stage,
        description="Hides the variable's monitor.",
        parameters=("variable",),
    ),
    BlockKind(
        kind="add_to",
        tick=_tick_add_to,
        compatible_with=sprite_or_stage,
        description="Adds an item to the end of the list.",
        parameters=("value", "list_variable"),
    ),
    BlockKind(
        kind="delete_of",
        tick=_tick_delete_of,
        compatible_with=sprite_or_stage,
        description="Deletes the item at a 1-based index, the 'last' item or 'all' items of the list.",
        parameters=("what", "list_variable"),
    ),
    BlockKind(
        kind="item_of",
        tick=_tick_item_of,
        returns_value=True,
        compatible_with=sprite_or_stage,
        description="Reports the item at a 1-based index, the 'last' item or a 'random' item of the list.",
        parameters=("what", "list_variable"),
    ),
    BlockKind(
        kind="length_of",
        tick=_tick_length_of,
        returns_value=True,
        compatible_with=sprite_or_stage,
        description="Reports how many items the list contains.",
        parameters=("list_variable",),
    ),
    BlockKind(
        kind="show_list",
        tick=_tick_show_list,
        compatible_with=sprite_or_stage,
        description="Shows the list's monitor.",
        parameters=("list_variable",),
    ),
    BlockKind(
        kind="hide_list",
        tick=_tick_hide_list,
        compatible_with=sprite_or_stage,
        description="Hides the list's monitor.",
        parameters=("list_variable",),
    ),
]
