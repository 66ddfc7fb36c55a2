"""The block kinds a ScratchPod provides, grouped by palette category."""

from typing import List

from ..blocks import BlockKind
from . import control, data, events, looks, motion, operators, sound, structure

CATEGORIES = {
    "structure": structure.BLOCK_TYPES,
    "control": control.BLOCK_TYPES,
    "events": events.BLOCK_TYPES,
    "operators": operators.BLOCK_TYPES,
    "data": data.BLOCK_TYPES,
    "motion": motion.BLOCK_TYPES,
    "looks": looks.BLOCK_TYPES,
    "sound": sound.BLOCK_TYPES,
}


def get_block_types() -> List[BlockKind]:
    """Every block kind, in palette order."""
    return [kind for kinds in CATEGORIES.values() for kind in kinds]


def category_of(kind: str) -> str:
    for category, kinds in CATEGORIES.items():
        if any(block_kind.kind == kind for block_kind in kinds):
            return category
    return "unknown"
