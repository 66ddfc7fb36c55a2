"""Shared fixtures: a controllable clock and pods with recording blocks."""

import pytest

from podscratch.blocks import BlockContext, BlockKind
from podscratch.pod import ScratchPod


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.time = start

    def now(self) -> float:
        return self.time

    def advance(self, seconds: float) -> None:
        self.time += seconds


def _tick_record(ctx: BlockContext) -> None:
    ctx.pod.records.append(ctx.script.next_argument())
    ctx.script.next_block()


def _tick_probe(ctx: BlockContext):
    value = ctx.script.next_argument()
    ctx.pod.probed.append(value)
    return value


class RecordingPod(ScratchPod):
    """ScratchPod with two extra kinds for observing execution.

    ``record`` is a statement appending its argument to ``records``.
    ``probe`` is a reporter appending its argument to ``probed`` and
    reporting it unchanged.
    """

    pod_name = "recording"

    def __init__(self, options=None, clock=None):
        self.records = []
        self.probed = []
        super().__init__(options, clock)

    def get_block_kinds(self):
        return super().get_block_kinds() + [
            BlockKind(kind="record", tick=_tick_record, parameters=("value",)),
            BlockKind(kind="probe", tick=_tick_probe, returns_value=True, parameters=("value",)),
        ]


def click_flag(pod, clock) -> None:
    """Arm every event block, then click the green flag a moment later."""
    pod.tick()
    clock.advance(1)
    pod.click_green_flag()


def tick_n(pod, n: int) -> None:
    for _ in range(n):
        pod.tick()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pod(clock):
    return RecordingPod(options={"seed": 1}, clock=clock)


@pytest.fixture
def sprite(pod):
    return pod.new_sprite("cat")
