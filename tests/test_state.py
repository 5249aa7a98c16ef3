from __future__ import annotations

import pytest

from neonflap.core.state import RunState, StateMachine

VALID = [
    (RunState.IDLE, RunState.PLAYING),
    (RunState.PLAYING, RunState.PAUSED),
    (RunState.PLAYING, RunState.GAME_OVER),
    (RunState.PAUSED, RunState.PLAYING),
    (RunState.PAUSED, RunState.IDLE),
    (RunState.GAME_OVER, RunState.IDLE),
    (RunState.GAME_OVER, RunState.PLAYING),
]


@pytest.mark.parametrize(("source", "target"), VALID)
def test_valid_transitions(source: RunState, target: RunState) -> None:
    machine = StateMachine(source)
    assert machine.transition(target)
    assert machine.state is target


@pytest.mark.parametrize(
    ("source", "target"),
    [
        (s, t) for s in RunState for t in RunState if (s, t) not in VALID
    ],
)
def test_invalid_transitions_are_no_ops(source: RunState, target: RunState) -> None:
    machine = StateMachine(source)
    assert not machine.transition(target)
    assert machine.state is source


def test_listeners_see_old_and_new_state() -> None:
    machine = StateMachine()
    seen: list[tuple[RunState, RunState]] = []
    machine.add_listener(lambda old, new: seen.append((old, new)))

    machine.transition(RunState.PLAYING)
    machine.transition(RunState.IDLE)  # rejected, no notification

    assert seen == [(RunState.IDLE, RunState.PLAYING)]


def test_failing_listener_does_not_block_transition() -> None:
    machine = StateMachine()
    seen: list[RunState] = []

    def broken(old: RunState, new: RunState) -> None:
        raise RuntimeError("boom")

    machine.add_listener(broken)
    machine.add_listener(lambda old, new: seen.append(new))

    assert machine.transition(RunState.PLAYING)
    assert seen == [RunState.PLAYING]

    machine.remove_listener(broken)
    machine.remove_listener(broken)
