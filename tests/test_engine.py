from __future__ import annotations

import math
from typing import Any, Dict, Optional

import pytest

from neonflap.core.events import Event, EventBus, EventType
from neonflap.core.state import RunState
from neonflap.game.engine import FlapEngine
from neonflap.game.obstacles import Obstacle
from neonflap.settings import Settings
from neonflap.storage.persistence import STATE_KEY, MemoryPersistence, Persistence


class BrokenPersistence(Persistence):
    """Every storage operation fails."""

    def _read(self, key: str) -> Optional[str]:
        raise RuntimeError("storage offline")

    def _write(self, key: str, value: str) -> None:
        raise RuntimeError("storage offline")

    def _remove(self, key: str) -> None:
        raise RuntimeError("storage offline")


def _events(bus: EventBus, event_type: EventType) -> list[Event]:
    return bus.get_history(event_type, limit=100)


def _park_spawner(engine: FlapEngine) -> None:
    engine.run.stream.spawn_timer_ms = -1e9


def test_start_creates_fresh_run(engine: FlapEngine) -> None:
    assert engine.state is RunState.IDLE
    assert engine.run is None

    assert engine.start()

    assert engine.state is RunState.PLAYING
    assert engine.score == 0
    assert engine.run.obstacles == []
    assert engine.run.avatar.x == pytest.approx(96.0)
    assert engine.run.avatar.y == pytest.approx(320.0)


def test_start_while_playing_is_rejected(engine: FlapEngine) -> None:
    engine.start()
    run = engine.run
    assert not engine.start()
    assert engine.run is run


@pytest.mark.parametrize("operation", ["pause", "crash", "go_home", "jump"])
def test_operations_from_idle_are_no_ops(engine: FlapEngine, persistence: MemoryPersistence,
                                         operation: str) -> None:
    assert not getattr(engine, operation)()
    assert engine.state is RunState.IDLE
    assert persistence.load_state() is None


def test_pause_then_resume_restores_run_and_consumes_slot(
    engine: FlapEngine, persistence: MemoryPersistence
) -> None:
    engine.start()
    engine.update(16.66)
    engine.run.score = 3
    engine.run.stream.obstacles.append(Obstacle(x=250.0, gap_top=180.0))
    before = engine.run.to_snapshot()

    assert engine.pause()
    assert engine.state is RunState.PAUSED
    assert persistence.load_state() == before

    # Frozen while paused
    engine.update(500)
    assert engine.run.to_snapshot() == before

    assert engine.resume()

    assert engine.state is RunState.PLAYING
    assert engine.score == 3
    assert engine.run.to_snapshot() == before
    assert persistence.load_state() is None
    assert not engine.can_resume


def test_resume_after_going_home(engine: FlapEngine) -> None:
    engine.start()
    engine.run.score = 2
    engine.pause()
    assert engine.go_home()
    assert engine.state is RunState.IDLE
    assert engine.can_resume

    assert engine.resume()
    assert engine.score == 2


def test_resume_without_snapshot_is_no_op(engine: FlapEngine) -> None:
    assert not engine.resume()
    assert engine.state is RunState.IDLE
    assert engine.run is None


def test_resume_with_corrupt_snapshot_is_no_op(engine: FlapEngine, persistence: MemoryPersistence) -> None:
    persistence._write(STATE_KEY, "{oops")
    assert not engine.resume()
    assert engine.state is RunState.IDLE


def test_resume_with_malformed_snapshot_discards_it(engine: FlapEngine, persistence: MemoryPersistence) -> None:
    persistence.save_state({"avatar": {}, "obstacles": [], "score": 1})

    assert not engine.resume()

    assert engine.state is RunState.IDLE
    assert persistence.load_state() is None


def test_crash_with_zero_score_leaves_hall_of_fame_alone(
    engine: FlapEngine, persistence: MemoryPersistence
) -> None:
    persistence.save_score(8)
    before = persistence.get_high_scores()
    engine.start()

    assert engine.crash()

    assert engine.state is RunState.GAME_OVER
    assert persistence.get_high_scores() == before


def test_crash_records_score_clears_snapshot_and_emits(
    engine: FlapEngine, persistence: MemoryPersistence, bus: EventBus
) -> None:
    engine.start()
    engine.run.score = 6
    persistence.save_state(engine.run.to_snapshot())

    engine.crash()

    assert [s.score for s in persistence.get_high_scores()] == [6]
    assert persistence.load_state() is None
    crash = _events(bus, EventType.CRASH)
    assert len(crash) == 1
    assert crash[0].data == {"score": 6, "x": engine.run.avatar.x, "y": engine.run.avatar.y}


def test_game_over_is_visible_only_once_fully_applied(
    engine: FlapEngine, persistence: MemoryPersistence, bus: EventBus
) -> None:
    observed: Dict[str, Any] = {}

    def on_change(event: Event) -> None:
        if event.data["to"] is RunState.GAME_OVER:
            observed["can_resume"] = engine.can_resume
            observed["scores"] = [s.score for s in engine.high_scores]

    bus.subscribe(EventType.STATE_CHANGED, on_change)
    engine.start()
    engine.run.score = 4
    engine.pause()
    engine.resume()
    persistence.save_state({"stale": True})

    engine.crash()

    assert observed == {"can_resume": False, "scores": [4]}


def test_jump_sets_velocity_and_emits(engine: FlapEngine, bus: EventBus) -> None:
    engine.start()
    engine.run.avatar.velocity = 6.0

    assert engine.jump()
    assert engine.jump()

    assert engine.run.avatar.velocity == -4.5
    assert len(_events(bus, EventType.JUMP)) == 2


def test_falling_without_input_hits_the_floor(engine: FlapEngine) -> None:
    engine.start()
    _park_spawner(engine)

    for _ in range(600):
        engine.update(16.66)
        if engine.state is not RunState.PLAYING:
            break

    assert engine.state is RunState.GAME_OVER
    assert engine.score == 0
    assert engine.run.avatar.y + 10 > 640


def test_run_is_frozen_after_crash(engine: FlapEngine) -> None:
    engine.start()
    engine.crash()
    frozen = engine.run.to_snapshot()

    engine.update(100)
    assert not engine.jump()

    assert engine.run.to_snapshot() == frozen


def test_passing_an_obstacle_scores_once_after_the_tick(engine: FlapEngine, bus: EventBus) -> None:
    engine.start()
    _park_spawner(engine)
    avatar = engine.run.avatar
    obstacle = Obstacle(x=avatar.x - 50 + 1, gap_top=avatar.y - 75)
    engine.run.stream.obstacles.append(obstacle)

    observed_y: list[float] = []
    bus.subscribe(EventType.SCORE, lambda e: observed_y.append(engine.run.avatar.y))

    engine.update(16.66)
    engine.update(16.66)

    assert engine.state is RunState.PLAYING
    assert engine.score == 1
    assert obstacle.passed
    assert [e.data["score"] for e in _events(bus, EventType.SCORE)] == [1]
    # Delivered after physics for that tick had run
    assert observed_y[0] != pytest.approx(320.0)


def test_first_collision_ends_the_frame(engine: FlapEngine) -> None:
    engine.start()
    _park_spawner(engine)
    avatar = engine.run.avatar
    blocking = Obstacle(x=avatar.x - 20, gap_top=500)
    passable = Obstacle(x=avatar.x - 50 + 1, gap_top=avatar.y - 75)
    engine.run.stream.obstacles.extend([blocking, passable])

    engine.update(16.66)

    assert engine.state is RunState.GAME_OVER
    assert engine.score == 0
    assert not passable.passed


def test_score_in_crashing_tick_is_delivered_before_game_over(engine: FlapEngine, bus: EventBus) -> None:
    engine.start()
    _park_spawner(engine)
    avatar = engine.run.avatar
    passable = Obstacle(x=avatar.x - 50 + 1, gap_top=avatar.y - 75)
    blocking = Obstacle(x=avatar.x - 20, gap_top=500)
    engine.run.stream.obstacles.extend([passable, blocking])

    order: list[str] = []
    bus.subscribe(EventType.SCORE, lambda e: order.append("score"))
    bus.subscribe(EventType.CRASH, lambda e: order.append("crash"))
    bus.subscribe(
        EventType.STATE_CHANGED,
        lambda e: order.append(e.data["to"].name.lower()),
    )

    engine.update(16.66)

    assert engine.score == 1
    assert order == ["score", "game_over", "crash"]


def test_spawned_obstacles_are_announced(engine: FlapEngine, bus: EventBus) -> None:
    engine.start()
    engine.update(16.66)

    spawned = _events(bus, EventType.OBSTACLE_SPAWNED)
    assert len(spawned) == 1
    assert spawned[0].data["gap_top"] == engine.run.obstacles[0].gap_top


def test_restart_after_game_over(engine: FlapEngine) -> None:
    engine.start()
    engine.run.score = 5
    engine.crash()

    assert engine.start()

    assert engine.state is RunState.PLAYING
    assert engine.score == 0


def test_go_home_keeps_snapshot(engine: FlapEngine, persistence: MemoryPersistence) -> None:
    engine.start()
    engine.pause()
    snapshot = persistence.load_state()

    engine.go_home()

    assert persistence.load_state() == snapshot


def test_state_changes_are_published(engine: FlapEngine, bus: EventBus) -> None:
    engine.start()
    engine.pause()
    engine.go_home()

    changes = [(e.data["from"], e.data["to"]) for e in _events(bus, EventType.STATE_CHANGED)]
    assert changes == [
        (RunState.IDLE, RunState.PLAYING),
        (RunState.PLAYING, RunState.PAUSED),
        (RunState.PAUSED, RunState.IDLE),
    ]


def test_storage_failures_do_not_reach_the_game(settings: Settings) -> None:
    engine = FlapEngine(settings=settings, persistence=BrokenPersistence())

    engine.start()
    assert engine.pause()
    assert engine.state is RunState.PAUSED
    assert not engine.can_resume
    assert not engine.resume()
    assert engine.high_scores == []

    engine.go_home()
    engine.start()
    engine.run.score = 3
    assert engine.crash()
    assert engine.state is RunState.GAME_OVER


def test_failing_effects_subscriber_does_not_stop_the_tick(engine: FlapEngine, bus: EventBus) -> None:
    def broken(event: Event) -> None:
        raise RuntimeError("no audio device")

    for event_type in EventType:
        bus.subscribe(event_type, broken)
    engine.start()
    engine.jump()
    engine.update(16.66)

    assert engine.state is RunState.PLAYING
    assert engine.run.avatar.velocity == pytest.approx(-4.25)
    assert engine.run.avatar.rotation == pytest.approx(max(-math.pi / 4, -0.425))


def test_snapshot_with_non_finite_position_is_not_resumed(
    engine: FlapEngine, persistence: MemoryPersistence
) -> None:
    persistence._write(
        STATE_KEY,
        '{"avatar": {"x": 96, "y": NaN, "velocity": 0}, "obstacles": [], "score": 0}',
    )

    assert not engine.resume()

    assert engine.state is RunState.IDLE
    assert persistence.load_state() is None
