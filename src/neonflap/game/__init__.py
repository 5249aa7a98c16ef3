"""Simulation: avatar physics, obstacles, collisions and the run controller."""

from neonflap.game.avatar import Avatar, integrate, apply_impulse
from neonflap.game.obstacles import Obstacle, ObstacleStream
from neonflap.game.collision import CollisionResult, evaluate, out_of_bounds
from neonflap.game.run import Run, SnapshotError
from neonflap.game.engine import FlapEngine
from neonflap.game.loop import GameLoop

__all__ = [
    "Avatar",
    "integrate",
    "apply_impulse",
    "Obstacle",
    "ObstacleStream",
    "CollisionResult",
    "evaluate",
    "out_of_bounds",
    "Run",
    "SnapshotError",
    "FlapEngine",
    "GameLoop",
]
