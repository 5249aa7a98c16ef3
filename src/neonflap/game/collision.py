"""Collision and scoring checks between the avatar, an obstacle and the world bounds."""

from dataclasses import dataclass

from neonflap.game.avatar import Avatar
from neonflap.game.obstacles import Obstacle
from neonflap.settings import CollisionSettings, ObstacleSettings


@dataclass(frozen=True)
class CollisionResult:
    collision: bool = False
    scored: bool = False


def out_of_bounds(avatar: Avatar, world_height: float, config: CollisionSettings) -> bool:
    """True when the avatar's vertical extent leaves [0, world_height]."""
    return (
        avatar.y + config.avatar_half_height > world_height
        or avatar.y - config.avatar_half_height < 0
    )


def hits_obstacle(
    avatar: Avatar,
    obstacle: Obstacle,
    config: CollisionSettings,
    obstacles: ObstacleSettings,
) -> bool:
    """True when the avatar overlaps the obstacle horizontally and is not strictly inside its gap."""
    overlaps = (
        avatar.x + config.avatar_half_width > obstacle.x
        and avatar.x - config.avatar_half_width < obstacle.x + obstacles.width
    )
    if not overlaps:
        return False

    return (
        avatar.y - config.avatar_half_height < obstacle.gap_top
        or avatar.y + config.avatar_half_height > obstacle.gap_top + obstacles.gap_size
    )


def evaluate(
    avatar: Avatar,
    obstacle: Obstacle,
    world_height: float,
    config: CollisionSettings,
    obstacles: ObstacleSettings,
) -> CollisionResult:
    """Check one obstacle for a crash, else for a pass.

    A pass marks the obstacle so it can never score again.
    """
    if out_of_bounds(avatar, world_height, config):
        return CollisionResult(collision=True)

    if hits_obstacle(avatar, obstacle, config, obstacles):
        return CollisionResult(collision=True)

    if not obstacle.passed and obstacle.trailing_edge(obstacles.width) < avatar.x:
        obstacle.passed = True
        return CollisionResult(scored=True)

    return CollisionResult()
