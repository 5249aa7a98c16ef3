"""Scene renderer: draws a run into a frame buffer. Reads state, never mutates it."""

from dataclasses import dataclass
from typing import Iterable, Optional
import math

from neonflap.animation.particles import Particle
from neonflap.game.run import Run
from neonflap.graphics.primitives import (
    Buffer, Color, blend_rect, draw_circle, draw_ellipse, draw_rect, fill
)
from neonflap.settings import DisplaySettings, ObstacleSettings

GROUND_HEIGHT = 20
CAP_HEIGHT = 20
CAP_OVERHANG = 2
AVATAR_RADIUS = 15


@dataclass(frozen=True)
class Palette:
    sky: Color
    ground: Color
    grass: Color
    pipe: Color = (46, 204, 113)
    pipe_edge: Color = (39, 174, 96)
    body: Color = (244, 208, 63)
    wing: Color = (230, 126, 34)
    beak: Color = (231, 76, 60)


DAY = Palette(sky=(112, 197, 206), ground=(222, 216, 149), grass=(115, 198, 182))
NIGHT = Palette(sky=(24, 32, 64), ground=(127, 140, 141), grass=(22, 160, 133))


def is_night(hour: int, display: DisplaySettings) -> bool:
    """Night spans night_start_hour up to (not including) night_end_hour."""
    start, end = display.night_start_hour, display.night_end_hour
    if start <= end:
        return start <= hour < end
    return hour >= start or hour < end


def render_scene(
    buffer: Buffer,
    run: Optional[Run],
    obstacles: ObstacleSettings,
    particles: Iterable[Particle] = (),
    show_avatar: bool = True,
    palette: Palette = DAY,
    particle_size: int = 6,
) -> None:
    """Draw sky, pipes, avatar, particles and ground."""
    height, width = buffer.shape[:2]
    fill(buffer, palette.sky)

    if run is not None:
        for obstacle in run.obstacles:
            _draw_pipe_pair(buffer, obstacle.x, obstacle.gap_top, height, obstacles, palette)

        if show_avatar:
            _draw_avatar(buffer, run.avatar.x, run.avatar.y, run.avatar.rotation, palette)

    for particle in particles:
        blend_rect(
            buffer, int(particle.x), int(particle.y),
            particle_size, particle_size, particle.color, particle.alpha,
        )

    draw_rect(buffer, 0, height - GROUND_HEIGHT, width, GROUND_HEIGHT, palette.ground)
    draw_rect(buffer, 0, height - GROUND_HEIGHT, width, 5, palette.grass)


def _draw_pipe_pair(
    buffer: Buffer,
    x: float,
    gap_top: float,
    height: int,
    obstacles: ObstacleSettings,
    palette: Palette,
) -> None:
    px = int(x)
    pw = int(obstacles.width)
    top = int(gap_top)
    bottom = int(gap_top + obstacles.gap_size)

    # Top pipe and its cap
    draw_rect(buffer, px, 0, pw, top, palette.pipe)
    draw_rect(buffer, px, 0, pw, top, palette.pipe_edge, filled=False, thickness=2)
    draw_rect(buffer, px - CAP_OVERHANG, top - CAP_HEIGHT, pw + 2 * CAP_OVERHANG, CAP_HEIGHT, palette.pipe)
    draw_rect(buffer, px - CAP_OVERHANG, top - CAP_HEIGHT, pw + 2 * CAP_OVERHANG, CAP_HEIGHT,
              palette.pipe_edge, filled=False, thickness=2)

    # Bottom pipe and its cap
    draw_rect(buffer, px, bottom, pw, height - bottom, palette.pipe)
    draw_rect(buffer, px, bottom, pw, height - bottom, palette.pipe_edge, filled=False, thickness=2)
    draw_rect(buffer, px - CAP_OVERHANG, bottom, pw + 2 * CAP_OVERHANG, CAP_HEIGHT, palette.pipe)
    draw_rect(buffer, px - CAP_OVERHANG, bottom, pw + 2 * CAP_OVERHANG, CAP_HEIGHT,
              palette.pipe_edge, filled=False, thickness=2)


def _draw_avatar(buffer: Buffer, x: float, y: float, rotation: float, palette: Palette) -> None:
    cx, cy = int(x), int(y)
    cos_r, sin_r = math.cos(rotation), math.sin(rotation)

    def rotated(dx: float, dy: float) -> tuple[int, int]:
        return int(cx + dx * cos_r - dy * sin_r), int(cy + dx * sin_r + dy * cos_r)

    draw_circle(buffer, cx, cy, AVATAR_RADIUS, palette.body)

    wx, wy = rotated(-5, 5)
    draw_ellipse(buffer, wx, wy, 8, 5, palette.wing)

    ex, ey = rotated(6, -6)
    draw_circle(buffer, ex, ey, 6, (255, 255, 255))
    px, py = rotated(8, -6)
    draw_circle(buffer, px, py, 2, (0, 0, 0))

    bx, by = rotated(13, 6)
    draw_ellipse(buffer, bx, by, 5, 3, palette.beak)
