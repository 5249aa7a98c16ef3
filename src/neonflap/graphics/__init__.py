"""Graphics module for NEONFLAP rendering."""

from neonflap.graphics.primitives import (
    new_buffer,
    fill,
    draw_rect,
    blend_rect,
    draw_circle,
    draw_ellipse,
)
from neonflap.graphics.renderer import DAY, NIGHT, Palette, is_night, render_scene

__all__ = [
    # Primitives
    "new_buffer",
    "fill",
    "draw_rect",
    "blend_rect",
    "draw_circle",
    "draw_ellipse",
    # Renderer
    "DAY",
    "NIGHT",
    "Palette",
    "is_night",
    "render_scene",
]
