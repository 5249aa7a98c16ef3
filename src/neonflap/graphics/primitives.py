"""Basic drawing primitives on numpy frame buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Create a black (height, width, 3) RGB buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def _clip(buffer: Buffer, x: int, y: int, width: int, height: int) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    return (
        max(0, min(x, w)),
        max(0, min(y, h)),
        max(0, min(x + width, w)),
        max(0, min(y + height, h)),
    )


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    t = max(1, thickness)
    buffer[y1:min(y1 + t, y2), x1:x2] = color
    buffer[max(y2 - t, y1):y2, x1:x2] = color
    buffer[y1:y2, x1:min(x1 + t, x2)] = color
    buffer[y1:y2, max(x2 - t, x1):x2] = color


def blend_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a filled rectangle over the buffer."""
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x1 >= x2 or y1 >= y2 or alpha <= 0:
        return

    alpha = min(1.0, alpha)
    region = buffer[y1:y2, x1:x2].astype(np.float32)
    blended = region * (1 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = blended.astype(np.uint8)


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
) -> None:
    """Draw a filled circle (distance mask)."""
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
    buffer[dist_sq <= radius ** 2] = color


def draw_ellipse(
    buffer: Buffer,
    cx: int,
    cy: int,
    rx: int,
    ry: int,
    color: Color,
) -> None:
    """Draw a filled axis-aligned ellipse."""
    if rx <= 0 or ry <= 0:
        return
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    mask = ((x_indices - cx) / rx) ** 2 + ((y_indices - cy) / ry) ** 2 <= 1.0
    buffer[mask] = color
