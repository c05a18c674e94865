"""Framebuffer operations.

The framebuffer is a boolean ``(width, height)`` array indexed ``[x, y]``.
Every function is pure and returns a new array.
"""

from functools import lru_cache

import jax.numpy as jnp

from chipjax.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, HIRES_SCREEN_WIDTH, HIRES_SCREEN_HEIGHT, SPRITE_WIDTH,
)


def resolution(hires: bool) -> tuple[int, int]:
    """(width, height) of the low or high resolution screen."""
    if hires:
        return HIRES_SCREEN_WIDTH, HIRES_SCREEN_HEIGHT
    return SCREEN_WIDTH, SCREEN_HEIGHT


def blank(hires: bool = False) -> jnp.ndarray:
    """All-off framebuffer at the requested resolution."""
    return jnp.zeros(resolution(hires), dtype=jnp.bool_)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    return jnp.zeros_like(display)


def set_resolution(hires: bool) -> jnp.ndarray:
    """Framebuffer for a resolution switch; the old contents are discarded."""
    return blank(hires)


@lru_cache(maxsize=None)
def _coordinate_grid(width: int, height: int) -> tuple[jnp.ndarray, jnp.ndarray]:
    # Pre-computed coordinate grids, one pair per resolution
    return jnp.meshgrid(jnp.arange(width), jnp.arange(height), indexing='ij')


def draw_sprite(display: jnp.ndarray, x: int, y: int, rows, width: int = SPRITE_WIDTH) -> tuple[jnp.ndarray, bool]:
    """XOR a sprite onto the framebuffer.

    Args:
        display: Current framebuffer.
        x: Column of the sprite's left edge, wrapped to the screen width.
        y: Row of the sprite's top edge, wrapped to the screen height.
        rows: One integer per sprite row, most significant of ``width`` bits leftmost.
        width: Sprite width in pixels (8, or 16 for large sprites).

    Returns:
        Tuple of the new framebuffer and the collision flag, true when at
        least one lit pixel was switched off. Pixels running past an edge
        wrap around to the opposite edge.
    """
    rows = jnp.asarray(rows, dtype=jnp.int32).reshape(-1)
    height = rows.shape[0]
    if height == 0:
        return display, False

    screen_width, screen_height = display.shape
    xx, yy = _coordinate_grid(screen_width, screen_height)

    col_offset = (xx - int(x) % screen_width) % screen_width
    row_offset = (yy - int(y) % screen_height) % screen_height
    in_sprite = (col_offset < width) & (row_offset < height)

    sprite_rows = rows[jnp.minimum(row_offset, height - 1)]
    bit_shift = jnp.clip(width - 1 - col_offset, 0, width - 1)
    sprite = ((sprite_rows >> bit_shift) & 1).astype(jnp.bool_) & in_sprite

    collision = bool(jnp.any(display & sprite))
    return display ^ sprite, collision


def scroll_down(display: jnp.ndarray, n: int) -> jnp.ndarray:
    """Move every row down by ``n``; rows scrolled off the bottom are lost."""
    height = display.shape[1]
    if n <= 0:
        return display
    if n >= height:
        return clear(display)
    return clear(display).at[:, n:].set(display[:, :height - n])


def scroll_right(display: jnp.ndarray, n: int) -> jnp.ndarray:
    width = display.shape[0]
    if n <= 0:
        return display
    if n >= width:
        return clear(display)
    return clear(display).at[n:, :].set(display[:width - n, :])


def scroll_left(display: jnp.ndarray, n: int) -> jnp.ndarray:
    width = display.shape[0]
    if n <= 0:
        return display
    if n >= width:
        return clear(display)
    return clear(display).at[:width - n, :].set(display[n:, :])
