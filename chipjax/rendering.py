"""Turn framebuffers into pixels and text for hosts."""

import jax.numpy as jnp
import numpy as np
from typing import Tuple

from PIL import Image

RGB = Tuple[int, int, int]

COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "white": ((255, 255, 255), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
}


def display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: RGB = (0, 255, 0),
    off_color: RGB = (0, 0, 0),
) -> np.ndarray:
    """Colour a ``(width, height)`` boolean framebuffer.

    Returns:
        ``uint8`` image of shape ``(height * scale, width * scale, 3)``.
    """
    rows = np.asarray(display, dtype=np.bool_).T
    palette = np.array([off_color, on_color], dtype=np.uint8)
    image = palette[rows.astype(np.intp)]
    if scale > 1:
        image = image.repeat(scale, axis=0).repeat(scale, axis=1)
    return image


def create_color_scheme(scheme: str = "classic") -> Tuple[RGB, RGB]:
    """``(on_color, off_color)`` for one of :data:`COLOR_SCHEMES`."""
    if scheme not in COLOR_SCHEMES:
        raise ValueError(f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES)}")
    return COLOR_SCHEMES[scheme]


def display_to_text(display: jnp.ndarray, on: str = "#", off: str = ".") -> str:
    """One line of characters per pixel row."""
    rows = np.asarray(display, dtype=np.bool_).T
    return "\n".join("".join(on if pixel else off for pixel in row) for row in rows)


def save_frame(display: jnp.ndarray, filename: str, scale: int = 8, color_scheme: str = "classic") -> None:
    """Write the framebuffer to an image file; the format follows the extension."""
    on_color, off_color = create_color_scheme(color_scheme)
    Image.fromarray(display_to_rgb(display, scale, on_color, off_color)).save(filename)
