"""Turning exported framebuffers into RGB images."""

import numpy as np
from typing import Tuple

RGB = Tuple[int, int, int]

# name -> (lit pixel, unlit pixel)
COLOR_SCHEMES = {
    "white": ((255, 255, 255), (0, 0, 0)),
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
    "octo": ((255, 204, 0), (153, 102, 0)),
}


def framebuffer_to_rgb(
    framebuffer: np.ndarray,
    scale: int = 8,
    on_color: RGB = (0, 255, 0),
    off_color: RGB = (0, 0, 0),
) -> np.ndarray:
    """Color a row-major framebuffer and upscale it by ``scale``.

    Args:
        framebuffer: Boolean array of shape (height, width), as returned by
            ``Interpreter.framebuffer``
        scale: Integer nearest-neighbour upscaling factor
        on_color: RGB for lit pixels
        off_color: RGB for unlit pixels

    Returns:
        uint8 array of shape (height*scale, width*scale, 3)
    """
    pixels = np.asarray(framebuffer, dtype=np.bool_)
    if pixels.ndim != 2:
        raise ValueError(f"Expected a 2D framebuffer, got shape {pixels.shape}")

    palette = np.array([off_color, on_color], dtype=np.uint8)
    image = palette[pixels.astype(np.intp)]
    if scale > 1:
        image = image.repeat(scale, axis=0).repeat(scale, axis=1)
    return image


def create_color_scheme(scheme: str = "white") -> Tuple[RGB, RGB]:
    """Return ``(on_color, off_color)`` for a named scheme."""
    try:
        return COLOR_SCHEMES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {sorted(COLOR_SCHEMES)}"
        ) from None
