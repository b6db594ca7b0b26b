"""
Palette definitions for Mandelbrot rendering.

Each palette function takes the iteration cap N and returns a read-only
numpy uint32 array of N + 1 packed ARGB colors (0xAARRGGBB). Entry i
colors points that diverge at iteration i; entry N is the color of
points that never diverge.

To add a new palette:
1. Define a create_palette_xxx(max_iter) function that returns the array
2. Add it to the PALETTES dictionary at the bottom of this file
"""

import numpy as np


OPAQUE = 0xFF000000
IN_SET_GRAY = 0xFF000000  # Opaque black
IN_SET_RGB = 0xFF0000FF   # Opaque blue


def pack_argb(r, g, b, a=255):
    """Pack 8-bit channels into a single 0xAARRGGBB integer."""
    return (a & 0xFF) << 24 | (r & 0xFF) << 16 | (g & 0xFF) << 8 | (b & 0xFF)


def unpack_argb(color):
    """Split a packed color into an (a, r, g, b) tuple."""
    color = int(color)
    return (color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _clamp(value):
    return max(0, min(255, value))


def _freeze(colors):
    colors.flags.writeable = False
    return colors


def create_palette_grayscale(max_iter):
    """
    Grayscale palette: black -> white, saturating early.

    Brightness climbs by 255 / (N / 4) per iteration, so contrast is
    spent on the first quarter of the iteration range. Points in the
    set are opaque black.
    """
    colors = np.zeros(max_iter + 1, dtype=np.uint32)
    step = 255.0 / (max_iter / 4.0)
    for i in range(max_iter):
        v = int(min(i * step, 255))
        colors[i] = pack_argb(v, v, v)
    colors[max_iter] = IN_SET_GRAY
    return _freeze(colors)


def create_palette_rgb(max_iter):
    """
    Red -> Green -> Blue palette.

    Two linear segments: red fades into green over the first half of
    the iteration range, green fades into blue over the second half.
    Points in the set are solid blue.
    """
    colors = np.zeros(max_iter + 1, dtype=np.uint32)
    scale = (255 * 2) // max_iter
    half = max_iter // 2

    # going from Red to Green
    for i in range(half):
        colors[i] = pack_argb(_clamp(255 - i * scale), _clamp(i * scale), 0)

    # going from Green to Blue
    for i in range(half, max_iter):
        j = i - half
        colors[i] = pack_argb(0, _clamp(255 - j * scale), _clamp(j * scale))

    colors[max_iter] = IN_SET_RGB
    return _freeze(colors)


# Registry of all available palettes.
# Keys are display names, values are factory functions taking max_iter.
PALETTES = {
    'RGB': create_palette_rgb,
    'Grayscale': create_palette_grayscale,
}


def get_palette(name, max_iter):
    """
    Build a palette by name.

    Args:
        name: Key from PALETTES dictionary
        max_iter: Iteration cap; the palette has max_iter + 1 entries

    Returns:
        Read-only uint32 array of packed ARGB colors

    Raises:
        KeyError if name not found
    """
    return PALETTES[name](max_iter)


def get_default_palette(max_iter):
    """Get the default palette (RGB)."""
    return create_palette_rgb(max_iter)


def list_palette_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())
