"""
Escape-time computation functions using Numba JIT compilation.

This module contains the performance-critical kernels of the renderer:
- Escape-time evaluation for a single point of the complex plane
- Pixel to complex-plane mapping for the fixed [-2, 2] x [-2, 2] view
- Full-grid and per-tile escape count computation
- Palette lookup into a flat packed-ARGB pixel buffer

The visible region is the square real in [-2, 2], imaginary in [-2, 2],
divided evenly by the pixel height. Row 0 is the top of the image
(imaginary +2).

Note on the divergence test: after each step the modulus is updated as
real + real + imag * imag rather than real * real + imag * imag. This
determines the shape of the rendered boundary and is kept as-is.
"""

import numpy as np
from numba import jit, prange


ESCAPE_MODULUS = 4.0


@jit(nopython=True, cache=True)
def escape_time(cx, cy, max_iter):
    """
    Count iterations of z -> z² + c before the orbit of (cx, cy) escapes.

    Args:
        cx, cy: Real and imaginary parts of c
        max_iter: Iteration cap

    Returns:
        Iteration count in [0, max_iter]. max_iter means no divergence.
    """
    x = 0.0
    y = 0.0
    modulus = cx * cx + cy * cy
    iteration = 0

    while modulus <= ESCAPE_MODULUS and iteration < max_iter:
        real = x * x - y * y + cx
        imag = 2 * x * y + cy
        modulus = real + real + imag * imag
        iteration += 1
        x = real
        y = imag

    return iteration


@jit(nopython=True, cache=True)
def pixel_to_complex(px, py, height):
    """Map pixel (px, py) to its (cx, cy) coordinate in the complex plane."""
    cx = (px * 4.0) / height - 2
    cy = 2 - (py * 4.0) / height
    return cx, cy


@jit(nopython=True, cache=True)
def _fill_row(result, py, start_x, compute_w, height, max_iter):
    for px in range(start_x, start_x + compute_w):
        cx, cy = pixel_to_complex(px, py, height)
        result[py, px] = escape_time(cx, cy, max_iter)


@jit(nopython=True, parallel=True, cache=True)
def compute_escape_counts(width, height, max_iter):
    """
    Compute escape counts for the whole pixel grid.

    Rows are distributed across threads with prange. Every pixel is
    independent, so the result does not depend on the scheduling.

    Args:
        width, height: Grid dimensions in pixels
        max_iter: Iteration cap

    Returns:
        2D int32 array of shape (height, width).
    """
    result = np.zeros((height, width), dtype=np.int32)
    for py in prange(height):
        _fill_row(result, py, 0, width, height, max_iter)
    return result


@jit(nopython=True, nogil=True, cache=True)
def compute_escape_counts_tile(result, start_x, start_y, compute_w, compute_h,
                               height, max_iter):
    """
    Compute escape counts for a rectangular tile, writing into result.

    Runs single-threaded without holding the GIL, so disjoint tiles can be
    computed concurrently from a thread pool. A tile covering the whole
    grid is the sequential sweep.

    Args:
        result: (height, width) int32 array, modified in place
        start_x, start_y: Top-left pixel of the tile
        compute_w, compute_h: Tile size in pixels
        height: Full grid height (sets the pixel scale)
        max_iter: Iteration cap
    """
    for py in range(start_y, start_y + compute_h):
        _fill_row(result, py, start_x, compute_w, height, max_iter)


@jit(nopython=True, parallel=True, cache=True)
def apply_palette(counts, palette, out):
    """
    Look up each escape count in the palette.

    Args:
        counts: 2D array of escape counts, shape (height, width)
        palette: uint32 array of packed ARGB colors, length max_iter + 1
        out: Flat uint32 buffer of length width * height (modified in place),
             indexed as px + width * py
    """
    height, width = counts.shape
    for py in prange(height):
        for px in range(width):
            out[px + width * py] = palette[counts[py, px]]


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real render.

    Args:
        palette: A palette array to use for warming up apply_palette
    """
    max_iter = len(palette) - 1
    counts = compute_escape_counts(4, 4, max_iter)
    compute_escape_counts_tile(np.zeros((4, 4), dtype=np.int32), 0, 0, 4, 4, 4, max_iter)
    apply_palette(counts, palette, np.zeros(16, dtype=np.uint32))
