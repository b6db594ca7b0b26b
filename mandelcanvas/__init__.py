"""
Mandelbrot Canvas Package

Renders the Mandelbrot set over the square [-2, 2] x [-2, 2] of the
complex plane into a packed ARGB pixel buffer, using Numba for the
JIT-compiled (and optionally parallel) pixel sweep and Pygame for display.

Quick Start:
    from mandelcanvas import render
    pixels, elapsed_ms = render(1024, 1024, 100, "RGB")

Or from command line:
    python -m mandelcanvas

Package Structure:
    - compute.py: JIT-compiled escape-time and pixel sweep kernels
    - palettes.py: Palette definitions (RGB, Grayscale)
    - renderer.py: Render configuration, results and background rendering
    - display.py: Pygame canvas that draws render results
    - settings.py: settings.json loading
    - app.py: Main application and event loop

Controls:
    - '+' / '-': Zoom the displayed image in/out
    - ESC: Quit
"""

from .renderer import (
    MandelbrotRenderer,
    RenderConfig,
    RenderResult,
    render,
    render_frame,
)
from .palettes import PALETTES, get_palette, list_palette_names
from .compute import escape_time, pixel_to_complex
from .app import run, MandelbrotApp

__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelbrotApp",
    "MandelbrotRenderer",
    "RenderConfig",
    "RenderResult",
    "render",
    "render_frame",
    "escape_time",
    "pixel_to_complex",
    "PALETTES",
    "get_palette",
    "list_palette_names",
]
