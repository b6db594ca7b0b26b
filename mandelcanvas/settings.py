"""
Settings for the Mandelbrot canvas.

Values come from settings.json next to this file, layered over the
built-in DEFAULTS. A missing or malformed file is not fatal: a warning
is printed and the defaults are used.
"""

import json
import os

from .renderer import RenderConfig


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULTS = {
    'width': 1024,
    'height': 1024,
    'max_iterations': 100,
    'palette': 'RGB',
    'strategy': 'parallel',
    'tile_rows': 64,
    'initial_zoom': 0.5,
    'zoom_step': 0.1,
    'min_zoom': 0.1,
}


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: File to read (default: the package's settings.json)

    Returns:
        dict with every key of DEFAULTS. Unknown keys in the file are ignored.
    """
    settings = dict(DEFAULTS)
    settings_path = path or SETTINGS_PATH
    try:
        with open(settings_path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load {os.path.basename(settings_path)}: {e}")
        return settings

    if not isinstance(loaded, dict):
        print(f"Warning: Ignoring {os.path.basename(settings_path)}: expected a JSON object")
        return settings

    for key in DEFAULTS:
        if key in loaded:
            settings[key] = loaded[key]
    return settings


def config_from_settings(settings):
    """Build the immutable RenderConfig described by a settings dict."""
    return RenderConfig(
        width=int(settings['width']),
        height=int(settings['height']),
        max_iterations=int(settings['max_iterations']),
        palette=settings['palette'],
        strategy=settings['strategy'],
        tile_rows=int(settings['tile_rows']),
    )
