"""
Display side of the renderer: turning a RenderResult into pixels on screen.

The core never imports pygame. Anything with a show(result, zoom) method
can act as the display; PygameCanvas is the one used by the app.
"""

from typing import Protocol

import numpy as np
import pygame

from .renderer import RenderResult


TEXT_COLOR = (255, 255, 255)
TEXT_BOTTOM_MARGIN = 20


class FrameSink(Protocol):
    """Something that accepts a finished render and draws it."""

    def show(self, result: RenderResult, zoom: float) -> None:
        ...


def pixels_to_rgb(pixels, width, height):
    """
    Unpack a flat ARGB buffer into an RGB image.

    Args:
        pixels: uint32 array of length width * height, index px + width * py
        width, height: Image dimensions

    Returns:
        (height, width, 3) uint8 array; alpha is dropped.
    """
    packed = np.asarray(pixels, dtype=np.uint32).reshape(height, width)
    rgb = np.empty((height, width, 3), dtype=np.uint8)
    rgb[..., 0] = (packed >> 16) & 0xFF
    rgb[..., 1] = (packed >> 8) & 0xFF
    rgb[..., 2] = packed & 0xFF
    return rgb


def text_position(screen_size, text_size):
    """Top-left corner for text anchored at the bottom-right of the screen."""
    screen_w, screen_h = screen_size
    text_w, _ = text_size
    return screen_w - text_w, screen_h - TEXT_BOTTOM_MARGIN


def make_surface(result):
    """Create a pygame surface holding the rendered image."""
    rgb = pixels_to_rgb(result.pixels, result.width, result.height)
    return pygame.surfarray.make_surface(rgb.swapaxes(0, 1))


class PygameCanvas:
    """
    Draws render results onto a pygame screen.

    The image is scaled by the zoom factor around the top-left corner;
    zoom only stretches the image, it never adds detail. The timing
    message is drawn unscaled in the lower-right corner.
    """

    def __init__(self, screen, font=None):
        self.screen = screen
        self.font = font or pygame.font.Font(None, 20)
        self._source = None
        self._zoom = None
        self._scaled = None
        self._text = None

    def _prepare(self, result, zoom):
        """Rebuild the scaled image and text only when result or zoom changed."""
        if self._source is not result:
            surface = make_surface(result)
            self._text = self.font.render(result.message, True, TEXT_COLOR)
        elif self._zoom != zoom:
            surface = make_surface(result)
        else:
            return

        size = (max(1, int(result.width * zoom)), max(1, int(result.height * zoom)))
        self._scaled = pygame.transform.scale(surface, size)
        self._source = result
        self._zoom = zoom

    def show(self, result, zoom):
        self._prepare(result, zoom)
        self.screen.fill((0, 0, 0))
        self.screen.blit(self._scaled, (0, 0))
        self.screen.blit(self._text, text_position(self.screen.get_size(), self._text.get_size()))
