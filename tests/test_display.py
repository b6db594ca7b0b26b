import numpy as np
import pygame
import pytest

from mandelcanvas.display import PygameCanvas, make_surface, pixels_to_rgb, text_position
from mandelcanvas.renderer import RenderConfig, render_frame


def test_pixels_to_rgb_unpacks_channels():
    pixels = np.array([0xFF102030, 0xFF405060, 0xFF708090, 0xFFA0B0C0], dtype=np.uint32)
    rgb = pixels_to_rgb(pixels, 2, 2)
    assert rgb.shape == (2, 2, 3)
    assert rgb.dtype == np.uint8
    assert rgb[0, 0].tolist() == [0x10, 0x20, 0x30]
    assert rgb[0, 1].tolist() == [0x40, 0x50, 0x60]
    assert rgb[1, 0].tolist() == [0x70, 0x80, 0x90]


def test_text_position_is_offset_by_text_width():
    assert text_position((1024, 1024), (90, 14)) == (934, 1004)


@pytest.fixture
def screen():
    pygame.init()
    surface = pygame.display.set_mode((200, 200))
    yield surface
    pygame.quit()


def test_make_surface_keeps_orientation(screen):
    result = render_frame(RenderConfig(width=16, height=16, max_iterations=10))
    surface = make_surface(result)
    assert surface.get_size() == (16, 16)
    # Top-left pixel is (-2, 2): escapes at once, pure red in the RGB palette
    assert tuple(surface.get_at((0, 0)))[:3] == (255, 0, 0)


def test_canvas_scales_image_by_zoom(screen):
    result = render_frame(RenderConfig(width=16, height=16, max_iterations=10))
    canvas = PygameCanvas(screen)
    canvas.show(result, 0.5)
    # Beyond the scaled image the screen stays black
    assert tuple(screen.get_at((12, 2)))[:3] == (0, 0, 0)
    assert tuple(screen.get_at((0, 0)))[:3] == (255, 0, 0)


def test_canvas_rescales_only_when_result_or_zoom_changes(screen):
    result = render_frame(RenderConfig(width=16, height=16, max_iterations=10))
    canvas = PygameCanvas(screen)

    canvas.show(result, 0.5)
    scaled = canvas._scaled
    canvas.show(result, 0.5)
    assert canvas._scaled is scaled

    canvas.show(result, 1.5)
    assert canvas._scaled is not scaled
    assert canvas._scaled.get_size() == (24, 24)

    other = render_frame(RenderConfig(width=16, height=16, max_iterations=10))
    rescaled = canvas._scaled
    canvas.show(other, 1.5)
    assert canvas._scaled is not rescaled
