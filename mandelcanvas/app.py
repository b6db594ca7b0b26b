"""
Main application module for the Mandelbrot canvas.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Keyboard input ('+' / '-' zoom, ESC to quit)
- Requesting renders and swapping in finished results
"""

import pygame

from .display import PygameCanvas
from .renderer import MandelbrotRenderer
from .settings import DEFAULTS, load_settings, config_from_settings


CAPTION = "Mandelbrot Set - '+' / '-' to zoom, ESC to quit"

ZOOM_IN_KEYS = ('+',)
ZOOM_OUT_KEYS = ('-',)


def adjust_zoom(zoom, key, step=0.1, min_zoom=0.1):
    """
    Apply a zoom key press.

    Args:
        zoom: Current display scale
        key: Typed character
        step: Amount added or removed per key press
        min_zoom: Lower bound for the scale

    Returns:
        (new_zoom, changed)
    """
    if key in ZOOM_IN_KEYS:
        new_zoom = zoom + step
    elif key in ZOOM_OUT_KEYS:
        new_zoom = max(min_zoom, zoom - step)
    else:
        return zoom, False
    new_zoom = round(new_zoom, 6)
    return new_zoom, new_zoom != zoom


class MandelbrotApp:
    """
    Main application class for the Mandelbrot canvas.

    Handles the pygame window and event loop. Renders come from a
    MandelbrotRenderer; each zoom key press asks for a fresh render at
    the same resolution and the app swaps the result in when it is done.
    """

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings dict, layered over DEFAULTS
                (default: load_settings())
        """
        self.settings = dict(DEFAULTS, **settings) if settings else load_settings()
        self.config = config_from_settings(self.settings)
        self.zoom = float(self.settings['initial_zoom'])
        self.zoom_step = float(self.settings['zoom_step'])
        self.min_zoom = float(self.settings['min_zoom'])

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.canvas = None

        self.renderer = MandelbrotRenderer(self.config)
        self.current_result = None
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._initial_render()

        self.running = True
        while self.running:
            self._handle_events()
            self._check_render_result()
            self._draw()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.DOUBLEBUF
        )
        pygame.display.set_caption("Computing...")
        self.clock = pygame.time.Clock()
        self.canvas = PygameCanvas(self.screen)

    def _initial_render(self):
        """Render the first frame before showing anything."""
        self.current_result = self.renderer.render()
        print(f"Rendered {self.config.width}x{self.config.height}{self.current_result.message}")
        pygame.display.set_caption(CAPTION)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_ESCAPE:
            self.running = False
            return

        key = event.unicode
        if event.key == pygame.K_KP_PLUS:
            key = '+'
        elif event.key == pygame.K_KP_MINUS:
            key = '-'

        self.zoom, changed = adjust_zoom(self.zoom, key, self.zoom_step, self.min_zoom)
        if changed:
            self.request_render()

    def request_render(self):
        """Ask the renderer for a fresh frame."""
        self.renderer.compute_async()
        pygame.display.set_caption("Computing...")

    def _check_render_result(self):
        """Swap in a finished render, if any."""
        result = self.renderer.get_result()
        if result is not None:
            self.current_result = result
            pygame.display.set_caption(CAPTION)

    def _draw(self):
        """Draw the current frame."""
        if self.current_result is not None:
            self.canvas.show(self.current_result, self.zoom)
        pygame.display.flip()


def run(settings=None):
    """
    Run the Mandelbrot canvas.

    Args:
        settings: Settings dict (default: loaded from settings.json)
    """
    app = MandelbrotApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
    except MemoryError:
        pygame.quit()
        print(f"Fatal: not enough memory for a "
              f"{app.config.width}x{app.config.height} render")
        raise
