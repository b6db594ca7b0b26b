"""
Mandelbrot renderer: configuration, render results and background rendering.

The module handles:
- An immutable RenderConfig describing one render (size, iteration cap,
  palette, compute strategy)
- render_frame()/render(), which sweep the pixel grid, look up colors and
  time the whole computation
- Three interchangeable compute strategies producing identical buffers:
  sequential, parallel (Numba prange over rows) and tiled (row-range
  tiles on a thread pool, joined before the buffer is exposed)
- MandelbrotRenderer, which runs renders on a background thread so the
  window stays responsive and hands back finished RenderResults
"""

import numbers
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from .compute import (
    apply_palette,
    compute_escape_counts,
    compute_escape_counts_tile,
    warmup_jit,
)
from .palettes import get_palette


STRATEGIES = ('sequential', 'parallel', 'tiled')


@dataclass(frozen=True)
class RenderConfig:
    """Everything that determines the pixels of a render."""

    width: int
    height: int
    max_iterations: int
    palette: str = 'RGB'
    strategy: str = 'parallel'
    tile_rows: int = 64

    def __post_init__(self):
        for name in ('width', 'height', 'max_iterations', 'tile_rows'):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown strategy {self.strategy!r}, expected one of {', '.join(STRATEGIES)}"
            )


@dataclass(frozen=True)
class RenderResult:
    """
    A finished render.

    Attributes:
        pixels: Read-only flat uint32 ARGB buffer, index px + width * py
        iterations: Read-only (height, width) array of escape counts
        width, height: Buffer dimensions
        elapsed_ms: Wall-clock time of the sweep in milliseconds
    """

    pixels: np.ndarray
    iterations: np.ndarray
    width: int
    height: int
    elapsed_ms: int

    @property
    def message(self):
        """Diagnostic text shown over the image."""
        return f" done in {self.elapsed_ms}ms."


def _compute_tiled(width, height, max_iter, tile_rows):
    counts = np.zeros((height, width), dtype=np.int32)
    with ThreadPoolExecutor() as pool:
        futures = [
            pool.submit(compute_escape_counts_tile, counts, 0, start_y, width,
                        min(tile_rows, height - start_y), height, max_iter)
            for start_y in range(0, height, tile_rows)
        ]
        for future in futures:
            future.result()
    return counts


def compute_counts(config):
    """Compute the (height, width) escape counts using config.strategy."""
    if config.strategy == 'sequential':
        counts = np.zeros((config.height, config.width), dtype=np.int32)
        compute_escape_counts_tile(counts, 0, 0, config.width, config.height,
                                   config.height, config.max_iterations)
        return counts
    if config.strategy == 'tiled':
        return _compute_tiled(config.width, config.height, config.max_iterations,
                              config.tile_rows)
    return compute_escape_counts(config.width, config.height, config.max_iterations)


def render_frame(config, palette=None):
    """
    Render the Mandelbrot set for config.

    Args:
        config: RenderConfig
        palette: Prebuilt palette array (default: built from config.palette)

    Returns:
        RenderResult with read-only buffers.

    Raises:
        ValueError if the palette does not have max_iterations + 1 entries
    """
    if palette is None:
        palette = get_palette(config.palette, config.max_iterations)
    if len(palette) != config.max_iterations + 1:
        raise ValueError(
            f"Palette has {len(palette)} colors, expected {config.max_iterations + 1}"
        )

    start = time.perf_counter()
    counts = compute_counts(config)
    pixels = np.empty(config.width * config.height, dtype=np.uint32)
    apply_palette(counts, palette, pixels)
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    pixels.flags.writeable = False
    counts.flags.writeable = False
    return RenderResult(
        pixels=pixels,
        iterations=counts,
        width=config.width,
        height=config.height,
        elapsed_ms=elapsed_ms,
    )


def render(width, height, max_iterations, palette, strategy='parallel'):
    """
    Render and return (pixels, elapsed_ms).

    palette is either a palette array or a name from PALETTES.
    """
    if isinstance(palette, str):
        config = RenderConfig(width, height, max_iterations, palette=palette, strategy=strategy)
        result = render_frame(config)
    else:
        config = RenderConfig(width, height, max_iterations, strategy=strategy)
        result = render_frame(config, palette)
    return result.pixels, result.elapsed_ms


class MandelbrotRenderer:
    """
    Renders in the background and hands back finished results.

    Usage:
        renderer = MandelbrotRenderer(RenderConfig(1024, 1024, 100))
        renderer.compute_async()

        # In your game loop:
        result = renderer.get_result()
        if result is not None:
            display(result)

    The palette is built once per configuration. Every completed render
    produces a new RenderResult; nothing handed out is mutated later.
    An error raised by a background render is re-raised by get_result().

    The parallel kernels are compiled and first run on the constructing
    thread. Numba's threading layer must be started from the main thread,
    or the interpreter cannot shut down once a daemon thread started it.
    """

    def __init__(self, config):
        self.config = config
        self.palette = get_palette(config.palette, config.max_iterations)
        warmup_jit(self.palette)

        # Async computation state
        self.computing = False
        self.pending = False
        self.result = None
        self.error = None
        self.lock = threading.Lock()

    def render(self):
        """Render synchronously with the current configuration."""
        with self.lock:
            config, palette = self.config, self.palette
        return render_frame(config, palette)

    def compute_async(self):
        """
        Request a render on a background thread.

        Requests made while a render is running are coalesced into one
        follow-up render.
        """
        with self.lock:
            self.pending = True
            if not self.computing:
                self.computing = True
                thread = threading.Thread(target=self._compute_thread)
                thread.daemon = True
                thread.start()

    def _compute_thread(self):
        """Background thread for rendering."""
        while True:
            with self.lock:
                if not self.pending:
                    self.computing = False
                    break
                self.pending = False
                config, palette = self.config, self.palette

            try:
                result = render_frame(config, palette)
            except Exception as e:
                with self.lock:
                    self.error = e
                    self.pending = False
                    self.computing = False
                break

            with self.lock:
                self.result = result

    def get_result(self):
        """
        Get the latest render result if one finished since the last call.

        Returns:
            RenderResult, or None if nothing new is ready.

        Raises:
            Whatever the last background render raised (e.g. MemoryError)
        """
        with self.lock:
            error, self.error = self.error, None
            result, self.result = self.result, None
        if error is not None:
            raise error
        return result

    def is_busy(self):
        """True while a render is running or queued."""
        with self.lock:
            return self.computing or self.pending

    def wait(self, timeout=None):
        """Block until no render is running. Returns False on timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while self.is_busy():
            if deadline is not None and time.monotonic() > deadline:
                return False
            time.sleep(0.005)
        return True

    def update_settings(self, max_iterations=None, palette=None, strategy=None):
        """
        Update rendering settings.

        The palette is rebuilt when the iteration cap or palette name changes.

        Args:
            max_iterations: New iteration cap (or None to keep current)
            palette: New palette name (or None to keep current)
            strategy: New compute strategy (or None to keep current)

        Returns:
            True if any setting changed, False otherwise
        """
        with self.lock:
            old = self.config
            config = RenderConfig(
                width=old.width,
                height=old.height,
                max_iterations=max_iterations if max_iterations is not None else old.max_iterations,
                palette=palette if palette is not None else old.palette,
                strategy=strategy if strategy is not None else old.strategy,
                tile_rows=old.tile_rows,
            )
            if config == old:
                return False
            if (config.max_iterations, config.palette) != (old.max_iterations, old.palette):
                self.palette = get_palette(config.palette, config.max_iterations)
            self.config = config
        return True
