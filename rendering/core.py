from __future__ import annotations
import logging
from typing import Callable, Optional

from fractals.base import RenderRequest, RenderSettings
from fractals.mandelbrot import fractal_for
from fractals.validation import validate_max_iter, validate_request
from backend.model.base import Backend
from backend.model.cpu import CpuBackend
from coloring.base import ColoringStrategy
from coloring.cyclic import CyclicPaletteColoring
from rendering.events import RasterImage

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1221
DEFAULT_HEIGHT = 640


class Renderer:

    """
    Facade that binds together:
      - the render settings,
      - the backend running the escape-time kernels,
      - the coloring strategy.

    The whole frame is accumulated in memory buffers and handed back as one
    RasterImage; nothing is written pixel by pixel to a display surface.
    """

    def __init__(
        self,
        settings: Optional[RenderSettings] = None,
        *,
        backend: Optional[Backend] = None,
        coloring: Optional[ColoringStrategy] = None,
    ):
        self.settings = settings or RenderSettings()
        validate_max_iter(self.settings.max_iter)
        self.backend = backend or CpuBackend()
        self.coloring = coloring or CyclicPaletteColoring()

    def close(self) -> None:
        self.backend.close()

    # ----------------------------
    # Render entry point
    # ----------------------------

    def render(self, request: RenderRequest, width: int = DEFAULT_WIDTH,
               height: int = DEFAULT_HEIGHT, *,
               should_run: Optional[Callable[[], bool]] = None) -> Optional[RasterImage]:
        """
        Render one full frame. should_run is asked right before the kernel
        launch; when it answers False nothing is computed and None is returned.
        """
        validate_request(request, width, height)
        validate_max_iter(self.settings.max_iter)

        fractal = fractal_for(request)
        self.backend.compile(fractal, self.settings)
        buffers = self.backend.render(fractal, request, self.settings,
                                      width, height, should_run=should_run)
        if buffers is None:
            logger.debug("Skipped %s frame (generation %d)", fractal.name,
                         request.generation)
            return None
        iterations, escaped = buffers
        pixels = self.coloring.apply(iterations, request.palette)
        logger.debug("Rendered %s frame %dx%d (generation %d)",
                     fractal.name, width, height, request.generation)
        return RasterImage(pixels=pixels, iterations=iterations,
                           escaped=escaped, width=int(width),
                           height=int(height),
                           generation=request.generation)
