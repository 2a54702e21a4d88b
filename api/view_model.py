from __future__ import annotations
import logging
import threading
import time
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from coloring.palettes import select_palette
from fractals.base import ComplexPoint, Palette, RenderRequest, Viewport
from fractals.validation import validate_point, validate_viewport
from rendering.core import Renderer
from rendering.events import FrameEvent, LogEvent
from rendering.scheduler import DrawScheduler
from rendering.service import RenderService
from utils.config import ExplorerConfig
from utils.coords import label_to_raster, map_pixel
from utils.enums import RenderTarget

logger = logging.getLogger(__name__)

Listener = Callable[[str, object], None]


class FractalViewModel:
    """
    Explicit state behind the explorer controls.

    Holds the viewport, the palette toggle and the Julia parameter, validates
    every update, notifies listeners, and feeds one throttled render pipeline
    per display target. Viewport and palette changes redraw both targets; a
    new Julia parameter only redraws the Julia target.
    """

    def __init__(
        self,
        config: Optional[ExplorerConfig] = None,
        *,
        renderer_factory: Callable[[], Renderer] = Renderer,
        timer_factory: Callable[..., object] = threading.Timer,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or ExplorerConfig()
        self.width = self.config.width
        self.height = self.config.height

        viewport = self.config.viewport
        validate_viewport(viewport)
        julia = self.config.julia
        validate_point(julia, "julia")

        self._viewport: Viewport = viewport
        self._colors: bool = bool(self.config.colors)
        self._julia: ComplexPoint = julia
        self._listeners: List[Listener] = []

        self.services: Dict[RenderTarget, RenderService] = {}
        self.schedulers: Dict[RenderTarget, DrawScheduler] = {}
        for target in RenderTarget:
            service = RenderService(self.width, self.height, renderer_factory(),
                                    target=target.value)
            self.services[target] = service
            self.schedulers[target] = DrawScheduler(
                service.submit, self.config.throttle_seconds,
                clock=clock, timer_factory=timer_factory, name=target.value)

    # ---------- Callbacks ----------
    def on_frame(self, cb: Optional[Callable[[FrameEvent], None]]) -> None:
        for service in self.services.values():
            service.on_frame = cb

    def on_log(self, cb: Optional[Callable[[LogEvent], None]]) -> None:
        for service in self.services.values():
            service.on_log = cb

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self, field: str, value: object) -> None:
        for listener in list(self._listeners):
            listener(field, value)

    # ---------- State ----------
    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def colors(self) -> bool:
        return self._colors

    @property
    def palette(self) -> Palette:
        return select_palette(self._colors)

    @property
    def julia(self) -> ComplexPoint:
        return self._julia

    def set_viewport(self, viewport: Viewport) -> None:
        """Raises InvalidViewport/InvalidParameter and keeps the old state."""
        validate_viewport(viewport)
        if viewport == self._viewport:
            return
        self._viewport = viewport
        self._notify("viewport", viewport)
        self.draw(RenderTarget.MANDELBROT, RenderTarget.JULIA)

    def update_bounds(self, **bounds: float) -> None:
        """Change some of real_start, real_end, imaginary_start, imaginary_end."""
        self.set_viewport(replace(self._viewport, **bounds))

    def set_colors(self, colors: bool) -> None:
        colors = bool(colors)
        if colors == self._colors:
            return
        self._colors = colors
        self._notify("colors", colors)
        self.draw(RenderTarget.MANDELBROT, RenderTarget.JULIA)

    def set_julia(self, point: ComplexPoint) -> None:
        validate_point(point, "julia")
        if point == self._julia:
            return
        self._julia = point
        self._notify("julia", point)
        self.draw(RenderTarget.JULIA)

    def julia_from_pointer(self, px: float, py: float,
                           label_w: Optional[int] = None,
                           label_h: Optional[int] = None) -> ComplexPoint:
        """
        Translate a pointer position over the Julia display into the Julia
        parameter using the same mapping the renderer uses.
        """
        if label_w is not None and label_h is not None:
            px, py = label_to_raster(px, py, label_w, label_h, self.width, self.height)
        point = map_pixel(px, py, self._viewport, self.width, self.height)
        self.set_julia(point)
        return point

    # ---------- Rendering ----------
    def request_for(self, target: RenderTarget) -> RenderRequest:
        julia = self._julia if target == RenderTarget.JULIA else None
        return RenderRequest(self._viewport, self.palette, julia=julia)

    def draw(self, *targets: RenderTarget) -> None:
        for target in targets or tuple(RenderTarget):
            self.schedulers[target].request(self.request_for(target))

    def refresh(self) -> None:
        self.draw()

    def shutdown(self) -> None:
        for scheduler in self.schedulers.values():
            scheduler.cancel()
        for service in self.services.values():
            service.shutdown()
