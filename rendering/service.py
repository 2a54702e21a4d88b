from __future__ import annotations
import logging
import threading
import time
from dataclasses import replace
from typing import Callable, List, Optional

from fractals.base import RenderRequest
from fractals.validation import FractalParameterError, validate_request
from rendering.core import Renderer, DEFAULT_WIDTH, DEFAULT_HEIGHT
from rendering.events import FrameEvent, LogEvent, RasterImage

logger = logging.getLogger(__name__)


class RenderService:
    """
    UI-facing facade that owns:
      - the raster size of one display target,
      - worker threads for renders,
      - generation tokens,
      - event dispatch (frame/log).

    Every accepted request gets a new generation. A finished render is only
    delivered if its generation is still the latest one issued, so a slow,
    stale render can never replace a newer frame.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        renderer: Optional[Renderer] = None,
        *,
        target: str = "mandelbrot",
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.target = target
        self.renderer = renderer or Renderer()

        self._render_seq = 0
        self._seq_lock = threading.Lock()
        self._deliver_lock = threading.Lock()
        self._workers: List[threading.Thread] = []
        self._closed = False

        # Callbacks
        self.on_frame: Optional[Callable[[FrameEvent], None]] = None
        self.on_log: Optional[Callable[[LogEvent], None]] = None

    # ---------------------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------------------

    def set_image_size(self, width: int, height: int) -> None:
        self.width, self.height = int(width), int(height)

    @property
    def latest_generation(self) -> int:
        with self._seq_lock:
            return self._render_seq

    def is_current(self, generation: int) -> bool:
        with self._seq_lock:
            return generation == self._render_seq

    # ---------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------

    def submit(self, request: RenderRequest) -> Optional[int]:
        """
        Validate and start a render on a worker thread.
        Returns the generation assigned, or None when the request was rejected.
        """
        if self._closed:
            logger.debug("[RenderService:%s] closed, ignoring request", self.target)
            return None
        request = self._stamp(request)
        if request is None:
            return None

        worker = threading.Thread(target=self._run, args=(request,),
                                  name=f"render-{self.target}-{request.generation}",
                                  daemon=True)
        self._workers = [w for w in self._workers if w.is_alive()]
        self._workers.append(worker)
        worker.start()
        return request.generation

    def render_now(self, request: RenderRequest) -> Optional[RasterImage]:
        """Synchronous variant of submit(); delivers and returns the raster."""
        request = self._stamp(request)
        if request is None:
            return None
        return self._run(request)

    def wait(self, timeout: Optional[float] = None) -> None:
        """Join every outstanding worker."""
        for worker in list(self._workers):
            worker.join(timeout)
        self._workers = [w for w in self._workers if w.is_alive()]

    def shutdown(self) -> None:
        """Invalidate in-flight renders and release backend resources."""
        self._closed = True
        with self._seq_lock:
            self._render_seq += 1
        try:
            self.wait(timeout=1.0)
        finally:
            self.renderer.close()

    # ---------------------------------------------------------------------
    # Worker routines
    # ---------------------------------------------------------------------

    def _stamp(self, request: RenderRequest) -> Optional[RenderRequest]:
        try:
            validate_request(request, self.width, self.height)
        except FractalParameterError as e:
            logger.warning("[RenderService:%s] rejected request: %s", self.target, e)
            self._log(f"[RenderService] Invalid parameters: {e}", level="error")
            return None
        with self._seq_lock:
            self._render_seq += 1
            seq = self._render_seq
        return replace(request, generation=seq)

    def _run(self, request: RenderRequest) -> Optional[RasterImage]:
        seq = request.generation
        if not self.is_current(seq):
            logger.debug("[RenderService:%s] generation %d superseded before start", self.target, seq)
            return None

        start = time.perf_counter()
        try:
            raster = self.renderer.render(request, self.width, self.height,
                                          should_run=lambda: self.is_current(seq))
        except Exception as e:
            logger.exception("[RenderService:%s] render %d failed", self.target, seq)
            self._log(f"[RenderService] Render error: {e}", level="error")
            return None
        if raster is None:
            logger.debug("[RenderService:%s] generation %d superseded before launch", self.target, seq)
            return None
        elapsed = time.perf_counter() - start

        with self._deliver_lock:
            if not self.is_current(seq):
                logger.debug("[RenderService:%s] discarding stale generation %d", self.target, seq)
                return None
            if self.on_frame:
                self.on_frame(FrameEvent(raster, self.target, seq, elapsed))

        self._log(f"Render time: {round(elapsed, 3)}s")
        return raster

    def _log(self, message: str, level: Optional[str] = None) -> None:
        if self.on_log:
            self.on_log(LogEvent(message, level=level))
