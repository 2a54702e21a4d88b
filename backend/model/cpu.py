import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from fractals.base import (ComplexPoint, Fractal, Palette, RenderRequest,
                           RenderSettings, Viewport)
from backend.model.base import Backend

logger = logging.getLogger(__name__)


class CpuBackend(Backend):
    """
    Backend for CPU-based fractal rendering with numba kernels.
    Kernels are looked up once per fractal and JIT-warmed on a small grid.
    """
    name = "CPU"

    # numba's default workqueue threading layer rejects concurrent parallel launches
    _launch_lock = threading.Lock()

    def __init__(self):
        self._kernels: Dict[str, Dict[str, Any]] = {}

        # Warm up params
        self._wu_viewport = Viewport(-2.0, 1.0, -1.5, 1.5)
        self._wu_width = 64
        self._wu_height = 64
        self._wu_julia = ComplexPoint(-0.8, 0.156)

    def is_compiled(self, fractal: Fractal) -> bool:
        return fractal.name in self._kernels

    def compile(self, fractal: Fractal, settings: RenderSettings) -> None:
        if self.is_compiled(fractal):
            return
        self._kernels[fractal.name] = fractal.get_kernel(self.name)
        self._warmup(fractal, settings)

    def _warmup(self, fractal: Fractal, settings: RenderSettings) -> None:
        """
        Runs the kernel once on a small grid so numba compiles it before the
        first interactive render.
        """
        start = time.perf_counter()
        request = RenderRequest(self._wu_viewport, Palette("warmup", ("#000000",)),
                                julia=self._wu_julia if fractal.name == "julia" else None)
        self.render(fractal, request, settings, self._wu_width, self._wu_height)
        logger.debug("Warmed up %s kernel in %.3fs", fractal.name,
                     time.perf_counter() - start)

    def render(self, fractal: Fractal, request: RenderRequest,
               settings: RenderSettings, width: int,
               height: int, *,
               should_run: Optional[Callable[[], bool]] = None,
               ) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        meta = self._kernels.get(fractal.name)
        if meta is None:
            raise RuntimeError(f"Backend has not been compiled for '{fractal.name}' yet")

        scalars = fractal.build_arg_values(request, settings)
        iterations = np.zeros((int(height), int(width)), dtype=np.int32)
        escaped = np.zeros((int(height), int(width)), dtype=np.bool_)
        buffers = {"iterations": iterations, "escaped": escaped}

        ordered = []
        for name in meta["arg_order"]:
            if name in buffers:
                ordered.append(buffers[name])
            elif name == "max_iter":
                ordered.append(int(scalars[name]))
            else:
                ordered.append(float(scalars[name]))
        with self._launch_lock:
            # a request may be superseded while waiting for the lock
            if should_run is not None and not should_run():
                return None
            meta["func"](*ordered)
        return iterations, escaped

    def close(self) -> None:
        self._kernels.clear()
