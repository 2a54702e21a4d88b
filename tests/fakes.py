import threading

import numpy as np

from rendering.events import RasterImage


class FakeTimer:
    """Stands in for threading.Timer; expiry is driven by calling fire()."""

    def __init__(self, interval, function, args=(), kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args, **self.kwargs)


class RecordingRenderer:
    """Renderer double returning a blank raster; can block on chosen generations."""

    def __init__(self, block_generations=(), fail=False):
        self.requests = []
        self.should_run = []
        self.skipped = []
        self.block_generations = set(block_generations)
        self.release = threading.Event()
        self.started = threading.Event()
        self.fail = fail
        self.closed = False
        self._lock = threading.Lock()

    def render(self, request, width, height, should_run=None):
        with self._lock:
            self.requests.append(request)
            self.should_run.append(should_run)
        if request.generation in self.block_generations:
            self.started.set()
            self.release.wait(5)
        if self.fail:
            raise RuntimeError("kernel exploded")
        if should_run is not None and not should_run():
            self.skipped.append(request.generation)
            return None
        return RasterImage(
            pixels=np.zeros((height, width, 3), dtype=np.uint8),
            iterations=np.ones((height, width), dtype=np.int32),
            escaped=np.zeros((height, width), dtype=np.bool_),
            width=width,
            height=height,
            generation=request.generation,
        )

    def close(self):
        self.closed = True
