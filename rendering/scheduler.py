from __future__ import annotations
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.350

_Call = Tuple[Tuple[Any, ...], Dict[str, Any]]


class DrawScheduler:
    """
    Leading-edge throttle with a trailing call.

      - The first request in a quiet period runs immediately and opens an
        interval.
      - Requests inside the interval only replace the retained arguments.
      - When the interval expires and something was retained, one more run
        happens with the latest arguments and a new interval opens.

    At most one run starts per interval and suppressed requests are never
    replayed individually. The timer factory follows threading.Timer's
    signature so tests can drive expiry by hand.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        interval: float = DEFAULT_INTERVAL,
        *,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[..., Any] = threading.Timer,
        name: str = "draw",
    ) -> None:
        if interval < 0:
            raise ValueError("Throttle interval must not be negative.")
        self.fn = fn
        self.interval = float(interval)
        self.name = name
        self._clock = clock
        self._timer_factory = timer_factory

        self._lock = threading.Lock()
        self._timer = None
        self._window = 0
        self._pending: Optional[_Call] = None
        self._last_run: Optional[float] = None
        self._runs = 0
        self._suppressed = 0

    # ---- State ----------------------------------------------------------

    @property
    def pending(self) -> Optional[_Call]:
        with self._lock:
            return self._pending

    @property
    def last_run(self) -> Optional[float]:
        return self._last_run

    @property
    def runs(self) -> int:
        return self._runs

    @property
    def suppressed(self) -> int:
        return self._suppressed

    @property
    def active(self) -> bool:
        """True while an interval is open."""
        with self._lock:
            return self._timer is not None

    # ---- Public API -----------------------------------------------------

    def request(self, *args: Any, **kwargs: Any) -> bool:
        """
        Ask for a run. Returns True if it ran immediately, False if the
        arguments were retained for the end of the current interval.
        """
        with self._lock:
            if self._timer is not None:
                self._pending = (args, kwargs)
                self._suppressed += 1
                return False
            self._start_window()
        self._invoke(args, kwargs)
        return True

    __call__ = request

    def flush(self) -> bool:
        """Run the retained request now instead of waiting for expiry."""
        with self._lock:
            call, self._pending = self._pending, None
            self._stop_timer()
            if call is None:
                return False
            self._start_window()
        self._invoke(*call)
        return True

    def cancel(self) -> None:
        """Drop the retained request and close the current interval."""
        with self._lock:
            self._pending = None
            self._stop_timer()

    # ---- Internals ------------------------------------------------------

    def _start_window(self) -> None:
        self._last_run = self._clock()
        self._runs += 1
        self._window += 1
        timer = self._timer_factory(self.interval, self._expire, args=(self._window,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._window += 1

    def _expire(self, window: int) -> None:
        with self._lock:
            if window != self._window:
                return
            self._timer = None
            call, self._pending = self._pending, None
            if call is None:
                return
            self._start_window()
        try:
            self._invoke(*call)
        except Exception:
            logger.exception("[DrawScheduler:%s] trailing run failed", self.name)

    def _invoke(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        self.fn(*args, **kwargs)
