from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple
import numpy as np
from fractals.base import Fractal, RenderRequest, RenderSettings

class Backend(ABC):
    """
    An abstract base class for fractal rendering backend.
    """
    name: str

    @abstractmethod
    def compile(self, fractal: Fractal, settings: RenderSettings) -> None: ...

    @abstractmethod
    def render(self, fractal: Fractal, request: RenderRequest,
               settings: RenderSettings, width: int,
               height: int, *,
               should_run: Optional[Callable[[], bool]] = None,
               ) -> Optional[Tuple[np.ndarray, np.ndarray]]: ...

    @abstractmethod
    def close(self) -> None: ...

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
