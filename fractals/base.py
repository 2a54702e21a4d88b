from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple
from abc import ABC, abstractmethod

import numpy as np

from utils.enums import FractalMode

MAX_ITERATION = 16 * 4


@dataclass(frozen=True)
class ComplexPoint:
    """
    A point of the complex plane. X is the real part, Y the imaginary part.
    """
    x: float
    y: float


@dataclass(frozen=True)
class Viewport:
    """
    Holds the rectangular region of the complex plane mapped onto the raster.
    Start bounds must be strictly lower than end bounds.
    """
    real_start: float
    real_end: float
    imaginary_start: float
    imaginary_end: float

    @property
    def real_span(self) -> float:
        return self.real_end - self.real_start

    @property
    def imaginary_span(self) -> float:
        return self.imaginary_end - self.imaginary_start


@dataclass(frozen=True)
class Palette:
    """
    Ordered color table indexed cyclically by iteration count.
    Colors are '#rrggbb' strings; order is significant.
    """
    name: str
    colors: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def rgb(self) -> np.ndarray:
        table = np.zeros((len(self.colors), 3), dtype=np.uint8)
        for i, color in enumerate(self.colors):
            table[i] = hex_to_rgb(color)
        return table


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a '#rrggbb' color, got '{color}'.")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


@dataclass(frozen=True)
class RenderRequest:
    """
    Parameters for a single draw.
    Without a Julia parameter every pixel's point is both the orbit seed and the
    added constant (Mandelbrot mode). With one, the point is only the seed and
    the parameter is added on every iteration (Julia mode).
    Generation is stamped by the render service; newer requests get higher values.
    """
    viewport: Viewport
    palette: Palette
    julia: Optional[ComplexPoint] = None
    generation: int = 0

    @property
    def mode(self) -> FractalMode:
        return FractalMode.MANDELBROT if self.julia is None else FractalMode.JULIA


@dataclass
class RenderSettings:
    """
    Holds the rendering settings for a fractal.
    Max_iter is the hard cap on orbit iterations per pixel.
    """
    max_iter: int = MAX_ITERATION


class Fractal(ABC):
    """
    An abstract base class for fractal types.
    """
    name: str

    @abstractmethod
    def build_arg_values(self, request: RenderRequest,
                         settings: RenderSettings) -> Dict[str, Any]:
        ...

    @abstractmethod
    def get_kernel(self, backend_name: str) -> Dict[str, Any]:
        ...
