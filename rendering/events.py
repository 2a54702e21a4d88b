from dataclasses import dataclass
import numpy as np
from typing import Optional


@dataclass(frozen=True)
class RasterImage:
    """
    A complete rendered frame. Pixels are (height, width, 3) uint8 rows,
    iterations and escaped are the per-pixel evaluator output.
    """
    pixels: np.ndarray
    iterations: np.ndarray
    escaped: np.ndarray
    width: int
    height: int
    generation: int = 0

    def color_at(self, i: int, j: int) -> str:
        r, g, b = (int(v) for v in self.pixels[j, i])
        return f"#{r:02x}{g:02x}{b:02x}"


@dataclass(frozen=True)
class FrameEvent:
    raster: RasterImage
    target: str
    seq: int        # generation / render sequence number
    elapsed: float = 0.0


@dataclass(frozen=True)
class LogEvent:
    message: str
    level: Optional[str] = None
