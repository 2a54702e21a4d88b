import numpy as np

from fractals.base import Palette
from coloring.base import ColoringStrategy


class CyclicPaletteColoring(ColoringStrategy):
    """
    color = palette[iterations mod len(palette)].
    Counts that differ by a multiple of the palette length share a color.
    """

    def apply(self, iter_buf: np.ndarray, palette: Palette) -> np.ndarray:
        table = palette.rgb
        idx = np.mod(iter_buf.astype(np.int64, copy=False), len(table))
        rgb = table[idx]
        return np.ascontiguousarray(rgb, dtype=np.uint8)

    def color_for(self, iterations: int, palette: Palette) -> str:
        return palette.colors[int(iterations) % len(palette.colors)]
