from abc import ABC, abstractmethod
import numpy as np

from fractals.base import Palette

class ColoringStrategy(ABC):
    @abstractmethod
    def apply(self, iter_buf: np.ndarray, palette: Palette) -> np.ndarray:
        ...

    @abstractmethod
    def color_for(self, iterations: int, palette: Palette) -> str:
        ...
