from enum import Enum, auto

class FractalMode(Enum):
    MANDELBROT = auto()
    JULIA = auto()

class PaletteChoice(Enum):
    GRAYSCALE = auto()
    COLOR = auto()

class RenderTarget(Enum):
    MANDELBROT = "mandelbrot"
    JULIA = "julia"
