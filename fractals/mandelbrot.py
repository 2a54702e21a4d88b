from dataclasses import dataclass
from typing import Dict, Any

from fractals.base import Fractal, RenderRequest, RenderSettings
from utils.enums import FractalMode
from kernel_sources import load_kernel


@dataclass
class MandelbrotFractal(Fractal):
    name: str = "mandelbrot"

    def build_arg_values(self, request: RenderRequest,
                         settings: RenderSettings) -> Dict[str, Any]:
        vp = request.viewport
        return {
            "real_start": vp.real_start,
            "real_end": vp.real_end,
            "imag_start": vp.imaginary_start,
            "imag_end": vp.imaginary_end,
            "cx": 0.0,
            "cy": 0.0,
            "max_iter": settings.max_iter,
        }

    def get_kernel(self, backend_name: str) -> Dict[str, Any]:
        return load_kernel(backend_name, self.name, "escape_time")


@dataclass
class JuliaFractal(MandelbrotFractal):
    name: str = "julia"

    def build_arg_values(self, request: RenderRequest,
                         settings: RenderSettings) -> Dict[str, Any]:
        if request.julia is None:
            raise ValueError("Julia rendering needs a fixed parameter.")
        args = super().build_arg_values(request, settings)
        args["cx"] = request.julia.x
        args["cy"] = request.julia.y
        return args


def fractal_for(request: RenderRequest) -> Fractal:
    if request.mode == FractalMode.JULIA:
        return JuliaFractal()
    return MandelbrotFractal()
