import numpy as np
import pytest

from backend.model.cpu import CpuBackend
from coloring.palettes import COLOR_PALETTE, GRAYSCALE_PALETTE
from fractals.base import MAX_ITERATION, RenderRequest, RenderSettings, Viewport
from fractals.escape_time import evaluate
from fractals.mandelbrot import JuliaFractal, MandelbrotFractal, fractal_for
from fractals.validation import InvalidParameter, InvalidViewport
from rendering.core import Renderer
from utils.coords import map_pixel
from utils.enums import FractalMode


@pytest.fixture(scope="module")
def renderer():
    r = Renderer()
    yield r
    r.close()


def test_mandelbrot_frame(renderer, mandelbrot_request):
    raster = renderer.render(mandelbrot_request, 100, 100)

    assert raster.pixels.shape == (100, 100, 3)
    assert raster.iterations.shape == (100, 100)
    assert raster.width == 100 and raster.height == 100
    # (-2, -1) escapes on the first check
    assert raster.iterations[0, 0] == 2
    assert raster.escaped[0, 0]
    assert raster.color_at(0, 0) == "#222222"
    # pixel (50, 50) is the origin
    assert raster.iterations[50, 50] == MAX_ITERATION
    assert not raster.escaped[50, 50]
    assert raster.color_at(50, 50) == "#000000"


def test_grid_matches_single_point_evaluator(renderer, viewport, mandelbrot_request):
    raster = renderer.render(mandelbrot_request, 64, 48)
    for i, j in [(0, 0), (10, 7), (31, 24), (63, 47), (40, 30)]:
        n, escaped = evaluate(map_pixel(i, j, viewport, 64, 48))
        assert raster.iterations[j, i] == n
        assert raster.escaped[j, i] == escaped


def test_julia_frame_uses_parameter(renderer, viewport, julia_request, mandelbrot_request):
    julia = renderer.render(julia_request, 64, 48)
    mandel = renderer.render(mandelbrot_request, 64, 48)
    assert julia.pixels.shape == (48, 64, 3)
    assert not np.array_equal(julia.iterations, mandel.iterations)

    n, escaped = evaluate(map_pixel(20, 30, viewport, 64, 48), julia_request.julia)
    assert julia.iterations[30, 20] == n
    assert julia.escaped[30, 20] == escaped


def test_palette_only_changes_colors(renderer, viewport):
    gray = renderer.render(RenderRequest(viewport, GRAYSCALE_PALETTE), 32, 16)
    color = renderer.render(RenderRequest(viewport, COLOR_PALETTE), 32, 16)
    assert np.array_equal(gray.iterations, color.iterations)
    assert color.color_at(0, 0) == COLOR_PALETTE.colors[2]


def test_invalid_request_never_reaches_backend(viewport):
    class NoBackend:
        compiled = False

        def compile(self, fractal, settings):
            self.compiled = True

        def render(self, *args):
            raise AssertionError("backend must not be called")

        def close(self):
            pass

    backend = NoBackend()
    renderer = Renderer(backend=backend)
    with pytest.raises(InvalidViewport):
        renderer.render(RenderRequest(Viewport(2.0, -2.0, -1.0, 1.0), GRAYSCALE_PALETTE), 10, 10)
    assert not backend.compiled


def test_fractal_selection(mandelbrot_request, julia_request):
    assert mandelbrot_request.mode == FractalMode.MANDELBROT
    assert julia_request.mode == FractalMode.JULIA
    assert isinstance(fractal_for(mandelbrot_request), MandelbrotFractal)
    assert isinstance(fractal_for(julia_request), JuliaFractal)
    with pytest.raises(ValueError):
        JuliaFractal().build_arg_values(mandelbrot_request, RenderSettings())


def test_backend_requires_compile(mandelbrot_request):
    backend = CpuBackend()
    fractal = MandelbrotFractal()
    with pytest.raises(RuntimeError):
        backend.render(fractal, mandelbrot_request, RenderSettings(), 4, 4)
    backend.compile(fractal, RenderSettings())
    assert backend.is_compiled(fractal)
    iterations, escaped = backend.render(fractal, mandelbrot_request, RenderSettings(), 4, 4)
    assert iterations.dtype == np.int32 and escaped.dtype == np.bool_
    backend.close()
    assert not backend.is_compiled(fractal)


def test_corner_pixel_of_classic_view(renderer):
    request = RenderRequest(Viewport(-2.0, 1.0, -1.0, 1.0), GRAYSCALE_PALETTE)
    raster = renderer.render(request, 100, 100)
    assert raster.escaped[0, 0]
    assert raster.iterations[0, 0] < 5
    assert 1 <= raster.iterations.min() and raster.iterations.max() <= MAX_ITERATION
    # every pixel that stopped early escaped
    assert raster.escaped[raster.iterations < MAX_ITERATION].all()


def test_iteration_cap_is_validated(mandelbrot_request):
    with pytest.raises(InvalidParameter):
        Renderer(RenderSettings(max_iter=1))

    renderer = Renderer(RenderSettings(max_iter=2))
    raster = renderer.render(mandelbrot_request, 8, 8)
    assert raster.iterations.min() >= 1 and raster.iterations.max() <= 2

    renderer.settings.max_iter = 0
    with pytest.raises(InvalidParameter):
        renderer.render(mandelbrot_request, 8, 8)
    renderer.close()


def test_superseded_request_skips_kernel_launch(renderer, mandelbrot_request):
    assert renderer.render(mandelbrot_request, 16, 16, should_run=lambda: False) is None
    raster = renderer.render(mandelbrot_request, 16, 16, should_run=lambda: True)
    assert raster is not None and raster.iterations[0, 0] == 2


def test_backend_checks_should_run_before_launch(mandelbrot_request):
    backend = CpuBackend()
    fractal = MandelbrotFractal()
    backend.compile(fractal, RenderSettings())
    asked = []

    def should_run():
        asked.append(True)
        return False

    assert backend.render(fractal, mandelbrot_request, RenderSettings(), 4, 4,
                          should_run=should_run) is None
    assert asked == [True]
    backend.close()
