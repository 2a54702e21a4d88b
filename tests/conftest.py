import pytest

from coloring.palettes import GRAYSCALE_PALETTE
from fakes import FakeTimer
from fractals.base import ComplexPoint, RenderRequest, Viewport


@pytest.fixture
def viewport():
    return Viewport(-2.0, 2.0, -1.0, 1.0)


@pytest.fixture
def mandelbrot_request(viewport):
    return RenderRequest(viewport, GRAYSCALE_PALETTE)


@pytest.fixture
def julia_request(viewport):
    return RenderRequest(viewport, GRAYSCALE_PALETTE, julia=ComplexPoint(-0.8, 0.156))


@pytest.fixture
def timers():
    created = []

    def factory(interval, function, args=(), kwargs=None):
        timer = FakeTimer(interval, function, args, kwargs)
        created.append(timer)
        return timer

    factory.created = created
    return factory
