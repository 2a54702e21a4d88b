import pytest

from kernel_sources import iter_registry, list_kernels, load_kernel, register_kernel
from kernel_sources.cpu.escape_time import ARG_ORDER


@pytest.mark.parametrize("fractal", ["mandelbrot", "julia"])
def test_cpu_kernels_are_registered(fractal):
    meta = load_kernel("cpu", fractal, "escape_time")
    assert callable(meta["func"])
    assert meta["arg_order"] == ARG_ORDER
    assert list_kernels(fractal, "CPU") == ["escape_time"]


def test_unknown_kernel_raises_key_error():
    with pytest.raises(KeyError):
        load_kernel("CPU", "burning_ship", "escape_time")
    assert list_kernels("burning_ship", "CPU") == []


def test_incomplete_metadata_is_rejected():
    register_kernel("broken", "escape_time", "CPU", func=None, arg_order=["x"])
    try:
        with pytest.raises(KeyError):
            load_kernel("CPU", "broken", "escape_time")
    finally:
        iter_registry().pop("broken")
