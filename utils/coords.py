from numba import njit

from fractals.base import ComplexPoint


@njit(cache=True)
def pixel_to_complex(i, j, real_start, real_end, imag_start, imag_end,
                     width, height):
    x = real_start + (i / width) * (real_end - real_start)
    y = imag_start + (j / height) * (imag_end - imag_start)
    return x, y


def map_pixel(i, j, viewport, width, height):
    """
    Map pixel (i, j) of a width x height raster onto the viewport.
    Fractional pixel positions (e.g. pointer coordinates) are accepted.
    """
    x, y = pixel_to_complex(float(i), float(j),
                            float(viewport.real_start), float(viewport.real_end),
                            float(viewport.imaginary_start), float(viewport.imaginary_end),
                            int(width), int(height))
    return ComplexPoint(float(x), float(y))


def complex_to_pixel(point, viewport, width, height):
    i = (point.x - viewport.real_start) / viewport.real_span * width
    j = (point.y - viewport.imaginary_start) / viewport.imaginary_span * height
    return i, j


def label_to_raster(px, py, label_w, label_h, raster_w, raster_h):
    """Scale a position on a (possibly resized) display label to raster pixels."""
    sx = raster_w / max(1.0, float(label_w))
    sy = raster_h / max(1.0, float(label_h))
    return px * sx, py * sy
