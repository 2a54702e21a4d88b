from __future__ import annotations
import math
import numbers
from typing import List, Optional

from fractals.base import ComplexPoint, Palette, RenderRequest, Viewport, hex_to_rgb


class FractalParameterError(ValueError):
    """Aggregated validation error(s) for render parameters."""


class InvalidViewport(FractalParameterError):
    """Degenerate or inverted viewport bounds."""


class InvalidParameter(FractalParameterError):
    """Non-finite coordinates, empty palettes or bad raster dimensions."""


def _raise(errors: List[str], exc_type) -> None:
    if errors:
        raise exc_type("Render parameters rejected:\n- " + "\n- ".join(errors))


def _finite_errors(names_values, where: str) -> List[str]:
    errors: List[str] = []
    for name, value in names_values:
        try:
            ok = math.isfinite(value)
        except TypeError:
            errors.append(f"{where}.{name}: expected a real number, got {type(value).__name__}.")
            continue
        if not ok:
            errors.append(f"{where}.{name}: value {value!r} is not finite.")
    return errors


def validate_viewport(vp: Viewport) -> None:
    """
    Raises InvalidParameter on non-finite bounds or spans and InvalidViewport
    on degenerate or inverted bounds.
    """
    _raise(_finite_errors([
        ("real_start", vp.real_start),
        ("real_end", vp.real_end),
        ("imaginary_start", vp.imaginary_start),
        ("imaginary_end", vp.imaginary_end),
    ], "viewport"), InvalidParameter)

    errors: List[str] = []
    if vp.real_end <= vp.real_start:
        errors.append(f"viewport: real_end ({vp.real_end}) must be greater than real_start ({vp.real_start}).")
    if vp.imaginary_end <= vp.imaginary_start:
        errors.append(f"viewport: imaginary_end ({vp.imaginary_end}) must be greater than "
                      f"imaginary_start ({vp.imaginary_start}).")
    _raise(errors, InvalidViewport)

    # ordered but astronomically wide bounds overflow the span
    _raise(_finite_errors([
        ("real_span", vp.real_span),
        ("imaginary_span", vp.imaginary_span),
    ], "viewport"), InvalidParameter)


def validate_point(point: ComplexPoint, where: str = "point") -> None:
    _raise(_finite_errors([("x", point.x), ("y", point.y)], where), InvalidParameter)


def validate_palette(palette: Palette) -> None:
    errors: List[str] = []
    if not palette.colors:
        errors.append(f"palette '{palette.name}': must contain at least one color.")
    for idx, color in enumerate(palette.colors):
        try:
            hex_to_rgb(color)
        except (ValueError, AttributeError):
            errors.append(f"palette '{palette.name}'[{idx}]: invalid color {color!r}.")
    _raise(errors, InvalidParameter)


def validate_max_iter(max_iter: int) -> None:
    """The loop always runs once, so caps below 2 cannot be honored."""
    if isinstance(max_iter, bool) or not isinstance(max_iter, numbers.Integral) or max_iter < 2:
        _raise([f"max_iter: expected an integer of at least 2, got {max_iter!r}."], InvalidParameter)


def validate_dimensions(width: int, height: int) -> None:
    errors: List[str] = []
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
            errors.append(f"raster {name}: expected a positive integer, got {value!r}.")
    _raise(errors, InvalidParameter)


def validate_request(request: RenderRequest, width: Optional[int] = None,
                     height: Optional[int] = None) -> None:
    """
    Validates everything a render needs. Raises before any pixel is computed,
    so an invalid request never produces a partial raster.
    """
    validate_viewport(request.viewport)
    validate_palette(request.palette)
    if request.julia is not None:
        validate_point(request.julia, "julia")
    if width is not None or height is not None:
        validate_dimensions(width, height)
