from typing import NamedTuple, Optional

from fractals.base import ComplexPoint, MAX_ITERATION
from fractals.validation import validate_max_iter
from kernel_sources.cpu.escape_time import escape_time


class EscapeResult(NamedTuple):
    iterations: int
    escaped: bool


def evaluate(seed: ComplexPoint, constant: Optional[ComplexPoint] = None,
             max_iter: int = MAX_ITERATION) -> EscapeResult:
    """
    Evaluate a single orbit. Without a constant the seed is used for both,
    which is the Mandelbrot case. Raises InvalidParameter for caps below 2.
    """
    validate_max_iter(max_iter)
    c = seed if constant is None else constant
    n, esc = escape_time(float(seed.x), float(seed.y),
                         float(c.x), float(c.y), int(max_iter))
    return EscapeResult(int(n), bool(esc))
