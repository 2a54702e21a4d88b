from numba import njit, prange

from kernel_sources.registry import register_kernel
from utils.coords import pixel_to_complex

BAILOUT = 4.0


@njit(cache=True)
def escape_time(zx, zy, cx, cy, max_iter):
    """
    Iterate z <- z^2 + c from seed (zx, zy).

    The count starts at 1 and grows once per iteration performed; the loop ends
    when |z|^2 of the iterate just squared exceeds BAILOUT or the count reaches
    max_iter. Returns (count, escaped).
    """
    n = 1
    d = 0.0
    while True:
        pow_x = zx * zx
        pow_y = zy * zy
        zy = 2.0 * zx * zy + cy
        zx = pow_x - pow_y + cx
        d = pow_x + pow_y
        n += 1
        if d > BAILOUT or n >= max_iter:
            break
    return n, d > BAILOUT


ARG_SCALARS = [
    "real_start", "real_end", "imag_start", "imag_end",
    "cx", "cy", "max_iter",
]
ARG_BUFFERS_OUT = ["iterations", "escaped"]

ARG_ORDER = ARG_SCALARS + ARG_BUFFERS_OUT


@njit(cache=True, parallel=True)
def _mandelbrot_grid(real_start, real_end, imag_start, imag_end,
                     cx, cy, max_iter,
                     iterations, escaped):
    # cx/cy are unused: every pixel's own point is the constant
    H, W = iterations.shape
    for j in prange(H):
        for i in range(W):
            x, y = pixel_to_complex(i, j, real_start, real_end,
                                    imag_start, imag_end, W, H)
            n, esc = escape_time(x, y, x, y, max_iter)
            iterations[j, i] = n
            escaped[j, i] = esc


@njit(cache=True, parallel=True)
def _julia_grid(real_start, real_end, imag_start, imag_end,
                cx, cy, max_iter,
                iterations, escaped):
    H, W = iterations.shape
    for j in prange(H):
        for i in range(W):
            x, y = pixel_to_complex(i, j, real_start, real_end,
                                    imag_start, imag_end, W, H)
            n, esc = escape_time(x, y, cx, cy, max_iter)
            iterations[j, i] = n
            escaped[j, i] = esc


register_kernel(
    fractal="mandelbrot",
    op_name="escape_time",
    backend="CPU",
    func=_mandelbrot_grid,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
)

register_kernel(
    fractal="julia",
    op_name="escape_time",
    backend="CPU",
    func=_julia_grid,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
)
