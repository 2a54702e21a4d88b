import argparse
import csv
import logging
import platform
import time
from pathlib import Path

from coloring.palettes import GRAYSCALE_PALETTE
from fractals.base import ComplexPoint, RenderRequest, Viewport
from rendering.core import Renderer
from utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

RESOLUTIONS = [(320, 200), (800, 600), (1221, 640), (1920, 1080)]
FRACTALS = ("mandelbrot", "julia")


def benchmark_renderer(renderer, request, width, height, runs=3):
    renderer.render(request, width, height)
    times = []
    for _ in range(runs):
        start = time.perf_counter()
        renderer.render(request, width, height)
        times.append(time.perf_counter() - start)
    avg_time = sum(times) / runs
    fps = 1.0 / avg_time if avg_time > 0 else 0
    return avg_time, fps


def write_csv(path, rows):
    """rows: (resolution, {fractal: (avg_time, fps)}) pairs."""
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['Hardware Summary'])
        writer.writerow(['CPU', platform.processor() or platform.machine()])
        writer.writerow([])
        headers = ['Resolution']
        for name in FRACTALS:
            headers += [f'{name} Time (s)', f'{name} FPS']
        writer.writerow(headers)
        for resolution, results in rows:
            row = [resolution]
            for name in FRACTALS:
                avg_time, fps = results[name]
                row += [f'{avg_time:.3f}', f'{fps:.2f}']
            writer.writerow(row)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Time full-frame renders on the CPU backend")
    parser.add_argument("--runs", type=int, default=3)
    parser.add_argument("--csv", type=Path, default=None, help="also write results to this CSV file")
    args = parser.parse_args(argv)
    configure_logging("INFO")

    renderer = Renderer()
    viewport = Viewport(-2.0, 2.0, -1.0, 1.0)
    requests = {
        "mandelbrot": RenderRequest(viewport, GRAYSCALE_PALETTE),
        "julia": RenderRequest(viewport, GRAYSCALE_PALETTE, julia=ComplexPoint(-0.8, 0.156)),
    }
    rows = []
    try:
        for width, height in RESOLUTIONS:
            results = {}
            for name, request in requests.items():
                avg_time, fps = benchmark_renderer(renderer, request, width, height, max(1, args.runs))
                results[name] = (avg_time, fps)
                logger.info("%s %dx%d average render time: %.3fs | FPS: %.2f",
                            name, width, height, avg_time, fps)
            rows.append((f'{width}x{height}', results))
    finally:
        renderer.close()

    if args.csv:
        write_csv(args.csv, rows)
        logger.info("Benchmark results saved to %s", args.csv)


if __name__ == '__main__':
    main()
