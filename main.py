import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from ui.view import FractalViewer
from utils.config import load_config
from utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mandelbrot and Julia set explorer")
    parser.add_argument("--config", type=Path, default=None, help="JSON settings file")
    parser.add_argument("--width", type=int, default=None, help="raster width in pixels")
    parser.add_argument("--height", type=int, default=None, help="raster height in pixels")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)
    if args.width:
        cfg.width = max(1, args.width)
    if args.height:
        cfg.height = max(1, args.height)
    configure_logging(args.log_level or cfg.log_level)
    logger.info("Starting explorer with a %dx%d raster", cfg.width, cfg.height)

    app = QApplication(sys.argv[:1])
    viewer = FractalViewer(cfg)
    viewer.show()
    QTimer.singleShot(0, viewer.render_fractal)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
