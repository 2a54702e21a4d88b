"""Explorer settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from fractals.base import ComplexPoint, Viewport

logger = logging.getLogger(__name__)

CONFIG_ENV = "FRACTAL_EXPLORER_CONFIG"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ExplorerConfig:
    width: int = 1221
    height: int = 640
    throttle_ms: int = 350
    real_start: float = -2.0
    real_end: float = 2.0
    imaginary_start: float = -1.0
    imaginary_end: float = 1.0
    julia_x: float = -0.8
    julia_y: float = 0.156
    colors: bool = False
    log_level: str = "INFO"

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.real_start, self.real_end,
                        self.imaginary_start, self.imaginary_end)

    @property
    def julia(self) -> ComplexPoint:
        return ComplexPoint(self.julia_x, self.julia_y)

    @property
    def throttle_seconds(self) -> float:
        return self.throttle_ms / 1000.0


DEFAULT_CONFIG = ExplorerConfig()


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "fractal-explorer" / "config.json"


def _merge(raw: dict[str, Any]) -> ExplorerConfig:
    cfg = ExplorerConfig()
    for k, v in raw.items():
        if hasattr(cfg, k) and not isinstance(getattr(type(cfg), k, None), property):
            setattr(cfg, k, v)
        else:
            logger.debug("ignoring unknown config key %r", k)
    return cfg


def _finite_or(value: Any, default: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    return value if math.isfinite(value) else default


def _normalize(cfg: ExplorerConfig) -> None:
    defaults = DEFAULT_CONFIG
    try:
        cfg.width = max(1, int(cfg.width))
        cfg.height = max(1, int(cfg.height))
    except (TypeError, ValueError):
        cfg.width, cfg.height = defaults.width, defaults.height
    try:
        cfg.throttle_ms = max(0, int(cfg.throttle_ms))
    except (TypeError, ValueError):
        cfg.throttle_ms = defaults.throttle_ms

    for name in ("real_start", "real_end", "imaginary_start", "imaginary_end",
                 "julia_x", "julia_y"):
        setattr(cfg, name, _finite_or(getattr(cfg, name), getattr(defaults, name)))
    if cfg.real_end <= cfg.real_start or not math.isfinite(cfg.real_end - cfg.real_start):
        cfg.real_start, cfg.real_end = defaults.real_start, defaults.real_end
    if (cfg.imaginary_end <= cfg.imaginary_start
            or not math.isfinite(cfg.imaginary_end - cfg.imaginary_start)):
        cfg.imaginary_start, cfg.imaginary_end = defaults.imaginary_start, defaults.imaginary_end

    cfg.colors = bool(cfg.colors)
    level = str(cfg.log_level).upper()
    cfg.log_level = level if level in _LOG_LEVELS else defaults.log_level


def load_config(path: Path | None = None) -> ExplorerConfig:
    path = path or config_path()
    if not path.exists():
        return ExplorerConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("could not read config %s: %s", path, e)
        return ExplorerConfig()
    if not isinstance(raw, dict):
        logger.warning("config %s is not a JSON object, using defaults", path)
        return ExplorerConfig()

    cfg = _merge(raw)
    _normalize(cfg)
    return cfg


def save_config(cfg: ExplorerConfig, path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
