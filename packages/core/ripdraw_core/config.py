"""Persistent settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from ripdraw_renderer.models import DEFAULT_MAX_PENDING, DEFAULT_TOLERANCE, FloodFillLimits


CONFIG_VERSION = 2


@dataclass
class CanvasConfig:
    width: int = 640
    height: int = 350


@dataclass
class PlaybackConfig:
    animate: bool = True
    pixel_delay_ms: int = 1
    stroke_delay_ms: int = 20


@dataclass
class FillConfig:
    max_pending: int = DEFAULT_MAX_PENDING
    tolerance: int = DEFAULT_TOLERANCE

    def limits(self) -> FloodFillLimits:
        return FloodFillLimits(max_pending=self.max_pending, tolerance=self.tolerance)


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    max_bundle_mb: int = 20


@dataclass
class PerformanceConfig:
    cpu_percent_max: float = 50.0
    rss_mb_max: float = 300.0
    commands_per_s_min: float = 1000.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    fill: FillConfig = field(default_factory=FillConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "ripdraw"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "ripdraw"
    return Path.home() / ".config" / "ripdraw"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_canvas(cfg: AppConfig) -> None:
    cfg.canvas.width = max(1, min(4096, int(cfg.canvas.width)))
    cfg.canvas.height = max(1, min(4096, int(cfg.canvas.height)))


def _normalize_playback(cfg: AppConfig) -> None:
    cfg.playback.animate = bool(cfg.playback.animate)
    cfg.playback.pixel_delay_ms = max(0, min(1000, int(cfg.playback.pixel_delay_ms)))
    cfg.playback.stroke_delay_ms = max(0, min(5000, int(cfg.playback.stroke_delay_ms)))


def _normalize_fill(cfg: AppConfig) -> None:
    cfg.fill.max_pending = max(4, int(cfg.fill.max_pending))
    cfg.fill.tolerance = max(0, min(255, int(cfg.fill.tolerance)))


def _normalize_performance(cfg: AppConfig) -> None:
    cfg.performance.cpu_percent_max = float(max(1.0, cfg.performance.cpu_percent_max))
    cfg.performance.rss_mb_max = float(max(64.0, cfg.performance.rss_mb_max))
    cfg.performance.commands_per_s_min = float(max(0.0, cfg.performance.commands_per_s_min))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept canvas size and delays in one flat "render" section.
        render = dict(data.pop("render", {}) or {})
        canvas = dict(data.get("canvas", {}) or {})
        playback = dict(data.get("playback", {}) or {})
        for key in ("width", "height"):
            if key in render:
                canvas.setdefault(key, render[key])
        for key in ("animate", "pixel_delay_ms", "stroke_delay_ms"):
            if key in render:
                playback.setdefault(key, render[key])
        data["canvas"] = canvas
        data["playback"] = playback
        data.setdefault("fill", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        canvas=_merge(CanvasConfig, data.get("canvas", {})),
        playback=_merge(PlaybackConfig, data.get("playback", {})),
        fill=_merge(FillConfig, data.get("fill", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_canvas(cfg)
    _normalize_playback(cfg)
    _normalize_fill(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
