"""Core services for playback, render sessions, settings, and diagnostics."""

from .config import AppConfig, load_config, save_config
from .controller import RenderController, RenderStatus
from .diagnostics import DiagnosticsExporter, build_doctor_payload
from .performance import BudgetStatus, PerformanceController, PerformanceTargets
from .playback import PlaybackScheduler, PlaybackSession, thread_timer
from .source import ensure_reset_prefix, prepare_source, read_source, strip_code_fences

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "DiagnosticsExporter",
    "PerformanceController",
    "PerformanceTargets",
    "PlaybackScheduler",
    "PlaybackSession",
    "RenderController",
    "RenderStatus",
    "build_doctor_payload",
    "ensure_reset_prefix",
    "load_config",
    "prepare_source",
    "read_source",
    "save_config",
    "strip_code_fences",
    "thread_timer",
]
