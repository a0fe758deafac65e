"""Render session controller with cancellation, resize handling and event history."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ripdraw_protocol import Decoder, DrawingState
from ripdraw_protocol.models import Command, DecodeStats
from ripdraw_renderer import FloodFillLimits, RasterSurface

from .logging_setup import get_logger
from .playback import PlaybackScheduler, PlaybackSession, Timer


logger = get_logger("controller")


@dataclass
class RenderStatus:
    rendering: bool = False
    width: int = 0
    height: int = 0
    sessions_started: int = 0
    commands_total: int = 0
    commands_executed: int = 0
    progress: float = 0.0
    dropped_commands: int = 0
    unknown_opcodes: int = 0
    last_error: str | None = None


class RenderController:
    """Owns at most one decode + playback session at a time.

    Each session decodes with its own fresh drawing state and draws onto a
    surface created for it alone; starting another session cancels the
    previous one before anything new is allocated.
    """

    def __init__(
        self,
        width: int = 640,
        height: int = 350,
        animate: bool = True,
        pixel_delay_ms: int = 1,
        stroke_delay_ms: int = 20,
        fill_limits: FloodFillLimits | None = None,
        timer: Timer | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.animate = animate

        self._scheduler = PlaybackScheduler(
            timer=timer,
            pixel_delay_ms=pixel_delay_ms,
            stroke_delay_ms=stroke_delay_ms,
            fill_limits=fill_limits,
        )
        self._status = RenderStatus(width=width, height=height)
        self._lock = threading.RLock()
        self._source: str | None = None
        self._surface: RasterSurface | None = None
        self._session: PlaybackSession | None = None
        self._commands: list[Command] = []
        self._events: list[dict[str, Any]] = []

    @property
    def status(self) -> RenderStatus:
        return self._status

    @property
    def surface(self) -> RasterSurface | None:
        return self._surface

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    @property
    def commands(self) -> list[Command]:
        return list(self._commands)

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "rendering": self._status.rendering,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]

    def render(self, source: str) -> PlaybackSession:
        with self._lock:
            self._cancel_locked("superseded")
            self._source = source

            decoder = Decoder(DrawingState())
            commands = decoder.decode(source)
            self._commands = commands
            self._surface = RasterSurface(self.width, self.height)
            self._apply_decode_stats(decoder.stats)

            self._status.sessions_started += 1
            self._status.rendering = True
            self._status.commands_total = len(commands)
            self._status.commands_executed = 0
            self._status.progress = 0.0
            self._status.last_error = None
            self._log_event(
                "render_start",
                commands=len(commands),
                dropped=decoder.stats.dropped,
                width=self.width,
                height=self.height,
            )
            logger.info(
                "render started: %d commands on %dx%d",
                len(commands),
                self.width,
                self.height,
                extra={"event": "render_start"},
            )

            if self.animate:
                session = self._scheduler.start(
                    commands, self._surface, on_progress=self._on_progress, on_complete=self._on_complete
                )
            else:
                session = self._scheduler.run_immediate(commands, self._surface, on_progress=self._on_progress)
                if session.completed:
                    self._on_complete(session)
            self._session = session
            self._check_error(session)
            return session

    def resize(self, width: int, height: int) -> PlaybackSession | None:
        with self._lock:
            if width <= 0 or height <= 0:
                raise ValueError("Surface dimensions must be positive")
            self._cancel_locked("resize")
            self.width = width
            self.height = height
            self._status.width = width
            self._status.height = height
            self._log_event("resize", width=width, height=height)
            if self._source is None:
                return None
            return self.render(self._source)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked("cancel")

    def wait(self, timeout: float | None = None) -> bool:
        session = self._session
        if session is None:
            return True
        finished = session.wait(timeout)
        self._check_error(session)
        return finished

    def _cancel_locked(self, reason: str) -> None:
        session = self._session
        if session is None or session.finished:
            return
        self._scheduler.cancel()
        self._status.rendering = False
        self._log_event("render_cancel", reason=reason, executed=session.executed, total=session.total)

    def _apply_decode_stats(self, stats: DecodeStats) -> None:
        self._status.dropped_commands = stats.dropped
        self._status.unknown_opcodes = stats.unknown_opcodes

    def _on_progress(self, progress: float) -> None:
        self._status.progress = progress
        session = self._scheduler.session
        if session is not None:
            self._status.commands_executed = session.executed

    def _on_complete(self, session: PlaybackSession) -> None:
        self._status.rendering = False
        self._status.progress = session.progress
        self._status.commands_executed = session.executed
        self._log_event("render_complete", session=session.generation, executed=session.executed, total=session.total)
        logger.info(
            "render complete: %d commands",
            session.executed,
            extra={"event": "render_complete", "session": session.generation},
        )

    def _check_error(self, session: PlaybackSession) -> None:
        if session.error and self._status.last_error != session.error:
            self._status.rendering = False
            self._status.last_error = session.error
            self._log_event("render_error", session=session.generation, error=session.error, executed=session.executed)
            logger.error(
                "render failed after %d commands: %s",
                session.executed,
                session.error,
                extra={"event": "render_error", "session": session.generation},
            )
