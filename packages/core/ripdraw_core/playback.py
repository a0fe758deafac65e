"""Step-wise animated playback of decoded commands onto a raster surface."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from ripdraw_protocol.models import Command, CommandKind
from ripdraw_renderer import FloodFillLimits, RasterSurface, execute_command

from .logging_setup import get_logger


logger = get_logger("playback")

PIXEL_KINDS = frozenset({CommandKind.PIXEL})

ProgressCallback = Callable[[float], None]
CompleteCallback = Callable[["PlaybackSession"], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Timer = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay_s: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay_s, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass
class PlaybackSession:
    generation: int
    total: int
    executed: int = 0
    progress: float = 0.0
    completed: bool = False
    cancelled: bool = False
    error: str | None = None
    _done: threading.Event = field(default_factory=threading.Event, repr=False, compare=False)

    @property
    def finished(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._done.wait(timeout)


@dataclass
class _PlaybackRun:
    session: PlaybackSession
    commands: tuple[Command, ...]
    surface: RasterSurface
    on_progress: ProgressCallback | None = None
    on_complete: CompleteCallback | None = None


class PlaybackScheduler:
    """Replays commands one at a time with opcode-dependent pacing.

    Every run is tagged with a generation number. Starting a new run or
    cancelling bumps the generation, and each scheduled step compares its
    tag against the current generation under the scheduler lock before it
    touches the surface, so a superseded run never draws again.
    """

    def __init__(
        self,
        timer: Timer | None = None,
        pixel_delay_ms: int = 1,
        stroke_delay_ms: int = 20,
        fill_limits: FloodFillLimits | None = None,
    ) -> None:
        self._timer = timer or thread_timer
        self.pixel_delay_ms = pixel_delay_ms
        self.stroke_delay_ms = stroke_delay_ms
        self.fill_limits = fill_limits or FloodFillLimits()

        self._lock = threading.RLock()
        self._generation = 0
        self._run: _PlaybackRun | None = None
        self._pending: TimerHandle | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def session(self) -> PlaybackSession | None:
        return self._run.session if self._run else None

    def delay_for(self, command: Command) -> float:
        delay_ms = self.pixel_delay_ms if command.kind in PIXEL_KINDS else self.stroke_delay_ms
        return delay_ms / 1000.0

    def start(
        self,
        commands: Sequence[Command],
        surface: RasterSurface,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ) -> PlaybackSession:
        run = self._begin(commands, surface, on_progress, on_complete)
        self._step(run)
        return run.session

    def run_immediate(
        self,
        commands: Sequence[Command],
        surface: RasterSurface,
        on_progress: ProgressCallback | None = None,
    ) -> PlaybackSession:
        """Play every command back to back on the calling thread."""
        run = self._begin(commands, surface, on_progress, None)
        while self._advance(run) is not None:
            pass
        return run.session

    def cancel(self) -> None:
        with self._lock:
            self._invalidate()

    def _begin(
        self,
        commands: Sequence[Command],
        surface: RasterSurface,
        on_progress: ProgressCallback | None,
        on_complete: CompleteCallback | None,
    ) -> _PlaybackRun:
        with self._lock:
            self._invalidate()
            session = PlaybackSession(generation=self._generation, total=len(commands))
            run = _PlaybackRun(
                session=session,
                commands=tuple(commands),
                surface=surface,
                on_progress=on_progress,
                on_complete=on_complete,
            )
            self._run = run
            logger.debug(
                "playback started generation=%d total=%d",
                session.generation,
                session.total,
                extra={"session": session.generation},
            )
            return run

    def _invalidate(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        run = self._run
        if run is not None and not run.session.finished:
            run.session.cancelled = True
            run.session._done.set()
            logger.debug(
                "playback cancelled generation=%d executed=%d/%d",
                run.session.generation,
                run.session.executed,
                run.session.total,
                extra={"session": run.session.generation},
            )

    def _step(self, run: _PlaybackRun) -> None:
        with self._lock:
            command = self._advance(run)
            if command is None:
                return
            self._pending = self._timer(self.delay_for(command), lambda: self._step(run))

    def _advance(self, run: _PlaybackRun) -> Command | None:
        """Execute the next command of ``run``; returns it while more remain."""
        with self._lock:
            session = run.session
            if session.generation != self._generation or session.finished:
                return None

            if session.executed >= session.total:
                # Only an empty command list gets here.
                self._complete(run)
                if run.on_progress is not None:
                    run.on_progress(session.progress)
                return None

            command = run.commands[session.executed]
            try:
                execute_command(run.surface, command, self.fill_limits)
            except Exception as exc:
                session.error = str(exc)
                session._done.set()
                logger.exception(
                    "playback step failed at %d/%d (%s)",
                    session.executed + 1,
                    session.total,
                    command.kind.value,
                    extra={"session": session.generation},
                )
                return None

            session.executed += 1
            session.progress = 100.0 * session.executed / session.total
            if run.on_progress is not None:
                run.on_progress(session.progress)

            if session.executed >= session.total:
                self._complete(run)
                return None
            return command

    def _complete(self, run: _PlaybackRun) -> None:
        session = run.session
        session.progress = 100.0
        session.completed = True
        self._pending = None
        session._done.set()
        logger.debug(
            "playback complete generation=%d total=%d",
            session.generation,
            session.total,
            extra={"session": session.generation},
        )
        if run.on_complete is not None:
            run.on_complete(session)
