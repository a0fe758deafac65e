"""Maps decoded commands onto raster surface draw calls."""

from __future__ import annotations

from typing import Callable

from ripdraw_protocol.models import (
    Circle,
    Command,
    CommandKind,
    Ellipse,
    FillRect,
    FloodFill,
    Line,
    LineTo,
    Pixel,
    Polyline,
    Rect,
)

from .flood_fill import flood_fill
from .models import FloodFillLimits
from .palette import palette_rgb, palette_rgba
from .surface import RasterSurface


def _ordered(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


def _draw_line(surface: RasterSurface, cmd: Line | LineTo, limits: FloodFillLimits) -> int:
    surface.draw.line([(cmd.x0, cmd.y0), (cmd.x1, cmd.y1)], fill=palette_rgba(cmd.color), width=1)
    return 1


def _draw_rect(surface: RasterSurface, cmd: Rect, limits: FloodFillLimits) -> int:
    x0, x1 = _ordered(cmd.x0, cmd.x1)
    y0, y1 = _ordered(cmd.y0, cmd.y1)
    surface.draw.rectangle((x0, y0, x1, y1), outline=palette_rgba(cmd.color), width=1)
    return 1


def _fill_rect(surface: RasterSurface, cmd: FillRect, limits: FloodFillLimits) -> int:
    # Spans [min, max) on both axes, so equal corners cover nothing.
    x0, x1 = _ordered(cmd.x0, cmd.x1)
    y0, y1 = _ordered(cmd.y0, cmd.y1)
    if x1 == x0 or y1 == y0:
        return 0
    surface.draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=palette_rgba(cmd.color))
    return 1


def _draw_circle(surface: RasterSurface, cmd: Circle, limits: FloodFillLimits) -> int:
    r = cmd.radius
    surface.draw.ellipse((cmd.cx - r, cmd.cy - r, cmd.cx + r, cmd.cy + r), outline=palette_rgba(cmd.color), width=1)
    return 1


def _draw_ellipse(surface: RasterSurface, cmd: Ellipse, limits: FloodFillLimits) -> int:
    # Start/end angles are carried on the command but the full outline is drawn.
    box = (cmd.cx - cmd.rx, cmd.cy - cmd.ry, cmd.cx + cmd.rx, cmd.cy + cmd.ry)
    surface.draw.ellipse(box, outline=palette_rgba(cmd.color), width=1)
    return 1


def _draw_pixel(surface: RasterSurface, cmd: Pixel, limits: FloodFillLimits) -> int:
    if not surface.in_bounds(cmd.x, cmd.y):
        return 0
    surface.draw.point((cmd.x, cmd.y), fill=palette_rgba(cmd.color))
    return 1


def _draw_polyline(surface: RasterSurface, cmd: Polyline, limits: FloodFillLimits) -> int:
    if len(cmd.points) < 2:
        return 0
    surface.draw.line(list(cmd.points), fill=palette_rgba(cmd.color), width=1)
    return 1


def _flood_fill(surface: RasterSurface, cmd: FloodFill, limits: FloodFillLimits) -> int:
    return flood_fill(surface, cmd.x, cmd.y, palette_rgb(cmd.fill_color), limits)


def _reset(surface: RasterSurface, cmd: Command, limits: FloodFillLimits) -> int:
    surface.clear(palette_rgb(0))
    return 1


_DRAWERS: dict[CommandKind, Callable[..., int]] = {
    CommandKind.LINE: _draw_line,
    CommandKind.LINE_TO: _draw_line,
    CommandKind.RECT: _draw_rect,
    CommandKind.FILL_RECT: _fill_rect,
    CommandKind.CIRCLE: _draw_circle,
    CommandKind.ELLIPSE: _draw_ellipse,
    CommandKind.PIXEL: _draw_pixel,
    CommandKind.POLYLINE: _draw_polyline,
    CommandKind.FLOOD_FILL: _flood_fill,
    CommandKind.RESET: _reset,
}


def has_raster_effect(command: Command) -> bool:
    return command.kind in _DRAWERS


def execute_command(surface: RasterSurface, command: Command, fill_limits: FloodFillLimits | None = None) -> int:
    """Draw one command onto ``surface``.

    Returns the number of draw operations issued, or for flood fills the
    number of pixels written. State-only commands return 0.
    """
    drawer = _DRAWERS.get(command.kind)
    if drawer is None:
        return 0
    return drawer(surface, command, fill_limits or FloodFillLimits())
