"""Opcode dispatch table.

Each entry declares how many parameter characters it needs and a pure
handler mapping ``(params, state)`` to the emitted command, the number of
characters consumed and the drawing-state delta. Handlers never mutate the
state they are given; the decoder applies the delta.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .base36 import decode_token, digit_value
from .models import (
    Circle,
    Command,
    DefineWindow,
    DrawingState,
    Ellipse,
    FillRect,
    FloodFill,
    Line,
    LineTo,
    MoveTo,
    Pixel,
    Polyline,
    Rect,
    Reset,
    SetColor,
    SetFillStyle,
)


COMMAND_INTRODUCERS = ("|", "!")


@dataclass(frozen=True)
class OpcodeResult:
    command: Command
    consumed: int
    state_delta: dict[str, int] = field(default_factory=dict)
    reset_state: bool = False


Handler = Callable[[str, DrawingState], OpcodeResult]


@dataclass(frozen=True)
class OpcodeSpec:
    opcode: str
    name: str
    required: int
    handler: Handler


def _coords(params: str, count: int) -> list[int]:
    return [decode_token(params[i * 2 : i * 2 + 2]) for i in range(count)]


def _set_color(params: str, state: DrawingState) -> OpcodeResult:
    fg = digit_value(params[0])
    bg = digit_value(params[1])
    return OpcodeResult(SetColor(fg=fg, bg=bg), 2, {"fg_color": fg, "bg_color": bg})


def _line(params: str, state: DrawingState) -> OpcodeResult:
    x0, y0, x1, y1 = _coords(params, 4)
    return OpcodeResult(Line(x0, y0, x1, y1, color=state.fg_color), 8)


def _rect(params: str, state: DrawingState) -> OpcodeResult:
    x0, y0, x1, y1 = _coords(params, 4)
    return OpcodeResult(Rect(x0, y0, x1, y1, color=state.fg_color), 8)


def _bar(params: str, state: DrawingState) -> OpcodeResult:
    x0, y0, x1, y1 = _coords(params, 4)
    return OpcodeResult(FillRect(x0, y0, x1, y1, color=state.fg_color), 8)


def _circle(params: str, state: DrawingState) -> OpcodeResult:
    cx, cy, radius = _coords(params, 3)
    return OpcodeResult(Circle(cx, cy, radius, color=state.fg_color), 6)


def _ellipse(params: str, state: DrawingState) -> OpcodeResult:
    cx, cy, sa, ea, rx = _coords(params, 5)
    # The y radius is optional and, like every window, may read into the next command.
    ry = decode_token(params[10:12]) if len(params) >= 12 else rx
    return OpcodeResult(Ellipse(cx, cy, sa, ea, rx, ry, color=state.fg_color), min(12, len(params)))


def _pixel(params: str, state: DrawingState) -> OpcodeResult:
    x, y = _coords(params, 2)
    return OpcodeResult(Pixel(x, y, color=state.fg_color), 4)


def _move_to(params: str, state: DrawingState) -> OpcodeResult:
    x, y = _coords(params, 2)
    return OpcodeResult(MoveTo(x, y), 4, {"cursor_x": x, "cursor_y": y})


def _line_to(params: str, state: DrawingState) -> OpcodeResult:
    x, y = _coords(params, 2)
    command = LineTo(state.cursor_x, state.cursor_y, x, y, color=state.fg_color)
    return OpcodeResult(command, 4, {"cursor_x": x, "cursor_y": y})


def _polyline(params: str, state: DrawingState) -> OpcodeResult:
    count = digit_value(params[0])
    points: list[tuple[int, int]] = []
    offset = 1
    while len(points) < count and offset + 4 <= len(params):
        points.append((decode_token(params[offset : offset + 2]), decode_token(params[offset + 2 : offset + 4])))
        offset += 4
    return OpcodeResult(Polyline(points=tuple(points), color=state.fg_color), offset)


def _fill_style(params: str, state: DrawingState) -> OpcodeResult:
    style = digit_value(params[0])
    color = digit_value(params[1])
    return OpcodeResult(SetFillStyle(style=style, color=color), 2, {"fill_style": style, "fill_color": color})


def _flood_fill(params: str, state: DrawingState) -> OpcodeResult:
    x, y = _coords(params, 2)
    border = digit_value(params[4])
    return OpcodeResult(FloodFill(x, y, border, fill_color=state.fill_color), 5)


def _reset(params: str, state: DrawingState) -> OpcodeResult:
    return OpcodeResult(Reset(), 0, reset_state=True)


def _define_window(params: str, state: DrawingState) -> OpcodeResult:
    x0, y0, x1, y1 = _coords(params, 4)
    return OpcodeResult(DefineWindow(x0, y0, x1, y1), 8)


OPCODES: dict[str, OpcodeSpec] = {
    spec.opcode: spec
    for spec in (
        OpcodeSpec("c", "color", 2, _set_color),
        OpcodeSpec("L", "line", 8, _line),
        OpcodeSpec("R", "rectangle", 8, _rect),
        OpcodeSpec("B", "bar", 8, _bar),
        OpcodeSpec("C", "circle", 6, _circle),
        OpcodeSpec("O", "oval", 10, _ellipse),
        OpcodeSpec("X", "pixel", 4, _pixel),
        OpcodeSpec("m", "move", 4, _move_to),
        OpcodeSpec("l", "line_to", 4, _line_to),
        OpcodeSpec("P", "polyline", 1, _polyline),
        OpcodeSpec("S", "fill_style", 2, _fill_style),
        OpcodeSpec("F", "flood_fill", 5, _flood_fill),
        OpcodeSpec("*", "reset", 0, _reset),
        OpcodeSpec("w", "text_window", 8, _define_window),
    )
}


def get_opcode(opcode: str) -> OpcodeSpec | None:
    return OPCODES.get(opcode)
