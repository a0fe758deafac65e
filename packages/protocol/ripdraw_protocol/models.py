"""Typed models for decoded drawing commands and drawing state."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


DEFAULT_FG_COLOR = 15
DEFAULT_BG_COLOR = 0
DEFAULT_FILL_STYLE = 1
DEFAULT_FILL_COLOR = 15


class CommandKind(str, Enum):
    SET_COLOR = "SetColor"
    LINE = "Line"
    RECT = "Rect"
    FILL_RECT = "FillRect"
    CIRCLE = "Circle"
    ELLIPSE = "Ellipse"
    PIXEL = "Pixel"
    MOVE_TO = "MoveTo"
    LINE_TO = "LineTo"
    POLYLINE = "Polyline"
    SET_FILL_STYLE = "SetFillStyle"
    FLOOD_FILL = "FloodFill"
    RESET = "Reset"
    DEFINE_WINDOW = "DefineWindow"


@dataclass
class DrawingState:
    """Mutable context threaded through a single decode pass."""

    fg_color: int = DEFAULT_FG_COLOR
    bg_color: int = DEFAULT_BG_COLOR
    fill_style: int = DEFAULT_FILL_STYLE
    fill_color: int = DEFAULT_FILL_COLOR
    cursor_x: int = 0
    cursor_y: int = 0

    def reset(self) -> None:
        self.fg_color = DEFAULT_FG_COLOR
        self.bg_color = DEFAULT_BG_COLOR
        self.fill_style = DEFAULT_FILL_STYLE
        self.fill_color = DEFAULT_FILL_COLOR
        self.cursor_x = 0
        self.cursor_y = 0


@dataclass(frozen=True)
class SetColor:
    kind: ClassVar[CommandKind] = CommandKind.SET_COLOR
    fg: int
    bg: int


@dataclass(frozen=True)
class Line:
    kind: ClassVar[CommandKind] = CommandKind.LINE
    x0: int
    y0: int
    x1: int
    y1: int
    color: int


@dataclass(frozen=True)
class Rect:
    kind: ClassVar[CommandKind] = CommandKind.RECT
    x0: int
    y0: int
    x1: int
    y1: int
    color: int


@dataclass(frozen=True)
class FillRect:
    kind: ClassVar[CommandKind] = CommandKind.FILL_RECT
    x0: int
    y0: int
    x1: int
    y1: int
    color: int


@dataclass(frozen=True)
class Circle:
    kind: ClassVar[CommandKind] = CommandKind.CIRCLE
    cx: int
    cy: int
    radius: int
    color: int


@dataclass(frozen=True)
class Ellipse:
    kind: ClassVar[CommandKind] = CommandKind.ELLIPSE
    cx: int
    cy: int
    start_angle: int
    end_angle: int
    rx: int
    ry: int
    color: int


@dataclass(frozen=True)
class Pixel:
    kind: ClassVar[CommandKind] = CommandKind.PIXEL
    x: int
    y: int
    color: int


@dataclass(frozen=True)
class MoveTo:
    kind: ClassVar[CommandKind] = CommandKind.MOVE_TO
    x: int
    y: int


@dataclass(frozen=True)
class LineTo:
    kind: ClassVar[CommandKind] = CommandKind.LINE_TO
    x0: int
    y0: int
    x1: int
    y1: int
    color: int


@dataclass(frozen=True)
class Polyline:
    kind: ClassVar[CommandKind] = CommandKind.POLYLINE
    points: tuple[tuple[int, int], ...]
    color: int


@dataclass(frozen=True)
class SetFillStyle:
    kind: ClassVar[CommandKind] = CommandKind.SET_FILL_STYLE
    style: int
    color: int


@dataclass(frozen=True)
class FloodFill:
    kind: ClassVar[CommandKind] = CommandKind.FLOOD_FILL
    x: int
    y: int
    border: int
    fill_color: int


@dataclass(frozen=True)
class Reset:
    kind: ClassVar[CommandKind] = CommandKind.RESET


@dataclass(frozen=True)
class DefineWindow:
    kind: ClassVar[CommandKind] = CommandKind.DEFINE_WINDOW
    x0: int
    y0: int
    x1: int
    y1: int


Command = Union[
    SetColor,
    Line,
    Rect,
    FillRect,
    Circle,
    Ellipse,
    Pixel,
    MoveTo,
    LineTo,
    Polyline,
    SetFillStyle,
    FloodFill,
    Reset,
    DefineWindow,
]


@dataclass
class DecodeStats:
    lines: int = 0
    skipped_lines: int = 0
    commands: int = 0
    dropped: int = 0
    unknown_opcodes: int = 0
    command_counts: dict[str, int] = field(default_factory=dict)


def command_to_dict(command: Command) -> dict[str, Any]:
    row: dict[str, Any] = {"type": command.kind.value}
    row.update(asdict(command))
    if "points" in row:
        row["points"] = [list(p) for p in row["points"]]
    return row
