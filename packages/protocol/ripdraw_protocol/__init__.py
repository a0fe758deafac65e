"""Protocol package for decoding RIPscrip-style vector command streams."""

from .base36 import MAX_TOKEN_VALUE, decode_token, digit_value, encode_token
from .decoder import Decoder, decode
from .models import (
    Circle,
    Command,
    CommandKind,
    DecodeStats,
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
    command_to_dict,
)
from .opcodes import OPCODES, OpcodeResult, OpcodeSpec

__all__ = [
    "Circle",
    "Command",
    "CommandKind",
    "DecodeStats",
    "Decoder",
    "DefineWindow",
    "DrawingState",
    "Ellipse",
    "FillRect",
    "FloodFill",
    "Line",
    "LineTo",
    "MAX_TOKEN_VALUE",
    "MoveTo",
    "OPCODES",
    "OpcodeResult",
    "OpcodeSpec",
    "Pixel",
    "Polyline",
    "Rect",
    "Reset",
    "SetColor",
    "SetFillStyle",
    "command_to_dict",
    "decode",
    "decode_token",
    "digit_value",
    "encode_token",
]
