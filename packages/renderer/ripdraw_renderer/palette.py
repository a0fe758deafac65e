"""EGA 16-color palette."""

from __future__ import annotations

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

FALLBACK_INDEX = 15

EGA_PALETTE: tuple[RGB, ...] = (
    (0x00, 0x00, 0x00),  # black
    (0x00, 0x00, 0xAA),  # blue
    (0x00, 0xAA, 0x00),  # green
    (0x00, 0xAA, 0xAA),  # cyan
    (0xAA, 0x00, 0x00),  # red
    (0xAA, 0x00, 0xAA),  # magenta
    (0xAA, 0x55, 0x00),  # brown
    (0xAA, 0xAA, 0xAA),  # light gray
    (0x55, 0x55, 0x55),  # dark gray
    (0x55, 0x55, 0xFF),  # light blue
    (0x55, 0xFF, 0x55),  # light green
    (0x55, 0xFF, 0xFF),  # light cyan
    (0xFF, 0x55, 0x55),  # light red
    (0xFF, 0x55, 0xFF),  # light magenta
    (0xFF, 0xFF, 0x55),  # yellow
    (0xFF, 0xFF, 0xFF),  # white
)

COLOR_NAMES: tuple[str, ...] = (
    "Black",
    "Blue",
    "Green",
    "Cyan",
    "Red",
    "Magenta",
    "Brown",
    "LightGray",
    "DarkGray",
    "LightBlue",
    "LightGreen",
    "LightCyan",
    "LightRed",
    "LightMagenta",
    "Yellow",
    "White",
)


def palette_rgb(index: int) -> RGB:
    if 0 <= index < len(EGA_PALETTE):
        return EGA_PALETTE[index]
    return EGA_PALETTE[FALLBACK_INDEX]


def palette_rgba(index: int) -> RGBA:
    r, g, b = palette_rgb(index)
    return (r, g, b, 255)


def palette_hex(index: int) -> str:
    r, g, b = palette_rgb(index)
    return f"#{r:02X}{g:02X}{b:02X}"


def list_palette() -> list[dict[str, object]]:
    return [
        {"index": i, "name": COLOR_NAMES[i], "hex": palette_hex(i), "rgb": list(rgb)}
        for i, rgb in enumerate(EGA_PALETTE)
    ]
