"""Renderer package for rasterizing decoded drawing commands."""

from .flood_fill import flood_fill
from .models import FloodFillLimits, FrameBuffer
from .palette import EGA_PALETTE, list_palette, palette_hex, palette_rgb, palette_rgba
from .rasterizer import execute_command, has_raster_effect
from .surface import RasterSurface

__all__ = [
    "EGA_PALETTE",
    "FloodFillLimits",
    "FrameBuffer",
    "RasterSurface",
    "execute_command",
    "flood_fill",
    "has_raster_effect",
    "list_palette",
    "palette_hex",
    "palette_rgb",
    "palette_rgba",
]
