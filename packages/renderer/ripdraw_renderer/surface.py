"""Raster surface backed by a Pillow RGBA image."""

from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from .models import FrameBuffer
from .palette import RGB, palette_rgb


class RasterSurface:
    """Fixed-size row-major RGBA pixel grid owned by one render session."""

    def __init__(self, width: int, height: int, background: int = 0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Surface dimensions must be positive")
        self.width = width
        self.height = height
        self.image = Image.new("RGBA", (width, height), palette_rgb(background) + (255,))
        self.draw = ImageDraw.Draw(self.image)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self, rgb: RGB) -> None:
        self.draw.rectangle((0, 0, self.width - 1, self.height - 1), fill=rgb + (255,))

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        return self.image.getpixel((x, y))

    def pixels(self) -> np.ndarray:
        """Writable ``(height, width, 4)`` uint8 copy of the pixel memory."""
        return np.array(self.image, dtype=np.uint8)

    def commit(self, pixels: np.ndarray) -> None:
        if pixels.shape != (self.height, self.width, 4):
            raise ValueError(f"Pixel array must have shape {(self.height, self.width, 4)}")
        self.image.paste(Image.fromarray(pixels))

    def to_bytes(self) -> bytes:
        return self.image.tobytes()

    def snapshot(self) -> FrameBuffer:
        return FrameBuffer(width=self.width, height=self.height, pixel_format="RGBA", bytes=self.to_bytes())

    def to_png_bytes(self) -> bytes:
        buf = BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    def save_png(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_png_bytes())
        return path

    def preview_data_url(self) -> str:
        b64 = base64.b64encode(self.to_png_bytes()).decode("ascii")
        return f"data:image/png;base64,{b64}"
