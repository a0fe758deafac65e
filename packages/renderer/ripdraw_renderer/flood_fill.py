"""Seeded region fill over raster surface pixel memory."""

from __future__ import annotations

import logging

from .models import FloodFillLimits
from .palette import RGB
from .surface import RasterSurface


logger = logging.getLogger("ripdraw.renderer")


def flood_fill(
    surface: RasterSurface,
    x: int,
    y: int,
    rgb: RGB,
    limits: FloodFillLimits | None = None,
) -> int:
    """Fill the region around ``(x, y)`` matching the seed color; returns pixels written.

    Traversal is an explicit-stack depth-first walk over the four axis
    neighbours. A pixel belongs to the region when every RGB channel is
    within ``limits.tolerance`` of the seed color. Neighbours are only pushed
    while fewer than ``limits.max_pending`` entries are waiting, so very large
    regions may end before they are exhausted. All writes land on the surface
    in one commit.
    """
    limits = limits or FloodFillLimits()
    width, height = surface.width, surface.height
    if not surface.in_bounds(x, y):
        return 0

    pixels = surface.pixels()
    flat = memoryview(pixels).cast("B")
    seed = (y * width + x) * 4
    target = (flat[seed], flat[seed + 1], flat[seed + 2])
    if target == tuple(rgb):
        return 0

    tol = limits.tolerance
    fill = bytes((rgb[0], rgb[1], rgb[2], 255))
    visited = bytearray(width * height)

    stack = [(x, y)]
    written = 0
    capped = False
    while stack:
        cx, cy = stack.pop()
        if cx < 0 or cx >= width or cy < 0 or cy >= height:
            continue
        idx = cy * width + cx
        if visited[idx]:
            continue
        off = idx * 4
        if (
            abs(flat[off] - target[0]) > tol
            or abs(flat[off + 1] - target[1]) > tol
            or abs(flat[off + 2] - target[2]) > tol
        ):
            continue
        visited[idx] = 1
        flat[off : off + 4] = fill
        written += 1
        if len(stack) < limits.max_pending:
            stack.append((cx + 1, cy))
            stack.append((cx - 1, cy))
            stack.append((cx, cy + 1))
            stack.append((cx, cy - 1))
        else:
            capped = True

    if capped:
        logger.debug("flood fill at (%d, %d) hit pending cap %d", x, y, limits.max_pending)

    flat.release()
    surface.commit(pixels)
    return written
