"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_MAX_PENDING = 100_000
DEFAULT_TOLERANCE = 1


@dataclass(frozen=True)
class FloodFillLimits:
    max_pending: int = DEFAULT_MAX_PENDING
    tolerance: int = DEFAULT_TOLERANCE


@dataclass(frozen=True)
class FrameBuffer:
    width: int
    height: int
    pixel_format: str
    bytes: bytes
