"""Caller-side cleanup of generated protocol text before decoding."""

from __future__ import annotations

import re
from pathlib import Path


RESET_PREFIX = "|*"

_FENCE_OPEN = re.compile(r"```[a-z]*\n?")
_FENCE_ANY = re.compile(r"```")


def strip_code_fences(text: str) -> str:
    text = _FENCE_OPEN.sub("", text)
    text = _FENCE_ANY.sub("", text)
    return text.strip()


def ensure_reset_prefix(text: str) -> str:
    if text.startswith(RESET_PREFIX):
        return text
    return f"{RESET_PREFIX}\n{text}"


def prepare_source(raw: str) -> str:
    return ensure_reset_prefix(strip_code_fences(raw))


def read_source(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")
