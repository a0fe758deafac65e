"""Base-36 coordinate token codec."""

from __future__ import annotations


RADIX = 36
TOKEN_WIDTH = 2
MAX_TOKEN_VALUE = RADIX**TOKEN_WIDTH - 1

_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def digit_value(ch: str) -> int:
    """Value of one base-36 digit; characters outside 0-9/A-Z/a-z count as 0."""
    code = ord(ch)
    if 48 <= code <= 57:
        return code - 48
    if 65 <= code <= 90:
        return code - 55
    if 97 <= code <= 122:
        return code - 87
    return 0


def decode_token(chars: str) -> int:
    result = 0
    for ch in chars:
        result = result * RADIX + digit_value(ch)
    return result


def encode_token(value: int, width: int = TOKEN_WIDTH) -> str:
    if value < 0:
        raise ValueError("Token values must be non-negative")
    if value >= RADIX**width:
        raise ValueError(f"Value {value} does not fit in {width} base-36 digits")
    out = []
    for _ in range(width):
        value, rem = divmod(value, RADIX)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))
