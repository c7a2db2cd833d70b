"""Fractional bond price notation.

US Treasury prices are quoted as ``<handle>-<32nds><eighths>``, for example
``99-16+``: 99 plus 16/32 plus 4/256. The eighths digit ranges over ``0..7``
and ``+`` stands for 4 (half a 32nd).
"""

from __future__ import annotations

import math

_HALF_32ND: str = "+"
_EIGHTHS_PER_32ND: int = 8
_TICKS_PER_POINT: int = 256


def decode_price(text: str) -> float:
    """Convert fractional price text to a numeric price.

    Raises ValueError on text that is not in ``<int>-<dd><e>`` form.
    A literal ``4`` eighths digit is accepted; encode_price writes it as ``+``.
    """
    raw = text.strip()
    handle, sep, fraction = raw.partition("-")
    if not sep:
        raise ValueError(f"Invalid price text: {text!r}")
    if not handle.isdigit() or len(fraction) != 3:
        raise ValueError(f"Invalid price text: {text!r}")

    thirty_seconds_txt = fraction[:2]
    eighths_txt = fraction[2]

    if not thirty_seconds_txt.isdigit():
        raise ValueError(f"Invalid price text: {text!r}")
    thirty_seconds = int(thirty_seconds_txt)
    if thirty_seconds >= 32:
        raise ValueError(f"32nds component out of range: {text!r}")

    if eighths_txt == _HALF_32ND:
        eighths = 4
    elif eighths_txt.isdigit() and int(eighths_txt) < _EIGHTHS_PER_32ND:
        eighths = int(eighths_txt)
    else:
        raise ValueError(f"Invalid eighths digit: {text!r}")

    return int(handle) + thirty_seconds / 32.0 + eighths / float(_TICKS_PER_POINT)


def encode_price(value: float) -> str:
    """Convert a numeric price to fractional price text.

    The fraction is truncated to the 1/256 tick below ``value``.
    """
    if value < 0 or math.isnan(value) or math.isinf(value):
        raise ValueError(f"Price must be a finite non-negative number: {value!r}")

    handle = math.floor(value)
    ticks = math.floor((value - handle) * _TICKS_PER_POINT)
    thirty_seconds = ticks // _EIGHTHS_PER_32ND
    eighths = ticks % _EIGHTHS_PER_32ND

    eighths_txt = _HALF_32ND if eighths == 4 else str(eighths)
    return f"{handle}-{thirty_seconds:02d}{eighths_txt}"
