"""Conversion of msgpack setting values into typed Python values.

Each parser takes the current value and an incoming value. When the incoming
value has the wrong shape, an error is logged and the current value is kept.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_u64(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= U64_MAX


def _is_i64(value: Any) -> bool:
    return _is_int(value) and I64_MIN <= value <= I64_MAX


def _wrap_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def parse_float(current: float, value: Any) -> float:
    """Accept floats and integers."""
    if isinstance(value, float):
        return value
    if _is_i64(value) or _is_u64(value):
        return float(value)
    logger.error("Setting expected an f32, but received %r", value)
    return current


def parse_u64(current: int, value: Any) -> int:
    """Accept unsigned 64-bit integers."""
    if _is_u64(value):
        return value
    logger.error("Setting expected a u64, but received %r", value)
    return current


def parse_u32(current: int, value: Any) -> int:
    """Accept unsigned integers, truncated to 32 bits."""
    if _is_u64(value):
        return value & 0xFFFFFFFF
    logger.error("Setting expected a u32, but received %r", value)
    return current


def parse_i32(current: int, value: Any) -> int:
    """Accept signed 64-bit integers, truncated to signed 32 bits."""
    if _is_i64(value):
        return _wrap_signed(value, 32)
    logger.error("Setting expected an i32, but received %r", value)
    return current


def parse_str(current: str, value: Any) -> str:
    """Accept strings."""
    if isinstance(value, str):
        return value
    logger.error("Setting expected a string, but received %r", value)
    return current


def parse_bool(current: bool, value: Any) -> bool:
    """Accept booleans, or unsigned integers where nonzero means true."""
    if isinstance(value, bool):
        return value
    if _is_u64(value):
        return value != 0
    logger.error("Setting expected a bool or 0/1, but received %r", value)
    return current