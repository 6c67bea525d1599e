"""Ways to alter existing binary information."""

from __future__ import annotations

import numpy as np

from . import bits as _bits
from .errors import WidthError
from .measurement import Measurement


def xor_bits_with_pattern(byte: int, *pattern) -> int:
    """XOR ``pattern`` against ``byte``, starting at its most significant bit."""
    if len(pattern) > 8:
        raise WidthError(f"a pattern of {len(pattern)} bits does not fit in a byte")
    _bits.sanity_check(*pattern)
    bits = _bits.from_byte(byte)
    for i, bit in enumerate(pattern):
        bits[i] ^= bit
    return _bits.to_byte(*bits)


def xor_bytes_with_pattern(data, *pattern) -> bytes:
    """Apply :func:`xor_bits_with_pattern` to every byte of ``data``."""
    return bytes(xor_bits_with_pattern(b, *pattern) for b in bytes(data))


def toggle_bytes(data) -> bytes:
    if not data:
        return b""
    return np.bitwise_xor(np.frombuffer(bytes(data), dtype=np.uint8), 0xFF).tobytes()


def drop_most_significant_bits(count: int, data) -> Measurement:
    """Strip the top ``count`` bits of every byte and keep what is left.

    What survives no longer lines up with byte boundaries, so it comes back
    as a Measurement rather than bytes.
    """
    if not 0 <= count <= 8:
        raise WidthError(f"cannot drop {count} bits from a byte")
    result = Measurement()
    for b in bytes(data):
        result = result.append(*_bits.from_byte(b)[count:])
    return result


def drop_most_significant_bit(data) -> Measurement:
    """For bytes known to be below 128."""
    return drop_most_significant_bits(1, data)
