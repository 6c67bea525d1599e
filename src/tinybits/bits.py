"""Low-level bit helpers shared by the containers.

All bit sequences here are MSB first: index 0 is the most significant bit of
the first byte.  Packing and unpacking go through numpy so callers hand over
plain ``bytes`` and get plain Python ``int`` lists back.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .errors import BitValueError, WidthError


def sanity_check(*bits) -> None:
    """Raise :class:`BitValueError` unless every bit is 0 or 1."""
    for bit in bits:
        if bit not in (0, 1):
            raise BitValueError(bit)


def unpack(data) -> List[int]:
    """Expand bytes into a list of bits."""
    if not data:
        return []
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8)).tolist()


def pack(bits: Sequence[int]) -> Tuple[bytes, Tuple[int, ...]]:
    """Pack bits into whole bytes plus the sub-byte remainder."""
    whole = len(bits) - len(bits) % 8
    if whole:
        packed = np.packbits(np.asarray(bits[:whole], dtype=np.uint8)).tobytes()
    else:
        packed = b""
    return packed, tuple(int(b) for b in bits[whole:])


def pack_padded(bits: Sequence[int]) -> bytes:
    """Pack bits into bytes, zero padding the final byte on the right."""
    if not bits:
        return b""
    return np.packbits(np.asarray(bits, dtype=np.uint8)).tobytes()


def from_byte(value: int) -> List[int]:
    if not 0 <= value <= 0xFF:
        raise WidthError(f"byte value {value} does not fit in 8 bits")
    return [(value >> (7 - i)) & 1 for i in range(8)]


def to_byte(*bits) -> int:
    """Convert up to eight bits to a byte, left padding short input."""
    if len(bits) > 8:
        raise WidthError(f"{len(bits)} bits do not fit in a byte")
    sanity_check(*bits)
    result = 0
    for bit in bits:
        result = (result << 1) | bit
    return result


def from_int(value: int, width: int | None = None) -> List[int]:
    """Bits of a non-negative integer, MSB first.

    Without ``width`` the result is the minimal representation (``[0]`` for
    zero).  With ``width`` the bits are left padded with zeros; a width too
    narrow for the value raises :class:`WidthError`.
    """
    if value < 0:
        raise ValueError(f"cannot take the bits of negative value {value}")
    needed = max(value.bit_length(), 1)
    if width is None:
        width = needed
    elif width < 0:
        raise WidthError(f"width must not be negative, got {width}")
    elif value.bit_length() > width:
        raise WidthError(f"value {value} does not fit in {width} bits")
    return [(value >> (width - 1 - i)) & 1 for i in range(width)]


def to_int(bits: Iterable[int]) -> int:
    result = 0
    for bit in bits:
        result = (result << 1) | bit
    return result


def extract_bit_region(data, start_bit: int, length: int) -> bytearray:
    """Copy ``length`` bits starting at ``start_bit`` into a fresh buffer."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Extraction source must be bytes-like")
    data = bytes(data)
    out = bytearray((length + 7) // 8)
    for i in range(length):
        src_bit = (data[(start_bit + i) // 8] >> (7 - ((start_bit + i) % 8))) & 1
        out[i // 8] |= src_bit << (7 - (i % 8))
    return out


def build_fill_buffer(fill_value: int, length_bits: int) -> bytearray:
    """Bytes holding ``length_bits`` copies of ``fill_value``, right padded."""
    sanity_check(fill_value)
    nbytes = (length_bits + 7) // 8
    shift = nbytes * 8 - length_bits
    if fill_value == 1:
        fill_value = (2**length_bits - 1)
    return bytearray((fill_value << shift).to_bytes(nbytes, byteorder='big'))


def to_string(bits: Iterable[int]) -> str:
    return ''.join(str(bit) for bit in bits)
