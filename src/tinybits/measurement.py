"""Measurement: the variable-width bit container.

Most runtimes spend a whole byte on every stored bit.  A Measurement keeps
whole bytes in ``payload`` and leaves anything shorter than a byte at the
end as ``remainder`` bits, so a 13 bit value costs one byte plus five bits.

A Measurement holds at most ``WORD_WIDTH`` bits.  Longer stretches of binary
information belong in a :class:`~tinybits.phrase.Phrase`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from . import bits as _bits
from .config import WORD_WIDTH
from .errors import RangeError, WidthError


class Shape(Enum):
    """Which parts of a Measurement carry data."""

    BYTES = "bytes"   # whole bytes only
    BITS = "bits"     # remainder bits only (this includes the empty measurement)
    MIXED = "mixed"   # whole bytes followed by remainder bits


@dataclass(frozen=True)
class Measurement:
    payload: bytes = b""
    remainder: Tuple[int, ...] = ()

    def __post_init__(self):
        payload = bytes(self.payload)
        remainder = tuple(self.remainder)
        _bits.sanity_check(*remainder)
        remainder = tuple(int(b) for b in remainder)
        if len(remainder) >= 8:
            rolled, remainder = _bits.pack(remainder)
            payload += rolled
        width = len(payload) * 8 + len(remainder)
        if width > WORD_WIDTH:
            raise WidthError(
                f"measurements are limited to {WORD_WIDTH} bits, got {width}"
            )
        object.__setattr__(self, "payload", payload)
        object.__setattr__(self, "remainder", remainder)

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------
    @classmethod
    def from_bits(cls, *bits) -> "Measurement":
        _bits.sanity_check(*bits)
        payload, remainder = _bits.pack(bits)
        return cls(payload, remainder)

    @classmethod
    def from_bytes(cls, data) -> "Measurement":
        if isinstance(data, int):
            data = bytes([data])
        return cls(bytes(data))

    @classmethod
    def from_int(cls, value: int, width: int | None = None) -> "Measurement":
        return cls.from_bits(*_bits.from_int(value, width))

    # ------------------------------------------------------------------
    # inspection
    # ------------------------------------------------------------------
    @property
    def shape(self) -> Shape:
        if self.payload and self.remainder:
            return Shape.MIXED
        if self.payload:
            return Shape.BYTES
        return Shape.BITS

    def bit_length(self) -> int:
        return len(self.payload) * 8 + len(self.remainder)

    def __len__(self):
        return self.bit_length()

    def bits(self) -> List[int]:
        shape = self.shape
        if shape is Shape.BYTES:
            return _bits.unpack(self.payload)
        if shape is Shape.BITS:
            return list(self.remainder)
        if shape is Shape.MIXED:
            return _bits.unpack(self.payload) + list(self.remainder)
        raise AssertionError(f"unhandled measurement shape {shape!r}")

    def __iter__(self) -> Iterator[int]:
        return iter(self.bits())

    def value(self) -> int:
        """The measured bits read as an unsigned integer, MSB first."""
        return _bits.to_int(self.bits())

    def __int__(self):
        return self.value()

    # ------------------------------------------------------------------
    # reading
    # ------------------------------------------------------------------
    def read(self, low: int, high: int) -> "Measurement":
        """Return the bits in ``[low, high)`` as a new Measurement."""
        if low < 0 or low > high or high > self.bit_length():
            raise RangeError(
                f"range [{low}:{high}) out of measurement bounds [0,{self.bit_length()})"
            )
        length = high - low
        if high <= len(self.payload) * 8:
            region = _bits.extract_bit_region(self.payload, low, length)
            return Measurement.from_bits(*_bits.unpack(region)[:length])
        return Measurement.from_bits(*self.bits()[low:high])

    # ------------------------------------------------------------------
    # growth
    # ------------------------------------------------------------------
    def append(self, *bits) -> "Measurement":
        return Measurement(self.payload, self.remainder + tuple(bits))

    def append_bytes(self, data) -> "Measurement":
        data = bytes(data)
        shape = self.shape
        if shape is Shape.BYTES or (shape is Shape.BITS and not self.remainder):
            return Measurement(self.payload + data)
        if shape is Shape.BITS or shape is Shape.MIXED:
            return Measurement(self.payload, self.remainder + tuple(_bits.unpack(data)))
        raise AssertionError(f"unhandled measurement shape {shape!r}")

    def append_measurement(self, other: "Measurement") -> "Measurement":
        return self.append_bytes(other.payload).append(*other.remainder)

    def prepend(self, *bits) -> "Measurement":
        _bits.sanity_check(*bits)
        return Measurement.from_bits(*bits, *self.bits())

    def prepend_bytes(self, data) -> "Measurement":
        # whole bytes in front keep the existing byte alignment intact
        return Measurement(bytes(data) + self.payload, self.remainder)

    def prepend_measurement(self, other: "Measurement") -> "Measurement":
        return other.append_measurement(self)

    # ------------------------------------------------------------------
    # transforms
    # ------------------------------------------------------------------
    def reverse(self) -> "Measurement":
        return Measurement.from_bits(*reversed(self.bits()))

    def invert(self) -> "Measurement":
        return Measurement.from_bits(*(1 - b for b in self.bits()))

    def __str__(self):
        return _bits.to_string(self.bits())

    def __repr__(self):
        return f"Measurement('{self}')"
