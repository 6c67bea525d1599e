"""Phrase: an ordered, immutable run of Measurements.

A Phrase is the unbounded counterpart of :class:`Measurement`.  Members can
have different widths; the phrase's value is the concatenation of every
member's bits, most significant first.  Every operation returns a new Phrase
and never loses or duplicates a bit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from . import bits as _bits
from .config import DEFAULT_CONFIG, WORD_WIDTH, TinyConfig
from .errors import RangeError, WidthError
from .measurement import Measurement


def _chunk(bits: Sequence[int], width: int) -> List[Measurement]:
    return [Measurement.from_bits(*bits[i:i + width]) for i in range(0, len(bits), width)]


def _partition(bits: Sequence[int], widths: Iterable[int]) -> List[Measurement]:
    out = []
    offset = 0
    for width in widths:
        out.append(Measurement.from_bits(*bits[offset:offset + width]))
        offset += width
    return out


@dataclass(frozen=True)
class Phrase:
    members: Tuple[Measurement, ...] = ()
    # member cap comes from here; derived phrases inherit it
    config: Optional[TinyConfig] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        members = tuple(self.members)
        for member in members:
            if not isinstance(member, Measurement):
                raise TypeError(
                    f"phrase members must be Measurements, got {type(member).__name__}"
                )
        limit = (self.config or DEFAULT_CONFIG).max_phrase_members
        if len(members) > limit:
            raise WidthError(f"phrase of {len(members)} members exceeds limit {limit}")
        object.__setattr__(self, "members", members)

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------
    @classmethod
    def of(cls, *measurements: Measurement, config: Optional[TinyConfig] = None) -> "Phrase":
        return cls(measurements, config)

    @classmethod
    def from_bits(cls, *bits, config: Optional[TinyConfig] = None) -> "Phrase":
        """Build a Phrase of 8-bit members; the last one may be shorter."""
        _bits.sanity_check(*bits)
        return cls(_chunk(bits, 8), config)

    @classmethod
    def from_bytes(cls, data, config: Optional[TinyConfig] = None) -> "Phrase":
        return cls(tuple(Measurement(bytes([b])) for b in bytes(data)), config)

    @classmethod
    def from_int(
        cls, value: int, width: int | None = None, config: Optional[TinyConfig] = None
    ) -> "Phrase":
        return cls.from_bits(*_bits.from_int(value, width), config=config)

    # ------------------------------------------------------------------
    # consumption
    # ------------------------------------------------------------------
    def bit_length(self) -> int:
        return sum(m.bit_length() for m in self.members)

    def bits(self) -> List[int]:
        out: List[int] = []
        for member in self.members:
            out.extend(member.bits())
        return out

    def as_int(self) -> int:
        return _bits.to_int(self.bits())

    def as_bytes(self) -> bytes:
        """MSB-first byte stream; a trailing partial byte is padded with zeros."""
        return _bits.pack_padded(self.bits())

    def to_bytes_and_bits(self) -> Tuple[bytes, Tuple[int, ...]]:
        return _bits.pack(self.bits())

    def count_below_threshold(self, threshold: int) -> int:
        """How many members read as a value strictly below ``threshold``."""
        return sum(1 for m in self.members if m.value() < threshold)

    def all_below_threshold(self, threshold: int) -> bool:
        """True when no member reads above ``threshold``; equal values pass."""
        return all(m.value() <= threshold for m in self.members)

    def _derive(self, members) -> "Phrase":
        return Phrase(tuple(members), self.config)

    def __len__(self):
        return len(self.members)

    def __iter__(self) -> Iterator[Measurement]:
        return iter(self.members)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._derive(self.members[index])
        return self.members[index]

    # ------------------------------------------------------------------
    # reading
    # ------------------------------------------------------------------
    def read_range(self, low: int, high: int) -> "Phrase":
        """Return the bits in ``[low, high)``, keeping member boundaries."""
        total = self.bit_length()
        if low < 0 or low > high or high > total:
            raise RangeError(f"range [{low}:{high}) out of phrase bounds [0,{total})")
        out = []
        start = 0
        for member in self.members:
            end = start + member.bit_length()
            if end > low and start < high:
                out.append(member.read(max(low, start) - start, min(high, end) - start))
            if end >= high:
                break
            start = end
        return self._derive(out)

    def read(self, n: int) -> Tuple["Phrase", "Phrase"]:
        total = self.bit_length()
        if n < 0 or n > total:
            raise RangeError(f"cannot read {n} bits from a phrase of {total}")
        return self.read_range(0, n), self.read_range(n, total)

    def read_bit(self) -> Tuple[int, "Phrase"]:
        head, tail = self.read(1)
        return head.bits()[0], tail

    def read_tail_bit(self) -> Tuple[int, "Phrase"]:
        """Pop the final bit, returning it with the phrase that precedes it."""
        total = self.bit_length()
        if total == 0:
            raise RangeError("cannot read a bit from an empty phrase")
        head, last = self.read(total - 1)
        return last.bits()[0], head

    def read_measurement(self, width: int) -> Tuple[Measurement, "Phrase"]:
        if width > WORD_WIDTH:
            raise WidthError(f"measurements are limited to {WORD_WIDTH} bits, got {width}")
        head, tail = self.read(width)
        return Measurement.from_bits(*head.bits()), tail

    def read_until_one(self, cap: int | None = None) -> Tuple[int, "Phrase"]:
        """Count leading zeros, consuming the terminating one if it comes first.

        With ``cap`` the read stops after ``cap`` zeros even if no one was
        seen, leaving the following bit unread.
        """
        zeros = 0
        remainder = self
        while cap is None or zeros < cap:
            bit, remainder = remainder.read_bit()
            if bit == 1:
                return zeros, remainder
            zeros += 1
        return zeros, remainder

    def split(self, index: int) -> Tuple["Phrase", "Phrase"]:
        return self.read(index)

    # ------------------------------------------------------------------
    # editing
    # ------------------------------------------------------------------
    @staticmethod
    def _members_of(others) -> Tuple[Measurement, ...]:
        out: List[Measurement] = []
        for other in others:
            if isinstance(other, Phrase):
                out.extend(other.members)
            elif isinstance(other, Measurement):
                out.append(other)
            else:
                raise TypeError(f"cannot join a {type(other).__name__} onto a Phrase")
        return tuple(out)

    def append(self, *others) -> "Phrase":
        return self._derive(self.members + self._members_of(others))

    def prepend(self, *others) -> "Phrase":
        return self._derive(self._members_of(others) + self.members)

    def append_bits(self, *bits) -> "Phrase":
        if not bits:
            return self
        return self.append(Phrase.from_bits(*bits, config=self.config))

    def prepend_bits(self, *bits) -> "Phrase":
        if not bits:
            return self
        return self.prepend(Phrase.from_bits(*bits, config=self.config))

    def align(self, width: int = 8) -> "Phrase":
        """Repartition into ``width``-bit members; the final one may be short."""
        if width <= 0 or width > WORD_WIDTH:
            raise WidthError(f"alignment width {width} out of bounds [1,{WORD_WIDTH}]")
        return self._derive(_chunk(self.bits(), width))

    def reverse(self) -> "Phrase":
        """Reverse the bit order; member widths are kept, read back to front."""
        widths = [m.bit_length() for m in reversed(self.members)]
        return self._derive(_partition(self.bits()[::-1], widths))

    def __str__(self):
        return " ".join(str(m) for m in self.members)

    def __repr__(self):
        return f"Phrase('{self}')"
