"""Zero-length-encoded (ZLE) key schemes.

A ZLE key is a short run of zeros closed by a one.  The key announces how
many bits of projection follow it, so a reader can pull variable-width
integers out of a stream without any outside framing.  The bounded schemes
read at most three zeros; after the third zero a single further bit picks
between the last two rows::

    1 | 01 | 001 | 0000 | 0001

:class:`ExponentialZLE` has no such cap: ``n`` zeros then a one announce a
projection of ``2**n`` bits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .errors import InvalidKeyError, RangeError, WidthError
from .passage import Passage
from .phrase import Phrase

KEYS = ((1,), (0, 1), (0, 0, 1), (0, 0, 0, 0), (0, 0, 0, 1))


@dataclass(frozen=True)
class KeyRow:
    key: Tuple[int, ...]
    width: int
    offset: int = 0

    @property
    def capacity(self) -> int:
        return 1 << self.width

    def accepts(self, value: int) -> bool:
        return self.offset <= value < self.offset + self.capacity


def _key_bits(key) -> Tuple[int, ...]:
    if isinstance(key, Phrase):
        return tuple(key.bits())
    if isinstance(key, str):
        return tuple(int(c) for c in key)
    return tuple(key)


class ZLEScheme:
    """Base for the bounded five-row schemes."""

    name = "zle"
    rows: Tuple[KeyRow, ...] = ()
    key_cap = 3

    def _row(self, key: Tuple[int, ...]) -> KeyRow:
        for row in self.rows:
            if row.key == key:
                return row
        raise InvalidKeyError(f"key {''.join(map(str, key)) or '<empty>'} is not a {self.name} key")

    def row_for_value(self, value: int) -> KeyRow:
        if value < 0:
            raise ValueError(f"{self.name} cannot encode negative value {value}")
        for row in self.rows:
            if row.accepts(value):
                return row
        raise WidthError(f"value {value} is too large for {self.name}")

    def key_for_width(self, width: int) -> Phrase:
        for row in self.rows:
            if row.width == width:
                return Phrase.from_bits(*row.key)
        raise InvalidKeyError(f"{self.name} has no key for width {width}")

    def width_for_key(self, key: Sequence[int] | Phrase | str) -> int:
        return self._row(_key_bits(key)).width

    def read_key(self, phrase: Phrase) -> Tuple[KeyRow, Phrase]:
        zeros = 0
        remainder = phrase
        while zeros < self.key_cap:
            if remainder.bit_length() == 0:
                raise InvalidKeyError(f"stream ended inside a {self.name} key")
            bit, remainder = remainder.read_bit()
            if bit == 1:
                return self._row((0,) * zeros + (1,)), remainder
            zeros += 1
        if remainder.bit_length() == 0:
            raise InvalidKeyError(f"stream ended inside a {self.name} key")
        bit, remainder = remainder.read_bit()
        return self._row((0,) * zeros + (bit,)), remainder

    def encode(self, value: int) -> Passage:
        """Key and projection for ``value`` using the first row that holds it."""
        row = self.row_for_value(value)
        return Passage((Phrase.from_bits(*row.key), Phrase.from_int(value - row.offset, row.width)))

    def read(self, phrase: Phrase) -> Tuple[int, Phrase]:
        row, remainder = self.read_key(phrase)
        if remainder.bit_length() < row.width:
            raise RangeError(
                f"{self.name} key announces {row.width} bits but only {remainder.bit_length()} remain"
            )
        projection, remainder = remainder.read(row.width)
        return projection.as_int() + row.offset, remainder

    def __repr__(self):
        return f"{type(self).__name__}()"


class MicroZLE(ZLEScheme):
    """Widths 1 through 5: the smallest keys for the smallest values."""

    name = "micro"
    rows = tuple(KeyRow(key, width) for key, width in zip(KEYS, (1, 2, 3, 4, 5)))


class DoublingZLE(ZLEScheme):
    """Widths 4, 8, 16, 32 and 64 bits."""

    name = "doubling"
    rows = tuple(KeyRow(key, width) for key, width in zip(KEYS, (4, 8, 16, 32, 64)))


class ScaledZLE(ZLEScheme):
    """
    Rows overlap as little as possible: the three short rows are offset so
    each one starts where the previous ran out (0-3, 4-11, 12-267).  The two
    long rows carry raw 16 and 64 bit values.
    """

    name = "scaled"
    rows = (
        KeyRow(KEYS[0], 2),
        KeyRow(KEYS[1], 3, offset=4),
        KeyRow(KEYS[2], 8, offset=12),
        KeyRow(KEYS[3], 16),
        KeyRow(KEYS[4], 64),
    )


class ExponentialZLE(ZLEScheme):
    """Unbounded scheme: ``n`` zeros then a one announce ``2**n`` bits.

    A lone ``1`` announces an empty projection, which is how zero is
    written.  Anything else is left padded to the next power of two of at
    least two bits.
    """

    name = "exponential"

    def _row(self, key: Tuple[int, ...]) -> KeyRow:
        if not key or key[-1] != 1 or any(key[:-1]):
            raise InvalidKeyError(f"key {''.join(map(str, key)) or '<empty>'} is not a {self.name} key")
        zeros = len(key) - 1
        return KeyRow(key, 0 if zeros == 0 else 1 << zeros)

    def row_for_value(self, value: int) -> KeyRow:
        if value < 0:
            raise ValueError(f"{self.name} cannot encode negative value {value}")
        length = value.bit_length()
        if length == 0:
            return KeyRow((1,), 0)
        power = 1
        while (1 << power) < length:
            power += 1
        return KeyRow((0,) * power + (1,), 1 << power)

    def key_for_width(self, width: int) -> Phrase:
        if width == 0:
            return Phrase.from_bits(1)
        if width < 2 or width & (width - 1):
            raise InvalidKeyError(f"{self.name} has no key for width {width}")
        return Phrase.from_bits(*((0,) * (width.bit_length() - 1) + (1,)))

    def read_key(self, phrase: Phrase) -> Tuple[KeyRow, Phrase]:
        zeros = 0
        remainder = phrase
        while True:
            if remainder.bit_length() == 0:
                raise InvalidKeyError(f"stream ended inside a {self.name} key")
            bit, remainder = remainder.read_bit()
            if bit == 1:
                return self._row((0,) * zeros + (1,)), remainder
            zeros += 1
