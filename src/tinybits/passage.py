"""Passages and midpoint bisection.

A :class:`Passage` is an ordered group of Phrases travelling together, such as
the key and projection a ZLE scheme emits.

:func:`bisect` walks a value down through the midpoints of its bit width,
recording which side of each midpoint it fell on, until only ``delta_width``
bits of difference remain.  :func:`perform` replays those sign bits in reverse
to rebuild the value exactly.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import RangeError, WidthError
from .logger import get_tinybits_logger
from .phrase import Phrase
from .synthesize import Synthesize

logger = get_tinybits_logger("passage")


class Passage(tuple):
    def __new__(cls, phrases=()):
        phrases = tuple(phrases)
        for phrase in phrases:
            if not isinstance(phrase, Phrase):
                raise TypeError(f"passages hold Phrases, got {type(phrase).__name__}")
        return super().__new__(cls, phrases)

    def append(self, *phrases: Phrase) -> "Passage":
        return Passage(tuple(self) + phrases)

    def prepend(self, *phrases: Phrase) -> "Passage":
        return Passage(phrases + tuple(self))

    def append_bits_as_phrase(self, *bits) -> "Passage":
        return self.append(Phrase.from_bits(*bits))

    def flatten(self) -> Phrase:
        return Phrase().append(*self)

    def bit_length(self) -> int:
        return sum(p.bit_length() for p in self)

    def __str__(self):
        return "[" + ", ".join(f"'{p}'" for p in self) + "]"

    def __repr__(self):
        return f"Passage({self})"


def _midpoint(width: int) -> int:
    return Synthesize.midpoint(width).as_int()


def perform(signature: Phrase, delta, delta_width: int, initial_width: int) -> Phrase:
    """Rebuild a bisected value from its sign bits and final delta.

    Sign bits are consumed from the tail of ``signature``, smallest midpoint
    first.  The result is padded to ``initial_width`` bits when it fits.
    """
    if delta_width < 1:
        raise WidthError(f"delta width must be at least 1, got {delta_width}")
    if initial_width < delta_width:
        raise WidthError(
            f"initial width {initial_width} is narrower than delta width {delta_width}"
        )
    if isinstance(delta, Phrase):
        delta = delta.as_int()

    remaining = signature
    for i in range(delta_width, initial_width + 1):
        if remaining.bit_length() == 0:
            raise RangeError(f"signature ran out of sign bits at width {i}")
        sign, remaining = remaining.read_tail_bit()
        midpoint = _midpoint(i)
        delta = midpoint - delta if sign else midpoint + delta

    if delta < 0:
        raise ValueError(f"signature does not describe a valid passage (result {delta})")
    width = initial_width if delta.bit_length() <= initial_width else None
    return Phrase.from_int(delta, width)


@dataclass(frozen=True)
class Movement:
    signature: Phrase
    delta: int
    delta_width: int
    initial_width: int

    def perform(self) -> Phrase:
        return perform(self.signature, self.delta, self.delta_width, self.initial_width)

    @property
    def bit_drop(self) -> int:
        return self.initial_width - (self.signature.bit_length() + self.delta_width)


def bisect(target, initial_width: int | None = None, delta_width: int = 1) -> Movement:
    if isinstance(target, Phrase):
        if initial_width is None:
            initial_width = target.bit_length()
        target = target.as_int()
    if target < 0:
        raise ValueError(f"cannot bisect negative value {target}")
    if initial_width is None:
        initial_width = max(target.bit_length(), 1)
    if delta_width < 1:
        raise WidthError(f"delta width must be at least 1, got {delta_width}")
    if initial_width < delta_width:
        raise WidthError(
            f"initial width {initial_width} is narrower than delta width {delta_width}"
        )
    if target.bit_length() > initial_width:
        raise WidthError(f"value {target} does not fit in {initial_width} bits")

    x = target
    signs = []
    for i in range(initial_width, delta_width - 1, -1):
        midpoint = _midpoint(i)
        sign = 1 if x < midpoint else 0
        x = abs(x - midpoint)
        signs.append(sign)
        logger.debug("bisect width=%d sign=%d delta=%d", i, sign, x)
    return Movement(Phrase.from_bits(*signs), x, delta_width, initial_width)
