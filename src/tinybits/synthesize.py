"""Pattern synthesis: builds Phrases from rules rather than data."""

from __future__ import annotations

from typing import Callable, Tuple

import numpy as np

from . import bits as _bits
from .errors import RangeError, WidthError
from .phrase import Phrase


def trailing_zeros_value(dark: int, light: int) -> int:
    """Integer value of ``dark`` ones followed by ``light`` zeros."""
    return ((1 << dark) - 1) << light


class Synthesize:
    """
    Generators for the bit patterns the bisection codec searches over.
    Every generator returns a fresh Phrase of 8-bit members.
    """

    @staticmethod
    def for_each(count: int, fn: Callable[[int], int]) -> Phrase:
        """Collect ``fn(i)`` for ``i`` in ``range(count)`` into a Phrase.

        To synthesize five ones: ``Synthesize.for_each(5, lambda i: 1)``.
        """
        bits = [fn(i) for i in range(count)]
        return Phrase.from_bits(*bits)

    @staticmethod
    def digit(count: int, bit: int) -> Phrase:
        _bits.sanity_check(bit)
        if count < 0:
            raise WidthError(f"cannot synthesize {count} bits")
        filled = _bits.unpack(_bits.build_fill_buffer(bit, count))[:count]
        return Phrase.from_bits(*filled)

    @staticmethod
    def ones(count: int) -> Phrase:
        return Synthesize.digit(count, 1)

    @staticmethod
    def zeros(count: int) -> Phrase:
        return Synthesize.digit(count, 0)

    @staticmethod
    def repeating(count: int, *pattern) -> Phrase:
        """Emit the whole pattern ``count`` times.

        Use :meth:`pattern` when the result must fit a fixed length instead.
        """
        _bits.sanity_check(*pattern)
        return Phrase.from_bits(*(list(pattern) * count))

    @staticmethod
    def pattern(length: int, *pattern) -> Phrase:
        """Tile the pattern until exactly ``length`` bits have been emitted."""
        if not pattern:
            raise ValueError("pattern needs at least one bit")
        _bits.sanity_check(*pattern)
        return Synthesize.for_each(length, lambda i: pattern[i % len(pattern)])

    @staticmethod
    def random(length: int, rng: np.random.Generator | None = None) -> Phrase:
        rng = rng if rng is not None else np.random.default_rng()
        return Phrase.from_bits(*rng.integers(0, 2, size=length).tolist())

    @staticmethod
    def midpoint(width: int) -> Phrase:
        """The bisection midpoint of a ``width`` bit range: 1 then zeros."""
        if width < 1:
            raise WidthError(f"midpoint width must be at least 1, got {width}")
        return Phrase.from_int(1 << (width - 1), width)

    @staticmethod
    def trailing_zeros(dark: int, light: int) -> Phrase:
        if dark < 0 or light < 0:
            raise WidthError(f"cannot synthesize {dark} ones then {light} zeros")
        return Phrase.from_int(trailing_zeros_value(dark, light), dark + light)

    @staticmethod
    def subdivided(width: int, index: int, resolution: int) -> Phrase:
        """Pattern ``index`` of ``resolution`` even steps across ``width`` bits.

        Index 0 is all zeros and index ``resolution`` is all ones; indexes
        outside that range are clamped.
        """
        if resolution < 1:
            raise RangeError(f"resolution must be at least 1, got {resolution}")
        if width < 1:
            raise WidthError(f"subdivision width must be at least 1, got {width}")
        index = min(max(index, 0), resolution)
        value = ((1 << width) - 1) * index // resolution
        return Phrase.from_int(value, width)

    @staticmethod
    def approximate(target, width: int | None, resolution: int) -> Tuple[int, Phrase]:
        """Closest subdivision index for ``target`` and its synthesized pattern."""
        if isinstance(target, Phrase):
            if width is None:
                width = target.bit_length()
            target = target.as_int()
        if target < 0:
            raise ValueError(f"cannot approximate negative value {target}")
        if resolution < 1:
            raise RangeError(f"resolution must be at least 1, got {resolution}")
        if width is None:
            width = max(target.bit_length(), 1)
        ceiling = (1 << width) - 1
        index = target * resolution // ceiling if ceiling else 0
        index = min(max(index, 0), resolution)
        return index, Synthesize.subdivided(width, index, resolution)
