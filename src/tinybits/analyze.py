"""Ways to glean information about existing binary data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np

from . import bits as _bits
from .measurement import Measurement
from .phrase import Phrase


class Shade(Enum):
    LIGHT = "light"   # all zeros
    DARK = "dark"     # all ones
    GREY = "grey"     # a mixture


@dataclass
class BinaryShade:
    zeros: int = 0
    ones: int = 0
    total: int = 0
    shade: Shade = Shade.LIGHT
    predominantly_dark: bool = False
    distribution: List[int] = field(default_factory=lambda: [0] * 8)

    def calculate(self) -> "BinaryShade":
        self.predominantly_dark = self.ones > self.total // 2
        if self.ones == 0:
            self.shade = Shade.LIGHT
        elif self.zeros == 0:
            self.shade = Shade.DARK
        else:
            self.shade = Shade.GREY
        return self

    def combine(self, other: "BinaryShade") -> "BinaryShade":
        return BinaryShade(
            zeros=self.zeros + other.zeros,
            ones=self.ones + other.ones,
            total=self.total + other.total,
            distribution=[a + b for a, b in zip(self.distribution, other.distribution)],
        ).calculate()


def _as_bits(operand) -> List[int]:
    if isinstance(operand, (Phrase, Measurement)):
        return operand.bits()
    if isinstance(operand, (bytes, bytearray)):
        return _bits.unpack(operand)
    bits = list(operand)
    _bits.sanity_check(*bits)
    return bits


def one_distribution(data) -> List[int]:
    """How many ones sit at each bit position (MSB first) across the bytes."""
    if not data:
        return [0] * 8
    grid = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8)).reshape(-1, 8)
    return grid.sum(axis=0).astype(int).tolist()


def shade(operand) -> BinaryShade:
    """Count the ones and zeros of a Phrase, Measurement, bytes or bit list."""
    bits = _as_bits(operand)
    ones = sum(bits)
    result = BinaryShade(zeros=len(bits) - ones, ones=ones, total=len(bits))
    if isinstance(operand, (bytes, bytearray)):
        result.distribution = one_distribution(operand)
    elif isinstance(operand, (Phrase, Measurement)) and len(bits) % 8 == 0:
        result.distribution = one_distribution(_bits.pack_padded(bits))
    return result.calculate()


def count_runs(bits) -> List[Tuple[int, int]]:
    """
    Run-length encode a bit sequence as ``(bit, count)`` pairs.
    """
    pattern = []
    last_bit = None
    count = 0
    for bit in _as_bits(bits):
        if bit == last_bit:
            count += 1
        else:
            if last_bit is not None:
                pattern.append((last_bit, count))
            last_bit = bit
            count = 1
    if count > 0:
        pattern.append((last_bit, count))
    return pattern


def has_prefix(bits, prefix: Sequence[int]) -> bool:
    data = _as_bits(bits)
    prefix = _as_bits(prefix)
    return data[:len(prefix)] == prefix
