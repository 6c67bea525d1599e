"""Padding schemes for bringing operands to a common width.

Operands are Phrases, Measurements or plain lists of bits.  A lone bit or a
byte (``int``, ``bytes``, ``bytearray``) has a fixed width and cannot be
resized; asking to pad one raises :class:`StaticWidthError`.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from . import bits as _bits
from .errors import StaticWidthError, WidthError
from .measurement import Measurement
from .phrase import Phrase


class Align(Enum):
    LEFT_ZEROS = "left_zeros"
    LEFT_ONES = "left_ones"
    RIGHT_ZEROS = "right_zeros"
    RIGHT_ONES = "right_ones"
    MIDDLE_ZEROS = "middle_zeros"
    MIDDLE_ONES = "middle_ones"


def _width_of(operand) -> int:
    if isinstance(operand, (Phrase, Measurement)):
        return operand.bit_length()
    if isinstance(operand, (int, bytes, bytearray)):
        raise StaticWidthError(
            f"{type(operand).__name__} is a fixed-width primitive and cannot be padded"
        )
    if isinstance(operand, list):
        _bits.sanity_check(*operand)
        return len(operand)
    raise TypeError(f"cannot align a {type(operand).__name__}")


def widest(*operands) -> int:
    """Bit length of the widest operand (0 when there are none)."""
    return max((_width_of(op) for op in operands), default=0)


def _pad_one(operand, left: int, right: int, digit: int):
    fill_left = [digit] * left
    fill_right = [digit] * right
    if isinstance(operand, Phrase):
        return operand.prepend_bits(*fill_left).append_bits(*fill_right)
    if isinstance(operand, Measurement):
        return operand.prepend(*fill_left).append(*fill_right)
    return fill_left + list(operand) + fill_right


def pad(width: int, *operands, right: bool = False, digit: int = 0) -> List:
    """Pad every operand to ``width`` bits on the left (or the right)."""
    _bits.sanity_check(digit)
    out = []
    for operand in operands:
        size = _width_of(operand)
        if size > width:
            raise WidthError(f"operand of {size} bits cannot be padded to {width}")
        missing = width - size
        if right:
            out.append(_pad_one(operand, 0, missing, digit))
        else:
            out.append(_pad_one(operand, missing, 0, digit))
    return out


def middle_pad(width: int, *operands, digit: int = 0) -> List:
    """Pad both sides evenly; an odd leftover bit goes on the right."""
    _bits.sanity_check(digit)
    out = []
    for operand in operands:
        size = _width_of(operand)
        if size > width:
            raise WidthError(f"operand of {size} bits cannot be padded to {width}")
        missing = width - size
        left = missing // 2
        out.append(_pad_one(operand, left, missing - left, digit))
    return out


def left_pad_with_zeros(*operands) -> List:
    return pad(widest(*operands), *operands)


def left_pad_with_ones(*operands) -> List:
    return pad(widest(*operands), *operands, digit=1)


def right_pad_with_zeros(*operands) -> List:
    return pad(widest(*operands), *operands, right=True)


def right_pad_with_ones(*operands) -> List:
    return pad(widest(*operands), *operands, right=True, digit=1)


def middle_pad_with_zeros(*operands) -> List:
    return middle_pad(widest(*operands), *operands)


def middle_pad_with_ones(*operands) -> List:
    return middle_pad(widest(*operands), *operands, digit=1)


def pad_with(scheme: Align, width: int, *operands) -> List:
    if scheme is Align.LEFT_ZEROS:
        return pad(width, *operands)
    if scheme is Align.LEFT_ONES:
        return pad(width, *operands, digit=1)
    if scheme is Align.RIGHT_ZEROS:
        return pad(width, *operands, right=True)
    if scheme is Align.RIGHT_ONES:
        return pad(width, *operands, right=True, digit=1)
    if scheme is Align.MIDDLE_ZEROS:
        return middle_pad(width, *operands)
    if scheme is Align.MIDDLE_ONES:
        return middle_pad(width, *operands, digit=1)
    raise ValueError(f"unknown alignment scheme {scheme!r}")
