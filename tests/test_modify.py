import pytest

from tinybits import Measurement, Shape
from tinybits import modify
from tinybits.errors import BitValueError, WidthError


def test_xor_bits_with_pattern_starts_at_the_top_bit():
    assert modify.xor_bits_with_pattern(155, 0, 1) == 219
    assert modify.xor_bits_with_pattern(0, *([1] * 8)) == 255
    assert modify.xor_bits_with_pattern(77) == 77


def test_xor_bytes_with_pattern():
    data = bytes([155, 255, 128, 127, 77])
    assert modify.xor_bytes_with_pattern(data, 0, 1) == bytes([219, 191, 192, 63, 13])


def test_xor_pattern_must_fit_a_byte():
    with pytest.raises(WidthError):
        modify.xor_bits_with_pattern(0, *([1] * 9))
    with pytest.raises(BitValueError):
        modify.xor_bits_with_pattern(0, 2)


def test_toggle_bytes():
    assert modify.toggle_bytes(bytes([255, 0, 128, 127, 77])) == bytes([0, 255, 127, 128, 178])
    assert modify.toggle_bytes(b"") == b""


def test_drop_most_significant_bit_leaves_seven_bits():
    m = modify.drop_most_significant_bit(bytes([155]))
    assert isinstance(m, Measurement)
    assert m.shape is Shape.BITS
    assert m.bits() == [0, 0, 1, 1, 0, 1, 1]


@pytest.mark.parametrize("count", range(1, 8))
def test_drop_most_significant_bits_concatenates_what_is_left(count):
    data = bytes([155, 255, 33, 127, 0])
    expected = []
    for b in data:
        expected.extend([(b >> (7 - i)) & 1 for i in range(8)][count:])
    m = modify.drop_most_significant_bits(count, data)
    assert m.bits() == expected
    assert m.bit_length() == len(data) * (8 - count)


def test_drop_count_must_be_within_a_byte():
    with pytest.raises(WidthError):
        modify.drop_most_significant_bits(9, b"\x01")
    assert modify.drop_most_significant_bits(8, b"\xff\xff").bit_length() == 0
