import pytest

from tinybits import bits
from tinybits.errors import BitValueError, WidthError


def test_sanity_check_rejects_non_bits():
    bits.sanity_check(0, 1, 1, 0)
    with pytest.raises(BitValueError):
        bits.sanity_check(0, 2)
    with pytest.raises(ValueError):
        bits.sanity_check(-1)


def test_pack_splits_whole_bytes_from_remainder():
    payload, remainder = bits.pack([1, 0, 1, 0, 1, 0, 1, 0, 1, 1, 0])
    assert payload == bytes([0b10101010])
    assert remainder == (1, 1, 0)


def test_unpack_is_msb_first():
    assert bits.unpack(bytes([0x80, 0x01])) == [1] + [0] * 7 + [0] * 7 + [1]
    assert bits.unpack(b"") == []


def test_pack_padded_pads_on_the_right():
    assert bits.pack_padded([1, 1]) == bytes([0b11000000])


def test_to_byte_left_pads_short_input():
    assert bits.to_byte(1, 0, 1) == 5
    assert bits.to_byte(*([1] * 8)) == 255


def test_to_byte_rejects_more_than_eight_bits():
    with pytest.raises(WidthError):
        bits.to_byte(*([1] * 8 + [0, 0]))


def test_from_int_minimal_and_padded():
    assert bits.from_int(0) == [0]
    assert bits.from_int(6) == [1, 1, 0]
    assert bits.from_int(6, 5) == [0, 0, 1, 1, 0]
    assert bits.from_int(0, 0) == []
    with pytest.raises(WidthError):
        bits.from_int(8, 3)
    with pytest.raises(ValueError):
        bits.from_int(-1)


def test_to_int_round_trips_from_int():
    for value in (0, 1, 77, 1 << 70):
        assert bits.to_int(bits.from_int(value)) == value


def test_extract_bit_region_crosses_bytes():
    data = bytes([0b00001111, 0b11110000])
    region = bits.extract_bit_region(data, 4, 8)
    assert region == bytearray([0xFF])
    with pytest.raises(TypeError):
        bits.extract_bit_region([1, 0], 0, 1)


def test_build_fill_buffer():
    assert bits.build_fill_buffer(1, 10) == bytearray([0xFF, 0xC0])
    assert bits.build_fill_buffer(0, 3) == bytearray([0])


def test_from_byte_is_eight_bits():
    assert bits.from_byte(5) == [0, 0, 0, 0, 0, 1, 0, 1]
    with pytest.raises(WidthError):
        bits.from_byte(256)
