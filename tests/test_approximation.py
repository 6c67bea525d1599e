import logging
import threading
import time

import pytest

from tinybits import (
    Approximation,
    DoublingZLE,
    MicroZLE,
    Phrase,
    ScaledZLE,
    Synthesize,
    TinyConfig,
)
from tinybits import approximation
from tinybits.approximation import scan
from tinybits.errors import IndexLimitExceeded, WidthError


def test_six_in_three_bits_lands_in_one_step():
    approx = Approximation(6, 3)
    stride = approx.refine(0)
    assert stride == 2
    step = approx.steps[0]
    assert (step.sign, step.dark, step.light) == (0, 2, 1)
    assert approx.value == Synthesize.trailing_zeros(2, 1).as_int()
    assert approx.delta == 0
    assert approx.refine(stride) == 0


def test_first_record_is_sign_then_two_keys():
    approx = Approximation(6, 3)
    approx.refine(0)
    scheme = ScaledZLE()
    expected = (
        Phrase.from_bits(0)
        .append(*scheme.encode(2))
        .append(*scheme.encode(1))
    )
    assert approx.signature.bits() == expected.bits()


def test_zero_target_stops_immediately():
    approx = Approximation(0, 8).distill()
    assert len(approx.steps) == 1
    assert approx.steps[0].dark == 0
    assert approx.delta == 0
    assert Approximation.reconstitute(approx.signature) == 0


def test_delta_never_grows():
    target = Synthesize.pattern(24, 1, 0, 0, 1, 1).as_int()
    approx = Approximation(target, 24).distill()
    magnitudes = [abs(target)] + [abs(step.delta) for step in approx.steps]
    assert magnitudes == sorted(magnitudes, reverse=True)


def test_overshoot_flips_the_sign():
    # 11 in 4 bits: 0b1100 overshoots by one, then a single one is taken back
    approx = Approximation(0b1011, 4)
    assert approx.refine(0) == 2
    assert approx.delta == -1
    assert approx.refine(2) == 1
    assert approx.steps[1].sign == 1
    assert approx.delta == 0
    approx.distill()
    assert Approximation.reconstitute(approx.signature) == 0b1011


@pytest.mark.parametrize("target", [1, 2, 5, 6, 77, 200, 0xBEEF, (1 << 31) - 1, 0x1234_5678_9ABC])
def test_reconstitute_round_trips(target):
    approx = Approximation(target, max(target.bit_length(), 1)).distill()
    assert approx.sealed
    assert Approximation.reconstitute(approx.signature) == target


def test_round_trip_for_every_value_of_a_width():
    for target in range(1 << 6):
        approx = Approximation(target, 6).distill()
        assert Approximation.reconstitute(approx.signature) == target


@pytest.mark.parametrize("scheme", [MicroZLE(), DoublingZLE()], ids=repr)
def test_round_trip_with_other_key_schemes(scheme):
    for target in (3, 19, 30, 31):
        approx = Approximation(target, 5, scheme=scheme).distill()
        assert Approximation.reconstitute(approx.signature, scheme) == target


def test_parallel_scan_matches_sequential():
    target = Synthesize.pattern(40, 1, 1, 0, 1, 0, 0, 0).as_int()
    sequential = Approximation(target, 40).distill(workers=1)
    parallel = Approximation(target, 40).distill(workers=4)
    assert parallel.signature == sequential.signature
    assert parallel.steps == sequential.steps


def test_workers_come_from_config():
    config = TinyConfig(search_workers=3)
    threaded = Approximation(0b1101_0110_1, 9, config=config).distill()
    plain = Approximation(0b1101_0110_1, 9).distill()
    assert threaded.signature == plain.signature


def test_scan_keeps_the_last_tie():
    # from value 0 toward 2 in 2 bits: (1, 1) hits exactly
    best = scan(2, 0, 0, 2, [1, 0])
    assert (best.dark, best.light, best.delta) == (1, 1, 0)
    # nothing improves on a zero delta, so the trailing no-op wins the tie
    best = scan(0, 0, 0, 2, [1, 0])
    assert (best.dark, best.light) == (0, 1)


def test_index_width_over_passage_limit():
    with pytest.raises(IndexLimitExceeded):
        Approximation(1, 257).refine()
    with pytest.raises(OverflowError):
        Approximation(1, 9, config=TinyConfig(max_passage=8)).refine()


def test_index_width_must_be_positive():
    with pytest.raises(WidthError):
        Approximation(1, 0).refine()


def test_sealed_approximation_cannot_refine():
    approx = Approximation(5, 3).distill()
    with pytest.raises(RuntimeError):
        approx.refine()


def test_bit_drop_accounts_for_records_and_delta():
    target = (1 << 40) + 3
    approx = Approximation(target, 41).distill()
    assert approx.bit_drop == approx.bit_depth - (
        approx.record_bits + abs(approx.delta).bit_length()
    )
    assert approx.signature.bit_length() == approx.record_bits + abs(approx.delta).bit_length()


def test_phrase_targets_take_their_width_as_bit_depth():
    approx = Approximation(Phrase.from_int(6, 12), 3)
    assert approx.target == 6
    assert approx.bit_depth == 12


def test_refine_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="tinybits")
    Approximation(6, 3).distill()
    assert any("refine" in record.getMessage() for record in caplog.records)


@pytest.mark.exhaustive
def test_round_trip_for_every_value_of_ten_bits():
    for target in range(1 << 10):
        approx = Approximation(target, 10).distill()
        assert Approximation.reconstitute(approx.signature) == target


WIDER_INDEXES = [(w, iw) for w in (3, 7, 12) for iw in (w + 1, w + 5, 40)]


@pytest.mark.parametrize("bits_wide, index_width", WIDER_INDEXES)
def test_round_trip_with_an_index_wider_than_the_target(bits_wide, index_width):
    targets = {
        1,
        (1 << bits_wide) - 1,
        (1 << bits_wide) // 3,
        1 << (bits_wide - 1),
        Synthesize.pattern(bits_wide, 1, 0, 0).as_int(),
    }
    for target in targets:
        approx = Approximation(target, index_width).distill()
        assert Approximation.reconstitute(approx.signature) == target


def test_wide_target_round_trips_across_workers():
    target = (0xDEADBEEF << 160) | (0xFACE << 40) | 0x1F
    assert target.bit_length() == 192
    approx = Approximation(target, 200).distill(workers=3)
    assert Approximation.reconstitute(approx.signature) == target


@pytest.mark.parametrize("position", [4, 9])
def test_position_past_the_index_width_only_offers_the_no_op(position):
    approx = Approximation(5, 4)
    assert approx.refine(position) == 0
    step = approx.steps[0]
    assert (step.dark, step.light, step.delta) == (0, 0, 5)
    approx.seal()
    assert Approximation.reconstitute(approx.signature) == 5


def test_every_worker_is_joined_before_an_error_is_raised(monkeypatch):
    finished = []
    lock = threading.Lock()

    def failing_scan(target, value, sign, width, darks):
        if width - 1 in darks:
            raise ArithmeticError("first run of darks failed")
        time.sleep(0.05)
        with lock:
            finished.append(tuple(darks))
        return None

    monkeypatch.setattr(approximation, "scan", failing_scan)
    approx = Approximation(200, 8)
    with pytest.raises(ArithmeticError):
        approx.refine(0, workers=4)
    assert len(finished) == 3
