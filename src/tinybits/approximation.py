"""Bisection approximation of arbitrarily wide integers.

An :class:`Approximation` walks a running value toward its target by adding
or subtracting *trailing zero* patterns, ``dark`` ones followed by ``light``
zeros.  Each refine step writes one record to the signature::

    sign bit | ZLE(dark) | ZLE(light)

and the search narrows as ``dark`` grows.  Once a step picks ``dark == 0`` the
signature is sealed with the magnitude of whatever delta is left, and
:meth:`Approximation.reconstitute` can replay it back into the target.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .config import DEFAULT_CONFIG, TinyConfig
from .errors import IndexLimitExceeded, WidthError
from .logger import get_tinybits_logger
from .phrase import Phrase
from .synthesize import trailing_zeros_value
from .zle import ScaledZLE, ZLEScheme

logger = get_tinybits_logger("approximation")


@dataclass(frozen=True)
class Step:
    sign: int
    dark: int
    light: int
    value: int
    delta: int


@dataclass(frozen=True)
class Candidate:
    dark: int
    light: int
    value: int
    delta: int


def _better(best: Optional[Candidate], challenger: Optional[Candidate]) -> Optional[Candidate]:
    # ties go to the later candidate in scan order
    if challenger is None:
        return best
    if best is None or abs(challenger.delta) <= abs(best.delta):
        return challenger
    return best


def scan(target: int, value: int, sign: int, width: int, darks: Sequence[int]) -> Optional[Candidate]:
    """Best trailing-zeros candidate over ``darks``, each paired with every light."""
    best = None
    for dark in darks:
        for light in range(width):
            pattern = trailing_zeros_value(dark, light)
            candidate_value = value - pattern if sign else value + pattern
            best = _better(best, Candidate(dark, light, candidate_value, target - candidate_value))
    return best


class ScanWorker(threading.Thread):
    """Scans one contiguous run of dark values on its own thread."""

    def __init__(self, target: int, value: int, sign: int, width: int, darks: Sequence[int]):
        super().__init__(daemon=True)
        self.target = target
        self.value = value
        self.sign = sign
        self.width = width
        self.darks = list(darks)
        self.result: Optional[Candidate] = None
        self.error: Optional[BaseException] = None

    def run(self):
        try:
            self.result = scan(self.target, self.value, self.sign, self.width, self.darks)
        except Exception as exc:
            self.error = exc


class Approximation:
    def __init__(
        self,
        target,
        index_width: int,
        *,
        bit_depth: Optional[int] = None,
        scheme: Optional[ZLEScheme] = None,
        config: Optional[TinyConfig] = None,
    ):
        if isinstance(target, Phrase):
            if bit_depth is None:
                bit_depth = target.bit_length()
            target = target.as_int()
        if target < 0:
            raise ValueError(f"cannot approximate negative value {target}")
        self.target = target
        self.index_width = index_width
        self.bit_depth = bit_depth if bit_depth is not None else max(target.bit_length(), 1)
        self.scheme = scheme if scheme is not None else ScaledZLE()
        self.config = config if config is not None else DEFAULT_CONFIG

        self.value = 0
        self.delta = target
        self.signature = Phrase(config=self.config)
        self.steps: List[Step] = []
        self.sealed = False
        self.record_bits = 0

    # ------------------------------------------------------------------
    # search
    # ------------------------------------------------------------------
    def _search(self, sign: int, width: int, workers: int) -> Candidate:
        darks = np.arange(width - 1, -1, -1)
        workers = min(workers, width)
        if workers <= 1:
            return scan(self.target, self.value, sign, width, darks.tolist())

        pool = [
            ScanWorker(self.target, self.value, sign, width, chunk.tolist())
            for chunk in np.array_split(darks, workers)
        ]
        for worker in pool:
            worker.start()
        for worker in pool:
            worker.join()
        errors = [worker.error for worker in pool if worker.error is not None]
        if errors:
            raise errors[0]
        best = None
        for worker in pool:
            logger.debug("merging worker over darks %s: %s", worker.darks, worker.result)
            best = _better(best, worker.result)
        return best

    def refine(self, position: int = 0, workers: Optional[int] = None) -> int:
        """Append one record to the signature and return the chosen dark count.

        ``position`` is the stride returned by the previous call; the search
        only spans ``index_width - position`` bits.
        """
        if self.sealed:
            raise RuntimeError("cannot refine a sealed approximation")
        if self.index_width > self.config.max_passage:
            raise IndexLimitExceeded(self.index_width, self.config.max_passage)
        if self.index_width < 1:
            raise WidthError(f"index width must be at least 1, got {self.index_width}")
        workers = workers if workers is not None else self.config.search_workers
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")

        sign = 1 if self.delta < 0 else 0
        width = max(self.index_width - max(position, 0), 1)
        best = self._search(sign, width, workers)

        record = Phrase.from_bits(sign, config=self.config).append(
            *self.scheme.encode(best.dark), *self.scheme.encode(best.light)
        )
        self.signature = self.signature.append(record)
        self.value = best.value
        self.delta = best.delta
        self.steps.append(Step(sign, best.dark, best.light, best.value, best.delta))
        logger.debug(
            "refine width=%d sign=%d dark=%d light=%d delta=%d",
            width, sign, best.dark, best.light, best.delta,
        )
        return best.dark

    def seal(self) -> Phrase:
        """Close the signature with the bits of ``|delta|``."""
        if self.sealed:
            return self.signature
        self.record_bits = self.signature.bit_length()
        magnitude = abs(self.delta)
        if magnitude:
            self.signature = self.signature.append(Phrase.from_int(magnitude, config=self.config))
        self.sealed = True
        return self.signature

    def distill(self, workers: Optional[int] = None) -> "Approximation":
        """Refine until a step chooses ``dark == 0``, then seal."""
        stride = self.refine(0, workers)
        while stride != 0:
            stride = self.refine(stride, workers)
        self.seal()
        logger.debug(
            "distilled %d bit target into %d bits (%d steps)",
            self.bit_depth, self.signature.bit_length(), len(self.steps),
        )
        return self

    @property
    def bit_drop(self) -> int:
        """Bits saved relative to ``bit_depth``; negative when the signature grew."""
        record_bits = self.record_bits if self.sealed else self.signature.bit_length()
        return self.bit_depth - (record_bits + abs(self.delta).bit_length())

    # ------------------------------------------------------------------
    # decoding
    # ------------------------------------------------------------------
    @staticmethod
    def reconstitute(signature: Phrase, scheme: Optional[ZLEScheme] = None) -> int:
        """Replay a sealed signature back into the target it was distilled from."""
        scheme = scheme if scheme is not None else ScaledZLE()
        value = 0
        remainder = signature
        while True:
            sign, remainder = remainder.read_bit()
            dark, remainder = scheme.read(remainder)
            light, remainder = scheme.read(remainder)
            pattern = trailing_zeros_value(dark, light)
            value = value - pattern if sign else value + pattern
            if dark == 0:
                break
        # the closing record's sign is the sign of the remaining delta
        magnitude = remainder.as_int()
        return value - magnitude if sign else value + magnitude

    def __repr__(self):
        return (
            f"Approximation(target={self.target}, index_width={self.index_width}, "
            f"steps={len(self.steps)}, delta={self.delta}, sealed={self.sealed})"
        )
