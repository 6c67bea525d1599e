"""Process-wide constants and the explicit configuration object.

``WORD_WIDTH`` and ``MAX_PASSAGE`` are computed exactly once, at import.
Everything tunable lives on :class:`TinyConfig`, which callers pass into the
constructors that need it (``Approximation``).  ``Phrase`` reads its
member limit from ``DEFAULT_CONFIG``.  Environment
overrides are read only by :meth:`TinyConfig.from_env`.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, replace


def _architecture_bit_width() -> int:
    # sys.maxsize is 2**(n-1) - 1 for an n-bit build
    return sys.maxsize.bit_length() + 1


#: Bit width of the interpreter's native word; caps a single Measurement.
WORD_WIDTH = _architecture_bit_width()

#: Largest index width an approximation may search, 2**8.
MAX_PASSAGE = 1 << 8

#: Default ceiling on the number of members a Phrase may hold.
MAX_PHRASE_MEMBERS = 1 << 20


@dataclass(frozen=True)
class TinyConfig:
    max_passage: int = MAX_PASSAGE
    max_phrase_members: int = MAX_PHRASE_MEMBERS

    # Threads used by the refine scan; 1 keeps it on the calling thread.
    search_workers: int = 1

    def __post_init__(self):
        if self.max_passage <= 0:
            raise ValueError("max_passage must be positive")
        if self.max_phrase_members <= 0:
            raise ValueError("max_phrase_members must be positive")
        if self.search_workers <= 0:
            raise ValueError("search_workers must be positive")

    @classmethod
    def from_env(cls) -> "TinyConfig":
        """Build a config from ``TINYBITS_*`` environment variables."""
        return cls(
            max_passage=int(os.getenv("TINYBITS_MAX_PASSAGE", str(MAX_PASSAGE)) or MAX_PASSAGE),
            max_phrase_members=int(
                os.getenv("TINYBITS_MAX_PHRASE_MEMBERS", str(MAX_PHRASE_MEMBERS)) or MAX_PHRASE_MEMBERS
            ),
            search_workers=int(os.getenv("TINYBITS_SEARCH_WORKERS", "1") or "1"),
        )

    def with_overrides(self, **changes) -> "TinyConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = TinyConfig.from_env()
