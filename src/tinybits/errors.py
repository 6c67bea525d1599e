"""Exception taxonomy for tinybits.

Every error derives from :class:`TinyBitsError` and from the builtin that
best describes it, so callers may catch either the package error or the
plain Python one.  Nothing in the package retries or absorbs these; they
surface at the point of detection.
"""

from __future__ import annotations


class TinyBitsError(Exception):
    """Root of every error raised by tinybits."""


class BitValueError(TinyBitsError, ValueError):
    """A bit was given that is neither 0 nor 1."""

    def __init__(self, value):
        super().__init__(f"bits must be 0 or 1 in value, got {value!r}")
        self.value = value


class RangeError(TinyBitsError, IndexError):
    """An index or range fell outside of the addressable bits."""


class WidthError(TinyBitsError, ValueError):
    """A zero, negative or over-limit width was requested."""


class StaticWidthError(TinyBitsError, TypeError):
    """A fixed-width primitive (a lone bit or byte) was asked to resize."""


class IndexLimitExceeded(TinyBitsError, OverflowError):
    """An approximation index width exceeded the configured passage limit."""

    def __init__(self, index_width: int, limit: int):
        super().__init__(
            f"index width {index_width} exceeds the passage limit of {limit} bits"
        )
        self.index_width = index_width
        self.limit = limit


class InvalidKeyError(TinyBitsError, KeyError):
    """A ZLE key did not match any row of its table."""

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


__all__ = [
    "TinyBitsError",
    "BitValueError",
    "RangeError",
    "WidthError",
    "StaticWidthError",
    "IndexLimitExceeded",
    "InvalidKeyError",
]
