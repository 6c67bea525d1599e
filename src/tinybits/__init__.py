"""Public API: variable-width bit containers and the bisection codec.

Helpers that only matter inside the package (bit packing, worker threads)
stay in their modules and should be imported from there when needed.
"""

from .errors import (
    TinyBitsError,
    BitValueError,
    RangeError,
    WidthError,
    StaticWidthError,
    IndexLimitExceeded,
    InvalidKeyError,
)
from .config import TinyConfig, DEFAULT_CONFIG, WORD_WIDTH, MAX_PASSAGE
from .logger import get_tinybits_logger
from .measurement import Measurement, Shape
from .phrase import Phrase
from .alignment import Align, pad, pad_with, widest
from .analyze import BinaryShade, Shade
from .synthesize import Synthesize
from .passage import Passage, Movement, perform, bisect
from .zle import ZLEScheme, MicroZLE, DoublingZLE, ScaledZLE, ExponentialZLE
from .approximation import Approximation, Step

__all__ = [
    # Errors
    "TinyBitsError",
    "BitValueError",
    "RangeError",
    "WidthError",
    "StaticWidthError",
    "IndexLimitExceeded",
    "InvalidKeyError",
    # Configuration and logging
    "TinyConfig",
    "DEFAULT_CONFIG",
    "WORD_WIDTH",
    "MAX_PASSAGE",
    "get_tinybits_logger",
    # Containers
    "Measurement",
    "Shape",
    "Phrase",
    "Align",
    "pad",
    "pad_with",
    "widest",
    "BinaryShade",
    "Shade",
    # Codec
    "Synthesize",
    "Passage",
    "Movement",
    "perform",
    "bisect",
    "ZLEScheme",
    "MicroZLE",
    "DoublingZLE",
    "ScaledZLE",
    "ExponentialZLE",
    "Approximation",
    "Step",
]
