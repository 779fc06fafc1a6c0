"""Unbiased integer range sampling over a uniform [0, 1) source."""

from .config import DEFAULT_RESOLUTION, Mode, SamplerConfig
from .errors import (
    ExhaustedError,
    InvalidRangeError,
    UnsupportedModeError,
    XrandError,
)
from .sampler import Sampler, create_sampler
from .sources import (
    DefaultGenerator,
    MersenneGenerator,
    QuantizedSource,
    ReplaySource,
    SeededGenerator,
    UniformSource,
    make_source,
)
from .stats import SamplerStatistics

__all__ = [
    "DEFAULT_RESOLUTION",
    "DefaultGenerator",
    "ExhaustedError",
    "InvalidRangeError",
    "MersenneGenerator",
    "Mode",
    "QuantizedSource",
    "ReplaySource",
    "Sampler",
    "SamplerConfig",
    "SamplerStatistics",
    "SeededGenerator",
    "UniformSource",
    "UnsupportedModeError",
    "XrandError",
    "create_sampler",
    "make_source",
]
