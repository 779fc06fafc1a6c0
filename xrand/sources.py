"""Uniform [0, 1) sources consumed by the range sampler.

Every source owns its own generator state; nothing here touches the
module-level ``random`` instance. ``SeededGenerator`` is the reproducible
default: a PCG-XSH-RR generator (32-bit output, 64-bit state) whose float
output is an exact multiple of 2**-32, so a sampler with the default
resolution recovers the raw 32-bit word without rounding.
Reference: https://www.pcg-random.org/
"""

from __future__ import annotations

import math
import random
from numbers import Real
from typing import Iterable, Protocol, runtime_checkable

from .errors import ExhaustedError, UnsupportedModeError


@runtime_checkable
class UniformSource(Protocol):
    def next(self) -> float:
        """Uniform float in [0, 1). Never returns 1.0."""
        ...


class SeededGenerator:
    _MASK32 = 0xFFFFFFFF
    _MASK64 = 0xFFFFFFFFFFFFFFFF
    _MUL = 6364136223846793005

    def __init__(self, seed: int, seq: int = 0) -> None:
        self.seed = seed
        self.seq = seq
        self._state: int = 0
        self._inc: int = ((seq << 1) | 1) & self._MASK64
        self._step()
        self._state = (self._state + seed) & self._MASK64
        self._step()

    def _step(self) -> None:
        self._state = (self._state * self._MUL + self._inc) & self._MASK64

    def next_u32(self) -> int:
        old = self._state
        self._step()
        xorshifted = (((old >> 18) ^ old) >> 27) & self._MASK32
        rot = (old >> 59) & 31
        return (
            (xorshifted >> rot) | (xorshifted << ((-rot) & 31))
        ) & self._MASK32

    def next(self) -> float:
        return self.next_u32() / (self._MASK32 + 1)

    def __repr__(self) -> str:
        return f"SeededGenerator(seed={self.seed}, seq={self.seq})"


class MersenneGenerator:
    """Seeded Mersenne Twister (53-bit float output)."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()

    def __repr__(self) -> str:
        return f"MersenneGenerator(seed={self.seed})"


class DefaultGenerator:
    """Platform generator seeded from OS entropy. Not reproducible."""

    def __init__(self) -> None:
        self._rng = random.Random()

    def next(self) -> float:
        return self._rng.random()

    def __repr__(self) -> str:
        return "DefaultGenerator()"


class ReplaySource:
    """Replays a fixed sequence of variates, then fails.

    There is no wraparound: the call after the last value raises
    ExhaustedError, and so does every call after that.
    """

    def __init__(self, sequence: Iterable[float]) -> None:
        values = tuple(sequence)
        for i, v in enumerate(values):
            if isinstance(v, bool) or not isinstance(v, Real):
                raise ValueError(f"replay value #{i} is not a number: {v!r}")
            if not 0.0 <= v < 1.0:
                raise ValueError(
                    f"replay value #{i} outside [0, 1): {v!r}"
                )
        self._values = tuple(float(v) for v in values)
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def remaining(self) -> int:
        return len(self._values) - self._cursor

    def next(self) -> float:
        if self._cursor >= len(self._values):
            raise ExhaustedError(
                f"replay source exhausted after {len(self._values)} values"
            )
        v = self._values[self._cursor]
        self._cursor += 1
        return v

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ReplaySource(len={len(self._values)}, cursor={self._cursor})"


class QuantizedSource:
    """Rounds a source's output down to a multiple of 1 / resolution.

    Models a generator with only ``resolution`` distinct outputs. With a
    power-of-two resolution the rounded values are exact.
    """

    def __init__(self, source: UniformSource, resolution: int) -> None:
        if resolution < 1:
            raise ValueError(f"resolution must be positive, got {resolution}")
        self.source = source
        self.resolution = resolution

    def next(self) -> float:
        k = math.floor(self.source.next() * self.resolution)
        return k / self.resolution

    def __repr__(self) -> str:
        return (
            f"QuantizedSource({self.source!r}, "
            f"resolution={self.resolution})"
        )


METHODS = ("pcg", "mt", "math")


def make_source(method: str, seed: int | None = None) -> UniformSource:
    """Build a source by method name.

    ``pcg`` and ``mt`` need a seed; ``math`` ignores it.
    """
    if method == "math":
        return DefaultGenerator()
    if method not in METHODS:
        raise UnsupportedModeError(f"{method} not supported")
    if seed is None:
        raise UnsupportedModeError(f"method {method!r} requires a seed")
    if method == "pcg":
        return SeededGenerator(seed)
    return MersenneGenerator(seed)
