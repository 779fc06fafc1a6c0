"""Range sampler: maps uniform variates onto integers in [low, high).

Each ``next(low, high)`` call reduces one or more variates to the width
``n = high - low`` according to the session mode:

- ADJUSTED: rejection sampling on the raw index
  ``x = floor(f * resolution)``. Raw indexes at or above
  ``rejection_limit(n)`` fall in the remainder zone that would favour the
  low results, so they are discarded and redrawn. The accepted index maps
  to ``low + x % n``.
- UNADJUSTED: ``low + floor(f * n)`` on the variate ``f`` as drawn. Biased
  whenever the source's resolution is not a multiple of ``n``.
- REFERENCE: like ADJUSTED, but raw indexes come from the configured
  reference data instead of the source.

The rejection loop has no iteration cap. It terminates with probability 1
for a live source, and a finite source (ReplaySource, reference data) ends
it by raising ExhaustedError.

A Sampler is not safe to share between threads. Use one sampler, with its
own source, per thread.
"""

from __future__ import annotations

import dataclasses
import math
from numbers import Integral

from .config import (
    MAX_RESOLUTION,
    Mode,
    SamplerConfig,
    rejection_limit,
)
from .errors import ExhaustedError, InvalidRangeError, UnsupportedModeError
from .sources import UniformSource
from .stats import SamplerStatistics


def _resolve_mode(mode: Mode | str) -> Mode:
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(str(mode).lower())
    except ValueError:
        raise UnsupportedModeError(f"{mode} not supported") from None


def _check_source(source: object) -> None:
    if not callable(getattr(source, "next", None)):
        raise UnsupportedModeError(
            f"source {source!r} does not provide next()"
        )


def _check_config(config: SamplerConfig, mode: Mode) -> None:
    res = config.resolution
    if (
        isinstance(res, bool)
        or not isinstance(res, int)
        or not 2 <= res <= MAX_RESOLUTION
    ):
        raise UnsupportedModeError(
            f"resolution must be an integer in [2, 2**53], got {res!r}"
        )

    if mode is Mode.REFERENCE:
        if not config.reference_data:
            raise UnsupportedModeError(
                "reference mode requires non-empty reference_data"
            )
        for i, v in enumerate(config.reference_data):
            if isinstance(v, bool) or not isinstance(v, Integral):
                raise UnsupportedModeError(
                    f"reference value #{i} is not an integer: {v!r}"
                )
            if not 0 <= v < res:
                raise UnsupportedModeError(
                    f"reference value #{i} outside [0, {res}): {v}"
                )
        if config.source is not None:
            _check_source(config.source)
        return

    if config.reference_data is not None:
        raise UnsupportedModeError(
            f"reference_data is only used in reference mode, not {mode.value}"
        )
    if config.source is None:
        raise UnsupportedModeError(f"{mode.value} mode requires a source")
    _check_source(config.source)


def _as_int(name: str, v: object) -> int:
    if isinstance(v, bool) or not isinstance(v, Integral):
        raise InvalidRangeError(f"{name} must be an integer, got {v!r}")
    return int(v)


class Sampler:
    def __init__(self, config: SamplerConfig) -> None:
        mode = _resolve_mode(config.mode)
        _check_config(config, mode)
        self._config = config
        self._mode = mode
        self._resolution = config.resolution
        self._reference: tuple[int, ...] = tuple(
            int(v) for v in config.reference_data or ()
        )
        self._ref_cursor = 0
        self._exhausted = False
        self._stats = SamplerStatistics(mode=mode)

    @property
    def config(self) -> SamplerConfig:
        return self._config

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def resolution(self) -> int:
        return self._resolution

    def _draw_raw(self) -> tuple[float, int]:
        """Consult the source (or reference data) once.

        Returns the variate in [0, 1) and its raw index in
        [0, resolution).
        """
        if self._mode is Mode.REFERENCE:
            if self._ref_cursor >= len(self._reference):
                raise ExhaustedError(
                    f"reference data exhausted after {len(self._reference)}"
                    " values"
                )
            x = self._reference[self._ref_cursor]
            self._ref_cursor += 1
            return x / self._resolution, x

        f = self._config.source.next()
        x = min(int(f * self._resolution), self._resolution - 1)
        return f, x

    def next(self, low: int, high: int) -> int:
        """Integer in [low, high).

        Raises InvalidRangeError before touching any state, and
        ExhaustedError once the source or reference data has run out.
        """
        low = _as_int("low", low)
        high = _as_int("high", high)
        if high <= low:
            raise InvalidRangeError(f"empty range [{low}, {high})")
        n = high - low
        if n > self._resolution:
            raise InvalidRangeError(
                f"range width {n} exceeds source resolution {self._resolution}"
            )
        if self._exhausted:
            raise ExhaustedError("sampler session is exhausted; reset() it")

        try:
            if self._mode is Mode.UNADJUSTED:
                variate, _ = self._draw_raw()
                offset = min(math.floor(variate * n), n - 1)
            else:
                limit = rejection_limit(n, self._resolution)
                variate, x = self._draw_raw()
                while x >= limit:
                    self._stats.reject_count += 1
                    variate, x = self._draw_raw()
                offset = x % n
        except ExhaustedError:
            self._exhausted = True
            raise

        result = low + offset
        self._stats.draw_count += 1
        self._stats.last_raw_variate = variate
        self._stats.last_result = result
        return result

    def reset(self, source: UniformSource | None = None) -> None:
        """Start a new session: optionally swap the source, zero the
        statistics, and rewind the reference data."""
        if source is not None:
            _check_source(source)
            self._config = dataclasses.replace(self._config, source=source)
        self._ref_cursor = 0
        self._exhausted = False
        self._stats.reset()

    def snapshot(self) -> SamplerStatistics:
        """Independent copy of the current statistics."""
        return self._stats.copy()


def create_sampler(config: SamplerConfig) -> Sampler:
    return Sampler(config)
