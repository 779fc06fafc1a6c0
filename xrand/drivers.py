"""Validation drivers: repeated sampling experiments built on a Sampler.

These only use the sampler's public surface (``next``, ``reset``,
``snapshot``) and are what the CLI reports on. Tabulation goes through
numpy so large trial counts stay cheap to summarise.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import Callable, Iterable, MutableSequence, Sequence

import numpy as np

from .config import DEFAULT_RESOLUTION, Mode, SamplerConfig
from .sampler import Sampler
from .errors import InvalidRangeError
from .sources import QuantizedSource, SeededGenerator, UniformSource


@dataclass
class FrequencyTable:
    counts: list[int]
    offset: int
    min: int
    max: int
    spread: int
    chi_square: float

    @property
    def total(self) -> int:
        return sum(self.counts)


@dataclass
class CompressionReport:
    raw_bytes: int
    compressed_bytes: int
    deflated_percent: float


@dataclass
class GenerateReport:
    low: int
    high: int
    values: list[int]
    text: str
    frequency: FrequencyTable
    compression: CompressionReport


@dataclass
class CouponSummary:
    n: int
    lengths: list[int]
    mean: float
    min: int
    max: int
    expected: float
    below_expected: int


@dataclass
class SkewComparison:
    n: int
    trials: int
    resolution: int
    unadjusted: FrequencyTable
    adjusted: FrequencyTable
    adjusted_rejects: int


def shuffle(sampler: Sampler, items: MutableSequence) -> None:
    """Fisher–Yates shuffle in place."""
    for i in range(len(items) - 1, 0, -1):
        r = sampler.next(0, i + 1)
        items[i], items[r] = items[r], items[i]


def frequency(
    values: Iterable[int], n: int, offset: int = 0
) -> FrequencyTable:
    """Count occurrences of each value in [offset, offset + n).

    chi_square is Pearson's statistic against a uniform expectation, with
    n - 1 degrees of freedom.
    """
    if n <= 0:
        raise InvalidRangeError(f"number of bins must be positive, got {n}")
    arr = np.asarray(list(values), dtype=np.int64) - offset
    if arr.size and (arr.min() < 0 or arr.max() >= n):
        raise ValueError(
            f"values outside [{offset}, {offset + n}) cannot be tabulated"
        )
    counts = np.bincount(arr, minlength=n)
    if arr.size:
        expected = arr.size / n
        chi_square = float(((counts - expected) ** 2).sum() / expected)
    else:
        chi_square = 0.0
    lo = int(counts.min())
    hi = int(counts.max())
    return FrequencyTable(
        counts=[int(c) for c in counts],
        offset=offset,
        min=lo,
        max=hi,
        spread=hi - lo,
        chi_square=chi_square,
    )


def tabulate(
    sampler: Sampler, low: int, high: int, trials: int
) -> FrequencyTable:
    values = [sampler.next(low, high) for _ in range(trials)]
    return frequency(values, high - low, low)


def sweep(
    sampler: Sampler,
    low: int,
    trials: int,
    widths: Iterable[int] = range(1, 12),
) -> list[tuple[int, int, list[int]]]:
    """Draw ``trials`` values for each width; returns (low, high, values)."""
    rows = []
    for width in widths:
        high = low + width
        values = [sampler.next(low, high) for _ in range(trials)]
        rows.append((low, high, values))
    return rows


def compression_report(text: str) -> CompressionReport:
    raw = text.encode()
    comp = zlib.compress(raw)
    deflated = 100 * (1 - len(comp) / len(raw)) if raw else 0.0
    return CompressionReport(
        raw_bytes=len(raw),
        compressed_bytes=len(comp),
        deflated_percent=deflated,
    )


def generate(
    sampler: Sampler,
    low: int,
    n: int,
    trials: int,
    bitstream: bool = False,
) -> GenerateReport:
    """Draw a sequence from [low, low + n) and summarise it.

    With ``bitstream`` and a width of 2 the values are joined without a
    delimiter, giving a plain string of bits.
    """
    high = low + n
    values = [sampler.next(low, high) for _ in range(trials)]
    delim = "" if bitstream and n == 2 else ", "
    text = delim.join(str(v) for v in values)
    return GenerateReport(
        low=low,
        high=high,
        values=values,
        text=text,
        frequency=frequency(values, n, low),
        compression=compression_report(text),
    )


def coupon_collect(sampler: Sampler, n: int) -> list[int]:
    """Draw from [0, n) until every value has appeared at least once."""
    if n < 1:
        raise InvalidRangeError(f"empty range [0, {n})")
    seen = np.zeros(n, dtype=bool)
    missing = n
    draws: list[int] = []
    while missing > 0:
        x = sampler.next(0, n)
        draws.append(x)
        if not seen[x]:
            seen[x] = True
            missing -= 1
    return draws


def expected_coupon_length(n: int) -> float:
    """n * H(n): mean number of draws to collect all n coupons."""
    return n * sum(1.0 / i for i in range(1, n + 1))


def coupon_collector(
    sampler: Sampler,
    n: int,
    count: int,
    seed: int,
    source_factory: Callable[[int], UniformSource] = SeededGenerator,
    report: Callable[[list[int]], None] | None = None,
) -> CouponSummary:
    """Run ``count`` coupon-collector trials, each on a fresh session.

    Trial i resets the sampler with ``source_factory(seed + i)``. If given,
    ``report`` is called with each trial's full draw sequence.
    """
    if count <= 0:
        raise ValueError(f"trial count must be positive, got {count}")
    lengths = []
    for i in range(count):
        sampler.reset(source_factory(seed + i))
        draws = coupon_collect(sampler, n)
        if report is not None:
            report(draws)
        lengths.append(len(draws))
    expected = expected_coupon_length(n)
    arr = np.asarray(lengths)
    return CouponSummary(
        n=n,
        lengths=lengths,
        mean=float(arr.mean()),
        min=int(arr.min()),
        max=int(arr.max()),
        expected=expected,
        below_expected=int((arr < expected).sum()),
    )


def compare_skew(
    n: int,
    trials: int,
    seed: int = 0,
    resolution: int = DEFAULT_RESOLUTION,
    source_factory: Callable[[int], UniformSource] = SeededGenerator,
) -> SkewComparison:
    """Tabulate [0, n) in Unadjusted and Adjusted mode on identical sources.

    Both samplers read ``source_factory(seed)`` through a QuantizedSource,
    so the source behaves as if it had exactly ``resolution`` outputs.
    Unadjusted skew only shows up at a practical trial count when
    ``resolution`` is not much larger than ``n``. At 2**32 the bias is one
    preimage in about 2**32 / n.
    """
    tables = {}
    rejects = 0
    for mode in (Mode.UNADJUSTED, Mode.ADJUSTED):
        sampler = Sampler(
            SamplerConfig(
                source=QuantizedSource(source_factory(seed), resolution),
                mode=mode,
                resolution=resolution,
            )
        )
        tables[mode] = tabulate(sampler, 0, n, trials)
        if mode is Mode.ADJUSTED:
            rejects = sampler.snapshot().reject_count
    return SkewComparison(
        n=n,
        trials=trials,
        resolution=resolution,
        unadjusted=tables[Mode.UNADJUSTED],
        adjusted=tables[Mode.ADJUSTED],
        adjusted_rejects=rejects,
    )


def format_counts(counts: Sequence[int]) -> str:
    return ", ".join(str(c) for c in counts)
