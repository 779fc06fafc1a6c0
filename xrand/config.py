"""Sampler configuration and the resolution arithmetic shared by all modes.

Adjusted mode treats every source as if it produced one of ``resolution``
equally likely raw indexes: ``x = floor(next() * resolution)``. The default
of 2**32 matches ``SeededGenerator``'s 32-bit output exactly.

It keeps only ``x < rejection_limit(n)``, the largest multiple
of ``n`` not exceeding the resolution, so every result in ``[0, n)`` has
exactly ``limit / n`` preimages. A draw is rejected with probability
``rejection_probability(n) < n / resolution``; the expected number of
source calls per result is ``1 / (1 - p)``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sources import UniformSource

DEFAULT_RESOLUTION = 2**32
MAX_RESOLUTION = 2**53  # a double has 53 significant bits


class Mode(enum.Enum):
    ADJUSTED = "adjusted"
    # Biased whenever resolution % n != 0: the first (resolution % n)
    # results get one extra preimage each. Kept for comparison only.
    UNADJUSTED = "unadjusted"
    REFERENCE = "reference"


@dataclass(frozen=True)
class SamplerConfig:
    source: UniformSource | None = None
    mode: Mode | str = Mode.ADJUSTED
    reference_data: tuple[int, ...] | None = None
    resolution: int = DEFAULT_RESOLUTION

    def __post_init__(self) -> None:
        if self.reference_data is not None and not isinstance(
            self.reference_data, tuple
        ):
            object.__setattr__(
                self, "reference_data", tuple(self.reference_data)
            )


def rejection_limit(n: int, resolution: int = DEFAULT_RESOLUTION) -> int:
    """Largest multiple of n that does not exceed resolution."""
    return (resolution // n) * n


def rejection_probability(
    n: int, resolution: int = DEFAULT_RESOLUTION
) -> float:
    """Chance that a single Adjusted-mode draw for width n is discarded."""
    return (resolution - rejection_limit(n, resolution)) / resolution
