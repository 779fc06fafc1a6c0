"""Per-session sampler counters."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .config import Mode


@dataclass
class SamplerStatistics:
    """Counters for one sampler session.

    ``draw_count`` counts accepted draws (one per successful ``next()``),
    ``reject_count`` counts raw values discarded by the debiasing loop. Their
    sum is the number of times the source or reference data was consulted.
    ``last_raw_variate`` and ``last_result`` are None until the first
    successful draw.
    """

    mode: Mode
    draw_count: int = 0
    reject_count: int = 0
    last_raw_variate: float | None = None
    last_result: int | None = None

    @property
    def consultations(self) -> int:
        return self.draw_count + self.reject_count

    def reset(self) -> None:
        self.draw_count = 0
        self.reject_count = 0
        self.last_raw_variate = None
        self.last_result = None

    def copy(self) -> SamplerStatistics:
        return dataclasses.replace(self)

    def to_dict(self, verbose: bool = False) -> dict:
        d: dict = {
            "mode": self.mode.value,
            "draws": self.draw_count,
            "rejects": self.reject_count,
        }
        if verbose:
            d["last_raw_variate"] = self.last_raw_variate
            d["last_result"] = self.last_result
        return d

    def describe(self, verbose: bool = False) -> str:
        """One-line summary; verbose adds the last raw variate and result."""
        parts = [f"{k}={v}" for k, v in self.to_dict(verbose).items()]
        return ", ".join(parts)
