"""Tests for configuration and rejection-zone arithmetic."""

import dataclasses

import pytest

from .config import (
    DEFAULT_RESOLUTION,
    Mode,
    SamplerConfig,
    rejection_limit,
    rejection_probability,
)
from .sources import SeededGenerator


def test_default_resolution_is_32_bits():
    assert DEFAULT_RESOLUTION == 2**32


@pytest.mark.parametrize(
    "n, limit",
    [
        (1, 2**32),
        (2, 2**32),
        (3, 4294967295),
        (7, 4294967292),  # 2**32 % 7 == 4
        (2**32, 2**32),
    ],
)
def test_rejection_limit(n, limit):
    assert rejection_limit(n) == limit
    assert limit % n == 0


def test_rejection_limit_small_resolution():
    assert rejection_limit(3, 8) == 6
    assert rejection_limit(5, 8) == 5
    assert rejection_limit(8, 8) == 8


def test_rejection_probability_bounded_by_n_over_s():
    for n in [1, 2, 3, 5, 7, 10, 1000, 12345, 2**31 + 1]:
        p = rejection_probability(n)
        assert 0.0 <= p < n / DEFAULT_RESOLUTION


def test_rejection_probability_zero_for_powers_of_two():
    for k in range(0, 33):
        assert rejection_probability(2**k) == 0.0


def test_rejection_probability_small_resolution():
    assert rejection_probability(3, 8) == 0.25


def test_mode_values():
    assert Mode("adjusted") is Mode.ADJUSTED
    assert Mode("unadjusted") is Mode.UNADJUSTED
    assert Mode("reference") is Mode.REFERENCE


def test_config_defaults():
    cfg = SamplerConfig(source=SeededGenerator(1))
    assert cfg.mode is Mode.ADJUSTED
    assert cfg.reference_data is None
    assert cfg.resolution == DEFAULT_RESOLUTION


def test_config_is_frozen():
    cfg = SamplerConfig(source=SeededGenerator(1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.mode = Mode.UNADJUSTED  # type: ignore[misc]


def test_config_reference_data_stored_as_tuple():
    data = [0, 1, 2]
    cfg = SamplerConfig(mode=Mode.REFERENCE, reference_data=data)
    data.append(3)
    assert cfg.reference_data == (0, 1, 2)
