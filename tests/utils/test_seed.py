from __future__ import annotations

import logging

import numpy as np
import pytest
from synth_returns.utils.seed import (
    MAX_SEED_VALUE,
    normalize_seed,
    register_seed_logging,
    rng_factory,
    spawn_generators,
    spawn_seeds,
)


def test_normalize_seed_wraps_range() -> None:
    assert normalize_seed(-5) == 5
    assert normalize_seed(MAX_SEED_VALUE + 3) == 3


def test_rng_factory_is_reproducible() -> None:
    first = rng_factory(123).integers(0, 1_000, size=5)
    second = rng_factory(123).integers(0, 1_000, size=5)
    assert np.array_equal(first, second)


def test_rng_factory_does_not_touch_global_state() -> None:
    np.random.seed(0)
    expected = np.random.rand()
    np.random.seed(0)
    rng_factory(1).random(10)
    assert np.random.rand() == expected


def test_spawn_generators_are_independent_and_stable() -> None:
    gens_a = spawn_generators(7, 3)
    gens_b = spawn_generators(7, 3)

    draws_a = [g.random() for g in gens_a]
    draws_b = [g.random() for g in gens_b]

    assert draws_a == draws_b
    assert len(set(draws_a)) == 3


def test_spawn_generators_prefix_is_stable() -> None:
    # the i-th child depends only on (seed, i)
    assert spawn_generators(7, 2)[1].random() == spawn_generators(7, 5)[1].random()


def test_spawn_seeds_returns_ints_in_range() -> None:
    seeds = spawn_seeds(11, 4)
    assert seeds == spawn_seeds(11, 4)
    assert all(isinstance(s, int) and 0 <= s < MAX_SEED_VALUE for s in seeds)
    assert len(set(seeds)) == 4


@pytest.mark.parametrize("func", [spawn_generators, spawn_seeds])
def test_spawn_rejects_negative_count(func) -> None:
    with pytest.raises(ValueError):
        func(1, -1)


def test_register_seed_logging(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("seed.tests")
    with caplog.at_level(logging.INFO, logger="seed.tests"):
        register_seed_logging(logger, 99)
        register_seed_logging(logger, None)

    assert "99" in caplog.records[0].getMessage()
    assert caplog.records[0].seed == 99
    assert "entropia" in caplog.records[1].getMessage()
