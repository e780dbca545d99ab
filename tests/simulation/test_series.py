from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from synth_returns.exceptions import InvalidInputError
from synth_returns.simulation.blocks import Block, BlockRange, block_indices
from synth_returns.simulation.series import bootstrap_one_column, bootstrap_series


def _baseline_from_blocks(series: np.ndarray, blocks: list[Block]) -> np.ndarray:
    n = len(series)
    pieces = [series[block_indices(block, n)] for block in blocks]
    return np.concatenate(pieces)[:n]


def test_scripted_blocks_assemble_expected_sequence(scripted_rng) -> None:
    # blocks (start=2, len=3), (start=0, len=2), (start=5, len=1)
    rng = scripted_rng([3, 2, 2, 0, 1, 5])
    seen: list[Block] = []

    result = bootstrap_series(
        [1, 2, 3, 4, 5, 6], noise_frac=0.0, rng=rng, trace=seen.append
    )

    assert seen[:2] == [Block(2, 3), Block(0, 2)]
    assert _baseline_from_blocks(np.arange(1.0, 7.0), seen[:2]).tolist() == [3, 4, 5, 1, 2]
    assert len(result) == 6
    assert set(result.tolist()) <= {1, 2, 3, 4, 5, 6}
    assert result.tolist() == [3, 4, 5, 1, 2, 6]


def test_last_block_is_truncated(scripted_rng) -> None:
    rng = scripted_rng([2, 0, 2, 0, 3, 0])
    result = bootstrap_series([1, 2, 3, 4, 5, 6], noise_frac=0.0, rng=rng)
    assert result.tolist() == [1, 2, 1, 2, 1, 2]


@pytest.mark.parametrize("n", [2, 3, 10, 101, 1000])
def test_output_length_matches_input(n: int) -> None:
    series = np.random.default_rng(n).normal(size=n)
    result = bootstrap_series(series, seed=3)
    assert result.shape == (n,)


def test_two_element_series_is_supported() -> None:
    result = bootstrap_series([0.01, -0.02], noise_frac=0.0, seed=0)
    assert len(result) == 2
    assert set(result.tolist()) <= {0.01, -0.02}


def test_single_element_series_is_rejected() -> None:
    with pytest.raises(InvalidInputError):
        bootstrap_series([0.01], seed=0)


def test_values_come_from_input_without_noise() -> None:
    series = np.random.default_rng(7).normal(size=300)
    result = bootstrap_series(series, noise_frac=0.0, seed=11)
    assert np.isin(result, series).all()


def test_noise_std_matches_fraction_of_input_std() -> None:
    series = np.random.default_rng(99).standard_t(df=5, size=4_000) * 0.01
    noise_frac = 0.25
    target = noise_frac * np.std(series, ddof=1)

    residual_stds = []
    for seed in range(20):
        blocks: list[Block] = []
        result = bootstrap_series(
            series, noise_frac=noise_frac, seed=seed, trace=blocks.append
        )
        residual = result - _baseline_from_blocks(series, blocks)
        residual_stds.append(np.std(residual, ddof=1))

    assert np.mean(residual_stds) == pytest.approx(target, rel=0.03)


def test_same_seed_gives_identical_output() -> None:
    series = np.random.default_rng(1).normal(size=250)
    first = bootstrap_series(series, seed=123)
    second = bootstrap_series(series, seed=123)
    assert np.array_equal(first, second)


def test_different_seeds_give_different_output() -> None:
    series = np.random.default_rng(1).normal(size=250)
    assert not np.array_equal(bootstrap_series(series, seed=1), bootstrap_series(series, seed=2))


def test_constant_series_gets_no_noise() -> None:
    result = bootstrap_series(np.full(50, 0.003), noise_frac=0.5, seed=4)
    assert np.allclose(result, 0.003, atol=0.0)


def test_input_is_not_mutated() -> None:
    series = np.linspace(-0.05, 0.05, 40)
    snapshot = series.copy()
    bootstrap_series(series, seed=0)
    assert np.array_equal(series, snapshot)


def test_pandas_series_round_trips_index_and_name() -> None:
    index = pd.date_range("2021-01-01", periods=30, freq="D")
    series = pd.Series(np.linspace(0, 1, 30), index=index, name="SPY")
    result = bootstrap_series(series, seed=0)
    assert isinstance(result, pd.Series)
    assert result.index.equals(index)
    assert result.name == "SPY"


@pytest.mark.parametrize(
    "series, kwargs",
    [
        ([0.1, 0.2, 0.3], {"noise_frac": -0.1}),
        ([0.1, np.nan, 0.3], {}),
        ([0.1, 0.2, 0.3, 0.4], {"block_range": BlockRange(3, None)}),
        ([0.1], {}),
    ],
)
def test_invalid_input_consumes_no_randomness(series, kwargs) -> None:
    rng = np.random.default_rng(0)
    state_before = rng.bit_generator.state
    with pytest.raises(InvalidInputError):
        bootstrap_series(series, rng=rng, **kwargs)
    assert rng.bit_generator.state == state_before


def test_rng_and_seed_are_mutually_exclusive() -> None:
    with pytest.raises(InvalidInputError):
        bootstrap_series([0.1, 0.2, 0.3], rng=np.random.default_rng(0), seed=1)


def test_block_range_limits_block_lengths() -> None:
    blocks: list[Block] = []
    bootstrap_series(
        np.arange(100.0), seed=5, block_range=BlockRange(4, 6), trace=blocks.append
    )
    assert blocks
    assert all(4 <= block.length <= 6 for block in blocks)


def test_bootstrap_one_column_logs_blocks_at_debug(caplog) -> None:
    with caplog.at_level("DEBUG", logger="synth_returns.simulation.series"):
        bootstrap_one_column(np.arange(10.0), 0.0, np.random.default_rng(0))
    block_records = [r for r in caplog.records if r.getMessage() == "block sampled"]
    assert block_records
    assert all(1 <= r.block_length <= 5 for r in block_records)
