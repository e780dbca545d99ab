"""Cenários Monte Carlo a partir do bootstrap por coluna.

Gera vários painéis sintéticos independentes, avalia métricas em cada um e
resume a distribuição por intervalos de confiança.
"""

from __future__ import annotations

from typing import Callable, Sequence, Union

import numpy as np
import pandas as pd

from ..config.constants import DEFAULT_BACKEND, DEFAULT_NOISE_FRAC
from ..data.matrix import TimeSeriesMatrix
from ..exceptions import InvalidInputError
from ..utils.logging_config import get_logger
from ..utils.seed import register_seed_logging, spawn_seeds
from .blocks import BlockRange
from .portfolio import ReturnsInput, bootstrap_returns

__all__ = ["confidence_interval", "generate_scenarios", "scenario_metric"]

logger = get_logger(__name__)

MetricOutput = Union[float, pd.Series, pd.DataFrame]


def generate_scenarios(
    returns: ReturnsInput,
    *,
    n_paths: int,
    noise_frac: float = DEFAULT_NOISE_FRAC,
    seed: int | None = None,
    block_range: BlockRange | None = None,
    backend: str = DEFAULT_BACKEND,
    max_workers: int | None = None,
) -> list[ReturnsInput]:
    """Return ``n_paths`` independent synthetic versions of ``returns``.

    Each path gets its own integer seed derived from ``seed``, so path ``i`` is
    reproducible on its own and independent of the backend.
    """
    if n_paths <= 0:
        raise InvalidInputError("n_paths must be positive")

    register_seed_logging(logger, seed)
    path_seeds = spawn_seeds(seed, n_paths)
    scenarios = [
        bootstrap_returns(
            returns,
            noise_frac=noise_frac,
            seed=path_seed,
            block_range=block_range,
            backend=backend,
            max_workers=max_workers,
        )
        for path_seed in path_seeds
    ]
    logger.info("Gerados %d cenários sintéticos", n_paths, extra={"n_paths": n_paths})
    return scenarios


def scenario_metric(
    metric_fn: Callable[[pd.DataFrame], MetricOutput],
    scenarios: Sequence[ReturnsInput],
) -> pd.DataFrame:
    """Evaluate ``metric_fn`` on every scenario.

    Returns a ``DataFrame`` where each row corresponds to one path and columns
    mirror the metric output (scalar → single column named ``value``).
    """
    if not scenarios:
        raise InvalidInputError("scenarios must not be empty")

    metric_rows = []
    columns = None

    for scenario in scenarios:
        frame = scenario.to_frame() if isinstance(scenario, TimeSeriesMatrix) else scenario
        evaluated = metric_fn(frame)
        if isinstance(evaluated, pd.DataFrame):
            flattened = evaluated.stack()
            metric_rows.append(flattened)
            columns = flattened.index if columns is None else columns
        elif isinstance(evaluated, pd.Series):
            metric_rows.append(evaluated)
            columns = evaluated.index if columns is None else columns
        else:
            metric_rows.append(pd.Series(float(evaluated), index=["value"]))
            columns = ["value"]

    result = pd.DataFrame(metric_rows).reset_index(drop=True)
    if columns is not None:
        result = result.reindex(columns=columns)
    result.index.name = "path_id"
    return result


def confidence_interval(
    samples: Sequence[float] | pd.Series | np.ndarray,
    *,
    alpha: float = 0.05,
    method: str = "percentile",
) -> tuple[float, float]:
    """Compute a two-sided interval from scenario samples (``percentile`` or ``basic``)."""

    if not 0 < alpha < 1:
        raise ValueError("alpha must lie in (0, 1)")
    array = np.asarray(samples, dtype=float)
    array = array[np.isfinite(array)]
    if array.size == 0:
        raise ValueError("No finite scenario samples available")

    lower_prob = alpha / 2.0
    upper_prob = 1.0 - lower_prob
    method = method.lower()

    if method == "percentile":
        return float(np.quantile(array, lower_prob)), float(np.quantile(array, upper_prob))
    if method == "basic":
        theta_hat = float(np.mean(array))
        lower = 2 * theta_hat - float(np.quantile(array, upper_prob))
        upper = 2 * theta_hat - float(np.quantile(array, lower_prob))
        return lower, upper
    raise ValueError("Unsupported confidence interval method")
