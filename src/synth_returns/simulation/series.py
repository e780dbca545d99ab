"""Bootstrap de uma única série com blocos de tamanho aleatório.

Algoritmo
---------
1. Sorteia blocos circulares (:func:`~synth_returns.simulation.blocks.sample_block`)
   e concatena seus valores até acumular pelo menos ``n`` observações.
2. Trunca o acumulador nas primeiras ``n`` posições (o último bloco pode ser
   parcialmente descartado).
3. Soma ruído ``Normal(0, noise_frac * std(series))``, onde ``std`` é o
   desvio-padrão amostral (``ddof=1``) da série **original**.

A entrada nunca é alterada. Séries constantes produzem ``std = 0`` e, portanto,
nenhuma perturbação.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..config.constants import DEFAULT_NOISE_FRAC
from ..exceptions import InvalidInputError
from ..utils.checks import as_float_array, validate_noise_frac
from ..utils.logging_config import log_dict
from ..utils.seed import rng_factory
from .blocks import Block, BlockRange, block_indices, draw_block, resolve_block_range

__all__ = ["BlockTrace", "bootstrap_one_column", "bootstrap_series"]

logger = logging.getLogger(__name__)

BlockTrace = Callable[[Block], None]
SeriesLike = Union[pd.Series, np.ndarray, Sequence[float]]


def bootstrap_one_column(
    series: np.ndarray,
    noise_frac: float,
    rng: np.random.Generator,
    *,
    block_range: BlockRange | None = None,
    trace: Optional[BlockTrace] = None,
) -> np.ndarray:
    """Resample one already-validated float series and add scaled Gaussian noise.

    Pure apart from consuming entropy from ``rng``; returns a new array of
    length ``len(series)``.
    """
    n = int(series.size)
    low, high = resolve_block_range(n, block_range)

    # the last block overshoots by at most high - 1 values
    buffer = np.empty(n + high, dtype=float)
    filled = 0
    n_blocks = 0
    debug = logger.isEnabledFor(logging.DEBUG)
    while filled < n:
        block = draw_block(n, low, high, rng)
        if trace is not None:
            trace(block)
        if debug:
            logger.debug(
                "block sampled",
                extra={
                    "block_number": n_blocks,
                    "block_start": block.start_index,
                    "block_length": block.length,
                },
            )
        buffer[filled : filled + block.length] = series[block_indices(block, n)]
        filled += block.length
        n_blocks += 1

    resampled = buffer[:n].copy()

    series_std = float(np.std(series, ddof=1))
    noise_sd = noise_frac * series_std
    noise = rng.normal(0.0, noise_sd, size=n)

    log_dict(
        logger,
        "series resampled",
        {"n_obs": n, "n_blocks": n_blocks, "noise_sd": noise_sd},
        level=logging.DEBUG,
    )
    return resampled + noise


def bootstrap_series(
    series: SeriesLike,
    *,
    noise_frac: float = DEFAULT_NOISE_FRAC,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    block_range: BlockRange | None = None,
    trace: Optional[BlockTrace] = None,
) -> Union[np.ndarray, pd.Series]:
    """Generate one synthetic series of the same length as ``series``.

    Parameters
    ----------
    series:
        Sequência 1D de retornos (``n >= 2``, sem NaN). Uma ``pd.Series`` gera
        uma ``pd.Series`` com o mesmo índice e nome; os demais tipos geram
        ``np.ndarray``.
    noise_frac:
        Volatilidade do ruído como fração do desvio-padrão amostral da série.
    rng, seed:
        Gerador a ser consumido ou seed para criar um novo. Informe no máximo
        um dos dois; sem nenhum, usa entropia do sistema.
    block_range:
        Limites de comprimento de bloco; padrão ``[1, n // 2]``.
    trace:
        Callback opcional chamado com cada :class:`Block` sorteado.

    Raises
    ------
    InvalidInputError
        Série curta (``n < 2``), com NaN, ``noise_frac`` negativo ou faixa de
        blocos vazia. Nenhum número aleatório é consumido nesse caso.
    """
    values = as_float_array(series, context="bootstrap_series")
    noise = validate_noise_frac(noise_frac)
    resolve_block_range(values.size, block_range)
    if rng is not None and seed is not None:
        raise InvalidInputError("Pass either rng or seed, not both.")

    generator = rng if rng is not None else rng_factory(seed)
    synthetic = bootstrap_one_column(
        values, noise, generator, block_range=block_range, trace=trace
    )
    if isinstance(series, pd.Series):
        return pd.Series(synthetic, index=series.index.copy(), name=series.name)
    return synthetic
