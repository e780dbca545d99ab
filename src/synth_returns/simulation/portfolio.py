"""Bootstrap coluna a coluna de um painel de retornos.

Cada ativo é reamostrado de forma independente (blocos e ruído próprios), de
modo que a correlação entre ativos **não** é preservada. O índice de datas e os
identificadores de coluna da saída são os mesmos da entrada.

Modos de aleatoriedade
----------------------
- ``rng=`` (gerador compartilhado): colunas processadas em sequência, na ordem
  das colunas. Reprodutível a partir de uma única seed.
- ``seed=`` (um gerador por coluna, via ``SeedSequence.spawn``): permite
  *fan-out* em ``thread``/``process``/``joblib``; o resultado de cada coluna
  depende apenas de ``(seed, posição da coluna)``, qualquer que seja o backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Hashable, Optional, Union

import numpy as np
import pandas as pd

from ..config.constants import DEFAULT_BACKEND, DEFAULT_NOISE_FRAC
from ..config.schemas import BootstrapConfig
from ..config.loader import PathLike, load_bootstrap_config
from ..config.settings import Settings, get_settings
from ..data.matrix import TimeSeriesMatrix
from ..exceptions import InvalidInputError
from ..utils.checks import validate_noise_frac, validate_returns_frame
from ..utils.logging_config import log_dict
from ..utils.parallel import collect_exceptions, parallel_map
from ..utils.seed import spawn_generators
from .blocks import Block, BlockRange, resolve_block_range
from .series import bootstrap_one_column

__all__ = ["ColumnTrace", "PortfolioBootstrapper", "bootstrap_returns"]

logger = logging.getLogger(__name__)

ColumnTrace = Callable[[Hashable, Block], None]
ReturnsInput = Union[pd.DataFrame, TimeSeriesMatrix]


@dataclass(frozen=True)
class _ColumnTask:
    values: np.ndarray
    noise_frac: float
    rng: np.random.Generator
    block_range: BlockRange | None
    trace: Optional[Callable[[Block], None]]


def _run_column_task(task: _ColumnTask) -> np.ndarray:
    return bootstrap_one_column(
        task.values,
        task.noise_frac,
        task.rng,
        block_range=task.block_range,
        trace=task.trace,
    )


def _as_frame(returns: ReturnsInput) -> pd.DataFrame:
    if isinstance(returns, TimeSeriesMatrix):
        return returns.to_frame()
    if isinstance(returns, pd.DataFrame):
        validate_returns_frame(returns, context="bootstrap_returns")
        return returns
    raise TypeError("returns must be a pandas DataFrame or a TimeSeriesMatrix")


def bootstrap_returns(
    returns: ReturnsInput,
    *,
    noise_frac: float = DEFAULT_NOISE_FRAC,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    block_range: BlockRange | None = None,
    backend: str = DEFAULT_BACKEND,
    max_workers: int | None = None,
    trace: Optional[ColumnTrace] = None,
) -> ReturnsInput:
    """Produce one synthetic return matrix with the same shape and index as ``returns``.

    Parameters
    ----------
    returns:
        ``DataFrame`` (linhas = datas, colunas = ativos) ou
        :class:`TimeSeriesMatrix`, sem valores faltantes. O tipo da saída
        acompanha o da entrada.
    noise_frac:
        Volatilidade do ruído como fração do desvio-padrão de cada coluna.
    rng:
        Gerador compartilhado; força execução sequencial.
    seed:
        Seed raiz para geradores independentes por coluna.
    block_range:
        Limites de comprimento de bloco; padrão ``[1, n // 2]``.
    backend, max_workers:
        Execução das colunas (``sequential``, ``thread``, ``process``,
        ``joblib``). Só aplicável sem ``rng``.
    trace:
        Callback opcional ``trace(column, block)`` para cada bloco sorteado.
        Precisa ser *picklable* no backend ``process``/``joblib``.

    Raises
    ------
    InvalidInputError
        Menos de 2 linhas, nenhuma coluna, NaN, ``noise_frac`` negativo, faixa
        de blocos vazia ou gerador compartilhado com backend paralelo.
    """
    frame = _as_frame(returns)
    noise = validate_noise_frac(noise_frac)
    n_rows, n_cols = frame.shape
    resolve_block_range(n_rows, block_range)
    if rng is not None and seed is not None:
        raise InvalidInputError("Pass either rng or seed, not both.")
    if rng is not None and backend != "sequential":
        raise InvalidInputError(
            f"A shared generator cannot be used with the '{backend}' backend; pass seed instead."
        )

    columns = list(frame.columns)
    traces = [None if trace is None else partial(trace, column) for column in columns]
    arrays = [frame[column].to_numpy(dtype=float, copy=True) for column in columns]

    if rng is not None:
        mode = "shared"
        results = [
            bootstrap_one_column(values, noise, rng, block_range=block_range, trace=col_trace)
            for values, col_trace in zip(arrays, traces)
        ]
    else:
        mode = "per_column"
        generators = spawn_generators(seed, n_cols)
        tasks = [
            _ColumnTask(values, noise, generator, block_range, col_trace)
            for values, generator, col_trace in zip(arrays, generators, traces)
        ]
        outputs = parallel_map(_run_column_task, tasks, backend=backend, max_workers=max_workers)
        results, errors = collect_exceptions(outputs, re_raise=False)
        if errors:
            # same exception type as the inline path, whatever the backend
            raise errors[0]

    synthetic = pd.DataFrame(
        {position: values for position, values in enumerate(results)},
        index=frame.index.copy(),
    )
    synthetic.columns = frame.columns.copy()

    log_dict(
        logger,
        "returns bootstrapped",
        {"n_rows": n_rows, "n_assets": n_cols, "mode": mode, "backend": backend, "noise_frac": noise},
        level=logging.DEBUG,
    )

    if isinstance(returns, TimeSeriesMatrix):
        return TimeSeriesMatrix.from_frame(synthetic)
    return synthetic


class PortfolioBootstrapper:
    """Config-driven entry point around :func:`bootstrap_returns`.

    Example
    -------
    >>> bootstrapper = PortfolioBootstrapper(BootstrapConfig(noise_frac=0.05, seed=7))
    >>> synthetic = bootstrapper.bootstrap(returns)
    """

    def __init__(
        self,
        config: BootstrapConfig | None = None,
        *,
        trace: Optional[ColumnTrace] = None,
    ) -> None:
        self.config = config or BootstrapConfig()
        self.trace = trace

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> "PortfolioBootstrapper":
        settings = settings or get_settings()
        return cls(BootstrapConfig.from_settings(settings, **overrides))

    @classmethod
    def from_config(
        cls,
        name: PathLike,
        *,
        settings: Settings | None = None,
        trace: Optional[ColumnTrace] = None,
        **overrides,
    ) -> "PortfolioBootstrapper":
        """Build from a YAML file (e.g. ``"bootstrap_default"`` in ``settings.configs_dir``)."""
        return cls(load_bootstrap_config(name, settings=settings, **overrides), trace=trace)

    @property
    def block_range(self) -> BlockRange:
        return BlockRange(self.config.min_block_length, self.config.max_block_length)

    def bootstrap(
        self,
        returns: ReturnsInput,
        *,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> ReturnsInput:
        """Bootstrap ``returns`` once.

        ``rng`` takes precedence over any seed; an explicit ``seed`` overrides
        ``config.seed``.
        """
        cfg = self.config
        if rng is not None:
            return bootstrap_returns(
                returns,
                noise_frac=cfg.noise_frac,
                rng=rng,
                block_range=self.block_range,
                trace=self.trace,
            )
        return bootstrap_returns(
            returns,
            noise_frac=cfg.noise_frac,
            seed=cfg.seed if seed is None else seed,
            block_range=self.block_range,
            backend=cfg.backend,
            max_workers=cfg.max_workers,
            trace=self.trace,
        )

    __call__ = bootstrap

    def scenarios(self, returns: ReturnsInput, *, seed: int | None = None) -> list[ReturnsInput]:
        """Generate ``config.n_paths`` synthetic panels with the configured settings."""
        from .scenarios import generate_scenarios

        cfg = self.config
        return generate_scenarios(
            returns,
            n_paths=cfg.n_paths,
            noise_frac=cfg.noise_frac,
            seed=cfg.seed if seed is None else seed,
            block_range=self.block_range,
            backend=cfg.backend,
            max_workers=cfg.max_workers,
        )

    def __repr__(self) -> str:
        return f"PortfolioBootstrapper(config={self.config!r})"
