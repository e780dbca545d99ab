"""Synth Returns: geração de retornos sintéticos via block bootstrap circular.

O código-fonte vive em `src/synth_returns/` e é consumido como biblioteca:

- `simulation` → BlockSampler, SeriesBootstrapper, PortfolioBootstrapper e
  cenários Monte Carlo.
- `data` → contêiner `TimeSeriesMatrix`.
- `config` → Settings, schemas pydantic e logging.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .data.matrix import TimeSeriesMatrix
from .exceptions import InvalidInputError
from .simulation import (
    Block,
    BlockRange,
    PortfolioBootstrapper,
    bootstrap_returns,
    bootstrap_series,
    generate_scenarios,
    sample_block,
)

try:  # pragma: no cover - depende de instalação do pacote
    __version__ = version("synth-returns")
except PackageNotFoundError:  # pragma: no cover - fallback para ambiente sem install
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "Block",
    "BlockRange",
    "InvalidInputError",
    "PortfolioBootstrapper",
    "TimeSeriesMatrix",
    "bootstrap_returns",
    "bootstrap_series",
    "generate_scenarios",
    "sample_block",
]
