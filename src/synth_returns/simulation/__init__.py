"""Gerador de séries sintéticas por block bootstrap circular.

Fluxo: :func:`bootstrap_returns` (por painel) → :func:`bootstrap_series` /
``bootstrap_one_column`` (por coluna) → :func:`sample_block` (por bloco).
"""

from .blocks import Block, BlockRange, block_indices, sample_block
from .diagnostics import describe_moments, moment_comparison
from .portfolio import PortfolioBootstrapper, bootstrap_returns
from .scenarios import confidence_interval, generate_scenarios, scenario_metric
from .series import bootstrap_one_column, bootstrap_series

__all__ = [
    "Block",
    "BlockRange",
    "PortfolioBootstrapper",
    "block_indices",
    "bootstrap_one_column",
    "bootstrap_returns",
    "bootstrap_series",
    "confidence_interval",
    "describe_moments",
    "generate_scenarios",
    "moment_comparison",
    "sample_block",
    "scenario_metric",
]
