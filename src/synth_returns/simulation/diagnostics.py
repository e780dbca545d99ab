"""Comparação de momentos entre painel original e sintético.

Relatório apenas: o bootstrap não tenta reproduzir os momentos empíricos.
"""

from __future__ import annotations

import pandas as pd

from ..data.matrix import TimeSeriesMatrix
from .portfolio import ReturnsInput

__all__ = ["describe_moments", "moment_comparison"]

_STATS = ("mean", "std", "skew", "kurtosis", "autocorr_1")


def _frame(data: ReturnsInput) -> pd.DataFrame:
    return data.to_frame() if isinstance(data, TimeSeriesMatrix) else data


def describe_moments(returns: ReturnsInput) -> pd.DataFrame:
    """Per-asset mean, std (ddof=1), skew, excess kurtosis and lag-1 autocorrelation."""
    frame = _frame(returns)
    table = pd.DataFrame(
        {
            "mean": frame.mean(),
            "std": frame.std(ddof=1),
            "skew": frame.skew(),
            "kurtosis": frame.kurt(),
            "autocorr_1": frame.apply(lambda col: col.autocorr(lag=1)),
        }
    )
    table.index.name = "asset"
    return table


def moment_comparison(original: ReturnsInput, synthetic: ReturnsInput) -> pd.DataFrame:
    """Side-by-side moments with ``synthetic - original`` differences.

    Columns form a two-level index ``(statistic, {original, synthetic, diff})``.
    """
    orig = describe_moments(original)
    synth = describe_moments(synthetic).reindex(orig.index)
    pieces = {}
    for stat in _STATS:
        pieces[stat] = pd.DataFrame(
            {
                "original": orig[stat],
                "synthetic": synth[stat],
                "diff": synth[stat] - orig[stat],
            }
        )
    return pd.concat(pieces, axis=1)
