"""Validações amigáveis de entrada.

Funções utilitárias que inspecionam séries e painéis de retornos e levantam
:class:`~synth_returns.exceptions.InvalidInputError` com mensagens descritivas
antes que qualquer número aleatório seja sorteado.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..config.constants import MIN_SERIES_LENGTH
from ..exceptions import InvalidInputError

__all__ = [
    "as_float_array",
    "assert_min_length",
    "assert_no_nans",
    "validate_noise_frac",
    "validate_returns_frame",
]


def _with_context(msg: str, context: str) -> str:
    return f"[{context}] {msg}" if context else msg


def assert_no_nans(obj, context: str = "") -> None:
    """Garante ausência de NaN/inf; relata as posições encontradas.

    Aceita DataFrame, Series ou ndarray. Outros tipos levantam ``TypeError``.
    """
    if isinstance(obj, pd.DataFrame):
        values = obj.to_numpy(dtype=float)
        bad = np.argwhere(~np.isfinite(values))
        if bad.size:
            details = ", ".join(f"(row {r}, col '{obj.columns[c]}')" for r, c in bad[:10])
            raise InvalidInputError(_with_context(f"Input contains missing values at {details}.", context))
    elif isinstance(obj, pd.Series):
        mask = ~np.isfinite(obj.to_numpy(dtype=float))
        if mask.any():
            details = ", ".join(f"index {i}" for i in obj.index[mask][:10])
            raise InvalidInputError(_with_context(f"Input contains missing values at {details}.", context))
    elif isinstance(obj, np.ndarray):
        bad = np.argwhere(~np.isfinite(obj))
        if bad.size:
            details = ", ".join(f"index {tuple(idx)}" for idx in bad[:10])
            raise InvalidInputError(_with_context(f"Input contains missing values at {details}.", context))
    else:
        raise TypeError("Expected a DataFrame, Series or ndarray.")


def assert_min_length(length: int, minimum: int = MIN_SERIES_LENGTH, context: str = "") -> None:
    if length < minimum:
        raise InvalidInputError(
            _with_context(f"Series length must be >= {minimum}, got {length}.", context)
        )


def validate_noise_frac(noise_frac: float) -> float:
    value = float(noise_frac)
    if not np.isfinite(value) or value < 0:
        raise InvalidInputError(f"noise_frac must be a finite value >= 0, got {noise_frac!r}.")
    return value


def as_float_array(series, context: str = "") -> np.ndarray:
    """Converte uma sequência 1D em ``ndarray`` float validado (sem NaN, n >= 2).

    Sempre devolve uma cópia; a entrada nunca é alterada.
    """
    if isinstance(series, pd.DataFrame):
        raise TypeError("Expected a one-dimensional sequence, got a DataFrame.")
    try:
        if isinstance(series, pd.Series):
            arr = series.to_numpy(dtype=float, copy=True)
        else:
            arr = np.array(series, dtype=float, copy=True)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Cannot interpret input as a numeric sequence: {exc}") from exc
    if arr.ndim != 1:
        raise InvalidInputError(_with_context(f"Expected a 1D series, got shape {arr.shape}.", context))
    assert_min_length(arr.size, context=context)
    assert_no_nans(arr, context=context)
    return arr


def validate_returns_frame(df: pd.DataFrame, context: str = "") -> None:
    """Valida um painel de retornos (linhas = datas, colunas = ativos).

    Checa: pelo menos uma coluna, ``MIN_SERIES_LENGTH`` linhas, índice
    estritamente crescente e sem duplicatas, colunas numéricas, sem NaN.
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError("Returns must be a pandas DataFrame.")
    if df.shape[1] == 0:
        raise InvalidInputError(_with_context("Returns matrix has no columns.", context))
    if df.shape[0] < MIN_SERIES_LENGTH:
        raise InvalidInputError(
            _with_context(
                f"Returns matrix needs at least {MIN_SERIES_LENGTH} rows, got {df.shape[0]}.",
                context,
            )
        )
    if not df.index.is_unique:
        raise InvalidInputError(_with_context("Index contains duplicate timestamps.", context))
    if not df.index.is_monotonic_increasing:
        raise InvalidInputError(_with_context("Index must be sorted in increasing order.", context))
    if not df.columns.is_unique:
        raise InvalidInputError(_with_context("Column identifiers must be unique.", context))
    if not all(pd.api.types.is_numeric_dtype(dtype) for dtype in df.dtypes):
        raise InvalidInputError(_with_context("All columns must be numeric.", context))
    assert_no_nans(df, context=context)
