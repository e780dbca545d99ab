"""Contêiner imutável para painéis de retornos datados.

``TimeSeriesMatrix`` é o formato de entrada e saída do bootstrap: um índice de
datas estritamente crescente e sem duplicatas, mais uma coluna float por ativo,
todas do mesmo tamanho e sem valores faltantes. Operações sempre produzem uma
nova instância; os dados internos nunca são expostos para escrita.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

import numpy as np
import pandas as pd

from ..exceptions import InvalidInputError
from ..utils.checks import validate_returns_frame

__all__ = ["TimeSeriesMatrix"]


def _to_datetime_index(index: Iterable) -> pd.DatetimeIndex:
    """Converte para ``DatetimeIndex`` tz-naive em UTC.

    Índices numéricos (ex.: ``RangeIndex``) são rejeitados: seriam lidos como
    nanossegundos desde 1970. Índices com timezone são convertidos para UTC.
    """
    if isinstance(index, pd.DatetimeIndex):
        out = index
    else:
        values = index if isinstance(index, pd.Index) else pd.Index(list(index))
        if pd.api.types.is_numeric_dtype(values.dtype) or pd.api.types.is_bool_dtype(values.dtype):
            raise InvalidInputError(
                f"Index must hold timestamps, got numeric dtype {values.dtype}."
            )
        try:
            out = pd.DatetimeIndex(pd.to_datetime(values))
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Index cannot be interpreted as timestamps: {exc}") from exc
    if out.tz is not None:
        out = out.tz_convert(None)
    return out


@dataclass(frozen=True, slots=True, init=False, eq=False)
class TimeSeriesMatrix:
    """Ordered, dated, multi-column float matrix.

    Construa via :meth:`from_frame` ou :meth:`from_columns`. O ``DataFrame``
    interno é uma cópia privada; :meth:`to_frame` devolve outra cópia.
    """

    _frame: pd.DataFrame

    def __init__(self, frame: pd.DataFrame) -> None:
        if not isinstance(frame, pd.DataFrame):
            raise TypeError("TimeSeriesMatrix expects a pandas DataFrame.")
        data = frame.copy()
        data.index = _to_datetime_index(data.index)
        data.columns = [str(column) for column in data.columns]
        validate_returns_frame(data, context="TimeSeriesMatrix")
        data = data.astype(float)
        object.__setattr__(self, "_frame", data)

    # Construtores ------------------------------------------------------------

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "TimeSeriesMatrix":
        return cls(frame)

    @classmethod
    def from_columns(
        cls,
        index: Iterable,
        columns: Mapping[str, Sequence[float]],
    ) -> "TimeSeriesMatrix":
        """Build a matrix from a timestamp sequence and an asset → values mapping."""
        timestamps = _to_datetime_index(index)
        for name, values in columns.items():
            if len(values) != len(timestamps):
                raise InvalidInputError(
                    f"Column '{name}' has {len(values)} values but the index has "
                    f"{len(timestamps)} timestamps."
                )
        frame = pd.DataFrame(
            {name: np.asarray(values, dtype=float) for name, values in columns.items()},
            index=timestamps,
        )
        return cls(frame)

    # Acesso -----------------------------------------------------------------

    @property
    def index(self) -> pd.DatetimeIndex:
        return self._frame.index.copy()

    @property
    def columns(self) -> list[str]:
        return list(self._frame.columns)

    @property
    def shape(self) -> tuple[int, int]:
        return self._frame.shape

    def __len__(self) -> int:
        return len(self._frame)

    def column(self, name: str) -> np.ndarray:
        try:
            return self._frame[name].to_numpy(dtype=float, copy=True)
        except KeyError as exc:
            raise KeyError(f"Unknown column: {name}") from exc

    def to_frame(self) -> pd.DataFrame:
        return self._frame.copy()

    def with_columns(self, columns: Mapping[str, Sequence[float]]) -> "TimeSeriesMatrix":
        """Return a new matrix on the same index with the given column values."""
        return type(self).from_columns(self._frame.index, columns)

    def equals(self, other: object) -> bool:
        return isinstance(other, TimeSeriesMatrix) and self._frame.equals(other._frame)

    def __repr__(self) -> str:
        n_rows, n_cols = self.shape
        start = self._frame.index[0].date()
        end = self._frame.index[-1].date()
        return f"TimeSeriesMatrix(rows={n_rows}, columns={n_cols}, {start} → {end})"
