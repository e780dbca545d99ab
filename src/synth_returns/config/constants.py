"""Constantes centrais utilizadas em múltiplos módulos.

O arquivo consolida valores numéricos (tamanho mínimo de série, fração de ruído
padrão) e os backends de execução aceitos, evitando literais mágicos
espalhados pelo projeto.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "BACKENDS",
    "DEFAULT_BACKEND",
    "DEFAULT_NOISE_FRAC",
    "MIN_SERIES_LENGTH",
]


# Numeric constants ---------------------------------------------------------

DEFAULT_NOISE_FRAC: Final[float] = 0.10
"""Fração do desvio-padrão da série usada como volatilidade do ruído."""

MIN_SERIES_LENGTH: Final[int] = 2
"""Menor série aceita: ``floor(n/2)`` precisa ser pelo menos 1."""

# Execution ----------------------------------------------------------------

BACKENDS: Final[tuple[str, ...]] = ("sequential", "thread", "process", "joblib")
DEFAULT_BACKEND: Final[str] = "sequential"
