"""Gerenciamento determinístico de seeds.

Objetivo
--------
Centralizar a criação de ``numpy.random.Generator`` para que o bootstrap seja
reprodutível tanto em modo sequencial (um gerador compartilhado) quanto em modo
paralelo (um gerador independente por coluna ou por caminho).

Componentes
-----------
- `normalize_seed(seed)`
    Normaliza seeds negativas ou maiores que ``2**32 - 1``.
- `rng_factory(seed)`
    Retorna `numpy.random.Generator` (PCG64 via ``default_rng``).
- `spawn_generators(seed, n)`
    Deriva ``n`` geradores estatisticamente independentes via ``SeedSequence``.
- `spawn_seeds(seed, n)`
    Deriva ``n`` seeds inteiras, uma por caminho Monte Carlo.
- `register_seed_logging(logger, seed)`
    Loga a seed atual para auditoria.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

MAX_SEED_VALUE = 2**32

__all__ = [
    "MAX_SEED_VALUE",
    "normalize_seed",
    "register_seed_logging",
    "rng_factory",
    "spawn_generators",
    "spawn_seeds",
]


def normalize_seed(seed: int) -> int:
    """Map any integer onto the ``[0, 2**32 - 1]`` range."""
    return abs(int(seed)) % MAX_SEED_VALUE


def rng_factory(seed: Optional[int] = None) -> np.random.Generator:
    """
    Cria e retorna uma instância do gerador de números aleatórios moderno do NumPy.

    Args:
        seed (Optional[int]): A seed para o gerador. Se None, a inicialização
                              será não-determinística.

    Returns:
        np.random.Generator: Uma instância isolada, sem tocar o estado global.
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(normalize_seed(seed))


def spawn_generators(seed: Optional[int], n: int) -> list[np.random.Generator]:
    """
    Deriva ``n`` geradores independentes a partir de uma única seed raiz.

    O i-ésimo gerador depende apenas de ``(seed, i)``, de modo que o resultado
    por coluna é o mesmo em execução sequencial ou paralela.

    Args:
        seed (Optional[int]): Seed raiz. ``None`` usa entropia do sistema.
        n (int): Quantidade de geradores.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    root = np.random.SeedSequence(None if seed is None else normalize_seed(seed))
    return [np.random.default_rng(child) for child in root.spawn(n)]


def spawn_seeds(seed: Optional[int], n: int) -> list[int]:
    """Deriva ``n`` seeds inteiras independentes (32 bits) de uma seed raiz."""
    if n < 0:
        raise ValueError("n must be non-negative")
    root = np.random.SeedSequence(None if seed is None else normalize_seed(seed))
    return [int(child.generate_state(1)[0]) for child in root.spawn(n)]


def register_seed_logging(logger: logging.Logger, seed: Optional[int]) -> None:
    """Loga a seed utilizada para fins de auditoria e reprodutibilidade."""
    if seed is None:
        logger.info("Execução utilizando entropia do sistema (sem seed fixa)")
    else:
        logger.info("Execução utilizando a seed: %s", seed, extra={"seed": seed})
