"""Sorteio de blocos contíguos circulares.

Um :class:`Block` descreve um trecho da série original: posição inicial em
``[0, n)`` e comprimento em ``[1, floor(n/2)]``. Blocos podem ultrapassar o fim
da série e continuar do início (indexação circular).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from ..config.constants import MIN_SERIES_LENGTH
from ..exceptions import InvalidInputError
from ..utils.checks import assert_min_length

__all__ = [
    "Block",
    "BlockRange",
    "block_indices",
    "draw_block",
    "resolve_block_range",
    "sample_block",
]


class BlockRange(NamedTuple):
    """Inclusive block-length bounds; ``max_length=None`` means ``floor(n/2)``."""

    min_length: int = 1
    max_length: int | None = None


@dataclass(frozen=True, slots=True)
class Block:
    start_index: int
    length: int


def resolve_block_range(n: int, block_range: BlockRange | None = None) -> tuple[int, int]:
    """Return the effective inclusive ``(low, high)`` length bounds for a series of length ``n``.

    The upper bound never exceeds ``n // 2``.

    Raises
    ------
    InvalidInputError
        ``n < 2`` or the requested range is empty once capped.
    """
    assert_min_length(n, MIN_SERIES_LENGTH, context="BlockSampler")
    cap = n // 2
    if block_range is None:
        return 1, cap

    low = int(block_range.min_length)
    high = cap if block_range.max_length is None else min(int(block_range.max_length), cap)
    if low < 1:
        raise InvalidInputError(f"min_length must be >= 1, got {low}.")
    if low > high:
        raise InvalidInputError(
            f"Empty block length range [{low}, {high}] for a series of length {n}."
        )
    return low, high


def sample_block(
    n: int,
    rng: np.random.Generator,
    *,
    block_range: BlockRange | None = None,
) -> Block:
    """Draw one random circular block for a series of length ``n``.

    The length is drawn first, uniformly from the inclusive length range, then
    the start uniformly from ``[0, n)``.
    """
    low, high = resolve_block_range(n, block_range)
    return draw_block(n, low, high, rng)


def draw_block(n: int, low: int, high: int, rng: np.random.Generator) -> Block:
    length = int(rng.integers(low, high + 1))
    start = int(rng.integers(0, n))
    return Block(start_index=start, length=length)


def block_indices(block: Block, n: int) -> np.ndarray:
    """Positions covered by ``block`` in a series of length ``n`` (wrapping past the end)."""
    return (block.start_index + np.arange(block.length)) % n
