"""Exceções compartilhadas pelo pacote."""

from __future__ import annotations

__all__ = ["InvalidInputError"]


class InvalidInputError(ValueError):
    """Raised when a bootstrap input violates its preconditions.

    Covers short series, empty matrices, negative noise fractions, missing
    values and unusable block ranges. Always raised before any random draw.
    """
