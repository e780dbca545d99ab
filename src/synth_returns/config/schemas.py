"""Pydantic schemas for configuration validation.

This module defines typed configuration schemas using Pydantic v2 for the
bootstrap generator:
- noise injection (``noise_frac``)
- block length range
- randomness (seed) and execution backend
- number of Monte Carlo paths

YAML files under ``configs/`` should validate against :class:`BootstrapConfig`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_BACKEND, DEFAULT_NOISE_FRAC

if TYPE_CHECKING:
    from .settings import Settings

__all__ = ["BootstrapConfig"]


class BootstrapConfig(BaseModel):
    """Circular block-bootstrap configuration.

    Attributes
    ----------
    noise_frac : float
        Noise volatility as a fraction of each series' sample std (>= 0)
    min_block_length : int
        Smallest block length drawn (>= 1)
    max_block_length : Optional[int]
        Largest block length drawn; ``None`` means ``floor(n/2)``. Always
        capped at ``floor(n/2)`` for the series being resampled.
    seed : Optional[int]
        Root seed; ``None`` draws fresh OS entropy
    backend : Literal
        Column fan-out backend (sequential, thread, process, joblib)
    max_workers : Optional[int]
        Worker pool size for parallel backends
    n_paths : int
        Number of Monte Carlo scenarios produced by ``generate_scenarios``
    """

    noise_frac: float = Field(
        default=DEFAULT_NOISE_FRAC, ge=0, description="Noise std as fraction of series std"
    )
    min_block_length: int = Field(default=1, ge=1, description="Minimum block length")
    max_block_length: int | None = Field(
        default=None, ge=1, description="Maximum block length (None = n // 2)"
    )
    seed: int | None = Field(default=None, description="Root random seed")
    backend: Literal["sequential", "thread", "process", "joblib"] = Field(
        default=DEFAULT_BACKEND, description="Column execution backend"
    )
    max_workers: int | None = Field(default=None, gt=0, description="Worker pool size")
    n_paths: int = Field(default=1, ge=1, description="Number of Monte Carlo paths")

    @field_validator("max_block_length")
    @classmethod
    def validate_max_not_below_min(cls, v: int | None, info) -> int | None:
        """Ensure max_block_length >= min_block_length."""
        if v is not None and "min_block_length" in info.data and v < info.data["min_block_length"]:
            raise ValueError("max_block_length must be >= min_block_length")
        return v

    @classmethod
    def from_settings(cls, settings: "Settings", **overrides) -> "BootstrapConfig":
        """Build a config from global :class:`Settings`, applying ``overrides`` last."""
        base = {
            "noise_frac": settings.noise_frac,
            "seed": settings.random_seed,
            "backend": settings.backend,
            "max_workers": settings.max_workers,
        }
        base.update(overrides)
        return cls(**base)
