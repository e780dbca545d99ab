"""Modelos de dados compartilhados pelo bootstrap."""

from .matrix import TimeSeriesMatrix

__all__ = ["TimeSeriesMatrix"]
