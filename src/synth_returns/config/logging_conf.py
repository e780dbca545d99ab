"""Configuração de *logging* para execuções do bootstrap.

Cada registro recebe o contexto da execução (seed, backend, fração de ruído,
ambiente) via :class:`RunContextFilter`, tanto no formato texto quanto em JSON.
O rastreamento bloco a bloco do ``SeriesBootstrapper`` é ligado com
``trace_blocks=True`` sem precisar baixar o nível do restante do projeto.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Mapping

from ..utils.logging_config import DEFAULT_FORMAT, RECORD_ATTRIBUTES
from .settings import Settings, get_settings

__all__ = [
    "BLOCK_TRACE_LOGGER",
    "JSONFormatter",
    "LOG_FILENAME",
    "RunContextFilter",
    "configure_logging",
    "run_context",
]

BLOCK_TRACE_LOGGER = "synth_returns.simulation.series"
LOG_FILENAME = "synth_returns.log"

_HANDLER_MARKER = "_synth_returns_handler"


def run_context(settings: Settings, **extra: Any) -> dict[str, Any]:
    """Campos de auditoria de uma execução derivados de ``settings``."""
    context: dict[str, Any] = {
        "environment": settings.environment,
        "seed": settings.random_seed,
        "backend": settings.backend,
        "noise_frac": settings.noise_frac,
    }
    context.update(extra)
    return context


class RunContextFilter(logging.Filter):
    """Anexa o contexto da execução a cada registro sem sobrescrever ``extra``."""

    def __init__(self, context: Mapping[str, Any]) -> None:
        super().__init__()
        self.context = dict(context)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """Uma linha JSON por registro: campos fixos, contexto e ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in RECORD_ATTRIBUTES and key not in payload
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _plain_formatter(context_keys: list[str]) -> logging.Formatter:
    suffix = "".join(f" | {key}=%({key})s" for key in context_keys)
    return logging.Formatter(fmt=DEFAULT_FORMAT + suffix, datefmt="%Y-%m-%d %H:%M:%S")


def _drop_own_handlers(root: logging.Logger) -> None:
    for handler in root.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            handler.close()
            root.removeHandler(handler)


def configure_logging(
    *,
    settings: Settings | None = None,
    level: int | str = logging.INFO,
    structured: bool | None = None,
    trace_blocks: bool = False,
    context: Mapping[str, Any] | None = None,
    stream: IO[str] | None = None,
    log_file: Path | None = None,
    to_file: bool = True,
) -> logging.Logger:
    """Configura o *root logger* para uma execução do gerador.

    Parameters
    ----------
    settings:
        Fonte do contexto e do diretório de logs; padrão :func:`get_settings`.
    level:
        Nível do *root logger*.
    structured:
        JSON quando ``True``. Com ``None`` segue ``settings.structured_logging``,
        ligado sempre em produção.
    trace_blocks:
        Emite os registros ``block sampled`` (DEBUG) de cada bloco sorteado,
        com ``block_number``, ``block_start`` e ``block_length``.
    context:
        Campos adicionais para :func:`run_context` (ex.: ``{"run_id": ...}``).
    stream:
        Destino do ``StreamHandler``; padrão ``sys.stderr``.
    log_file, to_file:
        Cópia em arquivo, por padrão ``settings.logs_dir / LOG_FILENAME``.

    Returns
    -------
    logging.Logger
        O *root logger* configurado. Reconfigurar substitui apenas os
        *handlers* instalados por esta função.
    """

    settings = settings or get_settings()
    if structured is None:
        structured = settings.structured_logging or settings.is_production

    fields = run_context(settings, **dict(context or {}))
    formatter = JSONFormatter() if structured else _plain_formatter(list(fields))

    handlers: list[logging.Handler] = [logging.StreamHandler(stream)]
    if to_file:
        target = log_file or settings.logs_dir / LOG_FILENAME
        target.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(target, encoding="utf-8"))

    root = logging.getLogger()
    _drop_own_handlers(root)
    root.setLevel(level)
    for handler in handlers:
        setattr(handler, _HANDLER_MARKER, True)
        handler.setFormatter(formatter)
        handler.addFilter(RunContextFilter(fields))
        root.addHandler(handler)

    logging.getLogger(BLOCK_TRACE_LOGGER).setLevel(logging.DEBUG if trace_blocks else logging.NOTSET)
    root.debug("logging configured", extra={"structured": structured, "trace_blocks": trace_blocks})
    return root
