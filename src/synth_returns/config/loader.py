"""Leitura e escrita de configurações YAML do bootstrap.

Nomes relativos são procurados primeiro em ``settings.configs_dir``, depois na
raiz do projeto e por fim no diretório corrente; a extensão ``.yaml`` é
opcional. :func:`load_bootstrap_config` combina as três fontes de parâmetros
na ordem ``Settings`` → YAML → *overrides* explícitos.

Example
-------
>>> from synth_returns.config.loader import load_bootstrap_config
>>> config = load_bootstrap_config("bootstrap_default", n_paths=50)
>>> config.n_paths
50
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from .schemas import BootstrapConfig
from .settings import Settings, get_settings

__all__ = ["ConfigError", "load_bootstrap_config", "load_config", "resolve_config_path", "save_config"]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
PathLike = Union[str, Path]

_SUFFIXES = (".yaml", ".yml")


class ConfigError(Exception):
    """Raised when a configuration file is missing, malformed or invalid."""


def _candidates(name: PathLike, settings: Settings) -> list[Path]:
    path = Path(name).expanduser()
    names = [path] if path.suffix in _SUFFIXES else [path.with_suffix(s) for s in _SUFFIXES]
    if path.is_absolute():
        return names
    bases = (settings.configs_dir, settings.project_root, Path.cwd())
    return [base / candidate for base in bases for candidate in names]


def resolve_config_path(name: PathLike, *, settings: Settings | None = None) -> Path:
    """Return the first existing file for ``name``.

    Raises
    ------
    ConfigError
        Nenhum candidato existe; a mensagem lista os caminhos tentados.
    """
    settings = settings or get_settings()
    candidates = _candidates(name, settings)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    tried = ", ".join(str(c) for c in candidates)
    raise ConfigError(f"Configuration file not found: {name} (tried {tried})")


def _read_mapping(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML syntax in {path}: {exc}") from exc
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping in {path}, got {type(data).__name__}")
    return data


def load_config(
    name: PathLike,
    schema: Type[T] = BootstrapConfig,
    *,
    settings: Settings | None = None,
    strict: bool = True,
) -> T:
    """Load ``name`` and validate it against ``schema``.

    With ``strict=False`` any :class:`ConfigError` is logged and ``schema()``
    defaults are returned instead.
    """
    try:
        path = resolve_config_path(name, settings=settings)
        data = _read_mapping(path)
        try:
            config = schema.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Configuration validation failed for {path}:\n{exc}") from exc
    except ConfigError as exc:
        if strict:
            raise
        logger.warning("%s; using %s defaults", exc, schema.__name__)
        return schema()

    logger.info("Loaded %s from %s", schema.__name__, path)
    return config


def load_bootstrap_config(
    name: PathLike | None = None,
    *,
    settings: Settings | None = None,
    **overrides: Any,
) -> BootstrapConfig:
    """Build a :class:`BootstrapConfig` from settings, an optional YAML file and overrides.

    Keys present in the file replace the values derived from ``settings``;
    ``overrides`` win over both.
    """
    settings = settings or get_settings()
    merged: dict[str, Any] = BootstrapConfig.from_settings(settings).model_dump()
    source = "settings"
    if name is not None:
        path = resolve_config_path(name, settings=settings)
        merged.update(_read_mapping(path))
        source = str(path)
    merged.update(overrides)
    try:
        config = BootstrapConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Bootstrap configuration from {source} is invalid:\n{exc}") from exc
    logger.debug("Bootstrap configuration resolved", extra={"source": source})
    return config


def save_config(
    config: BaseModel, name: PathLike, *, settings: Settings | None = None
) -> Path:
    """Write ``config`` as YAML; relative names land in ``settings.configs_dir``."""
    settings = settings or get_settings()
    path = Path(name).expanduser()
    if path.suffix not in _SUFFIXES:
        path = path.with_suffix(".yaml")
    if not path.is_absolute():
        path = settings.configs_dir / path
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="python", exclude_none=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    logger.info("Saved %s to %s", type(config).__name__, path)
    return path
