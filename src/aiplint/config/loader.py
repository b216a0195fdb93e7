# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration loading from ``pyproject.toml`` and ``aiplint.toml``."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..core.errors import ConfigError
from .models import AppConfig

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CONFIG_FILENAME: Final[str] = "aiplint.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "aiplint"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1) or match.group(2), match.group(0)), value)
    if isinstance(value, Mapping):
        return {key: _expand_env_value(entry, env) for key, entry in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(entry, env) for entry in value]
    return value


def read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML table stored at ``path`` (empty when it does not exist).

    Raises:
        ConfigError: If the file is not valid TOML.
    """

    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(data, MutableMapping):
        raise ConfigError(f"Configuration at {path} must be a table")
    return dict(data)


def read_pyproject_section(path: Path) -> dict[str, Any]:
    """Return the ``[tool.aiplint]`` table of a ``pyproject.toml`` file."""

    tool_section = read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return {}
    return dict(section)


def load_config(
    root: Path,
    config_file: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Resolve the effective configuration for ``root``.

    Sources are applied in order, later ones overriding earlier ones: the
    built-in defaults, ``[tool.aiplint]`` in ``pyproject.toml``, then
    ``aiplint.toml`` (or ``config_file`` when given). ``$VAR`` and
    ``${VAR}`` references in string values are expanded from ``env``.

    Args:
        root: Project directory searched for configuration files.
        config_file: Explicit configuration file replacing ``aiplint.toml``.
        env: Environment used for variable expansion; defaults to ``os.environ``.

    Returns:
        AppConfig: Validated configuration.

    Raises:
        ConfigError: If a file is unreadable, is not a table, or fails validation.
    """

    if config_file is not None and not config_file.exists():
        raise ConfigError(f"Configuration file {config_file} does not exist")
    merged: dict[str, Any] = AppConfig().to_dict()
    merged = _deep_merge(merged, read_pyproject_section(root / PYPROJECT_FILENAME))
    merged = _deep_merge(merged, read_toml(config_file or root / CONFIG_FILENAME))
    merged = _expand_env_value(merged, env if env is not None else os.environ)
    try:
        return AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid aiplint configuration: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "PYPROJECT_FILENAME",
    "load_config",
    "read_pyproject_section",
    "read_toml",
]
