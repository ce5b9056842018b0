"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_engine.config.models import ReleaseEngineConfig
from release_engine.exceptions import ConfigNotFoundError, ConfigValidationError
from release_engine.logging import get_logger

log = get_logger(__name__)

TOOL_KEY = "release-engine"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find the nearest pyproject.toml, walking up from ``start``.

    Args:
        start: Directory to start from (defaults to the current directory)

    Returns:
        Path to pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists in any parent
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_engine_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-engine]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> ReleaseEngineConfig:
    """Load configuration for the project at ``path``.

    Repositories without a pyproject.toml get the default configuration.

    Args:
        path: Project directory (defaults to the current directory)

    Returns:
        Validated configuration

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    try:
        pyproject_path = find_pyproject_toml(path)
    except ConfigNotFoundError:
        log.debug("no pyproject.toml found, using defaults", start=str(path or Path.cwd()))
        return ReleaseEngineConfig()

    raw = extract_release_engine_config(load_pyproject_toml(pyproject_path))
    try:
        config = ReleaseEngineConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] in {pyproject_path}:\n{e}") from e

    log.debug("loaded configuration", path=str(pyproject_path))
    return config
