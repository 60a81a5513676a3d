"""
Engine Configuration Loading
============================

Builds the immutable EngineConfig from a YAML file and environment
variables, and configures process-wide logging.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. YAML file
    3. EngineConfig defaults (lowest priority)

Environment Variable Mapping:
    TOPOGRAPHY_GRID_WIDTH         -> grid_width
    TOPOGRAPHY_GRID_HEIGHT        -> grid_height
    TOPOGRAPHY_CONTOUR_LEVELS     -> contour_levels
    TOPOGRAPHY_CUTOFF_MULTIPLIER  -> cutoff_multiplier
    TOPOGRAPHY_ENERGY_FLOOR       -> energy_floor
    TOPOGRAPHY_LOG_LEVEL          -> logging level (see load_logging_level)

YAML layout::

    grid_width: 150
    grid_height: 150
    contour_levels: 12
    type_profiles:
      hospital: {sigma: 0.006, amplitude: 1.0}
    default_profile: {sigma: 0.003, amplitude: 0.5}

Example:
    from infrastructure.config import load_engine_config, setup_logging

    setup_logging(load_logging_level())
    config = load_engine_config("config.yaml")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from domain.resources.value_objects import DEFAULT_TYPE_PROFILES, profiles_from_mapping
from domain.topography.config import EngineConfig
from domain.topography.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "TOPOGRAPHY_"

# env suffix -> (config field, parser)
_ENV_FIELDS: tuple[tuple[str, str, type], ...] = (
    ("GRID_WIDTH", "grid_width", int),
    ("GRID_HEIGHT", "grid_height", int),
    ("CONTOUR_LEVELS", "contour_levels", int),
    ("CUTOFF_MULTIPLIER", "cutoff_multiplier", float),
    ("ENERGY_FLOOR", "energy_floor", float),
)

LOG_FORMATS = {
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}',
    "text": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def _read_yaml(config_path: Path) -> dict[str, Any]:
    """Read a YAML mapping; an empty file is an empty mapping."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse {config_path.name}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{config_path.name} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _apply_env_overrides(config_data: dict[str, Any]) -> None:
    """Apply TOPOGRAPHY_* environment variable overrides to config data."""
    for suffix, field, parse in _ENV_FIELDS:
        raw = os.environ.get(ENV_PREFIX + suffix)
        if raw is None or raw == "":
            continue
        try:
            config_data[field] = parse(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"{ENV_PREFIX + suffix}={raw!r} is not a valid {parse.__name__}"
            ) from e


def load_engine_config(config_path: Path | str | None = None) -> EngineConfig:
    """
    Load EngineConfig from an optional YAML file and environment variables.

    Profiles listed in the file extend (and override) the default catalogue
    rather than replacing it.

    Args:
        config_path: Path to a YAML file, or None for defaults + environment

    Returns:
        EngineConfig: Validated, immutable configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ConfigurationError: If the file or an override is invalid
    """
    config_data: dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(str(path))
        logger.info("Loading engine config from: %s", path.name)
        config_data = _read_yaml(path)
    else:
        logger.debug("No config file given, using defaults and environment variables")

    _apply_env_overrides(config_data)

    try:
        if "type_profiles" in config_data:
            profiles = dict(DEFAULT_TYPE_PROFILES)
            profiles.update(profiles_from_mapping(config_data["type_profiles"] or {}))
            config_data["type_profiles"] = profiles
        return EngineConfig.model_validate(config_data)
    except (ValidationError, AttributeError) as e:
        raise ConfigurationError(f"Invalid engine configuration: {e}") from e


def load_logging_level(default: str = "INFO") -> str:
    """Return the log level name from TOPOGRAPHY_LOG_LEVEL (or default)."""
    return os.environ.get(ENV_PREFIX + "LOG_LEVEL", default).upper()


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure root logging (json or text line format)."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMATS.get(fmt, LOG_FORMATS["text"]),
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
