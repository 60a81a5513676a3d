"""Configuration loading for the topography engine."""

from .yaml_loader import load_engine_config, load_logging_level, setup_logging

__all__ = ["load_engine_config", "load_logging_level", "setup_logging"]
