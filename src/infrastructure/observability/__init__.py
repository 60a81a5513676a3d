"""Observability adapters (logging) for the topography pipeline."""

from .logging_observer import LoggingObserver

__all__ = ["LoggingObserver"]
