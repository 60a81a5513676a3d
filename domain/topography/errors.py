"""Topography Bounded Context - Error Hierarchy.

The engine itself never raises for valid value objects: empty point sets,
signal-free fields and flat fields all yield an empty contour sequence.
These errors belong to the configuration boundary.
"""

from __future__ import annotations


class TopographyError(Exception):
    """Base error for topography operations."""


class ConfigurationError(TopographyError):
    """Engine configuration could not be parsed or failed validation."""
