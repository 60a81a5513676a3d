"""Topography of Care Domain Layer.

This package contains the core business logic organized by bounded contexts:
- resources: Civic resource points and their per-type energy profiles
- topography: Energy field, contour extraction, coordinate transforms
"""

# Imports alphabetized per project style (isort)
from domain import resources, topography

__all__ = ["resources", "topography"]
