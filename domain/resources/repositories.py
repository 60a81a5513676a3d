"""Domain Port(s) for Resource I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import ResourcePoint


class ResourceRepository(Protocol):
    """Port for obtaining resource points from external sources.

    Implementations live in infrastructure (e.g., the Overpass adapter).
    Returned points are already validated; the topography engine does no
    sanitisation of its own.
    """

    def load_points(self, file_path: Path | str) -> list[ResourcePoint]:
        """Load resource points from a saved payload."""
        ...
