"""Infrastructure adapters for the resources bounded context.

Provides the ResourceRepository implementation that reads saved Overpass
API responses.
"""

from .overpass_adapter import OverpassResourceAdapter

__all__ = ["OverpassResourceAdapter"]
