"""Root pytest configuration for all tests.

Shared fixtures: the standard Taipei test window, raster surface and
resource point factories. Domain tests build value objects directly (no I/O).

Window Reference:
- Standard window: lat [25.0, 25.15], lon [121.5, 121.65]
- With the default 150x150 grid every cell is 0.001 deg square,
  so grid coordinate (75, 75) is the window centre.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from domain.resources.value_objects import ResourcePoint
from domain.topography.value_objects import GeoWindow, RasterWindow


def get_fixtures_dir() -> Path:
    """Return path to tests/fixtures/ directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return get_fixtures_dir()


@pytest.fixture
def std_window() -> GeoWindow:
    """0.15 x 0.15 degree window; 0.001 degree cells on the default grid."""
    return GeoWindow(south=25.0, west=121.5, north=25.15, east=121.65)


@pytest.fixture
def raster_window() -> RasterWindow:
    return RasterWindow(left=0.0, top=0.0, width=800.0, height=600.0)


@pytest.fixture
def make_point() -> Callable[..., ResourcePoint]:
    """Factory for ResourcePoints with sequential ids."""
    counter = iter(range(1, 10_000))

    def factory(lat: float, lng: float, type: str = "hospital", **kwargs) -> ResourcePoint:
        return ResourcePoint(id=next(counter), type=type, lat=lat, lng=lng, **kwargs)

    return factory
