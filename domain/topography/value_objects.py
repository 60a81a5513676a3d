"""Topography Bounded Context - Value Objects.

Immutable data structures for the energy field and its contours.
All validation occurs at construction time via Pydantic.

Coordinate conventions:
    Grid space: x increases eastward, y increases northward; ``data[y, x]``.
    Geographic space: (lng, lat) in WGS84 degrees.
    Raster space: (px, py) with py = 0 at the visual top.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator


class GeoWindow(BaseModel):
    """Geographic window in EPSG:4326 (Value Object).

    Inverted windows cannot be instantiated. A window whose edges coincide
    (south == north or west == east) is accepted but degenerate; the engine
    still produces finite output for it.
    """

    south: float = Field(ge=-90, le=90)  # Southern boundary (latitude)
    west: float = Field(ge=-180, le=180)  # Western boundary (longitude)
    north: float = Field(ge=-90, le=90)  # Northern boundary (latitude)
    east: float = Field(ge=-180, le=180)  # Eastern boundary (longitude)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_ordering(self) -> "GeoWindow":
        if self.south > self.north:
            raise ValueError(
                f"Invalid latitude ordering: south={self.south} > north={self.north}"
            )
        if self.west > self.east:
            raise ValueError(
                f"Invalid longitude ordering: west={self.west} > east={self.east}"
            )
        return self

    @property
    def is_degenerate(self) -> bool:
        return self.south == self.north or self.west == self.east

    def cell_size(self, grid_width: int, grid_height: int) -> tuple[float, float]:
        """Return (cell_width, cell_height) in degrees for a grid of this size."""
        return (
            (self.east - self.west) / grid_width,
            (self.north - self.south) / grid_height,
        )

    def center(self) -> tuple[float, float]:
        """Return the (lat, lng) centre of the window."""
        return ((self.south + self.north) / 2, (self.west + self.east) / 2)


class RasterWindow(BaseModel):
    """Pixel rectangle of the drawing surface (Value Object)."""

    left: float = 0.0
    top: float = 0.0
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    model_config = ConfigDict(frozen=True)


class ScalarGrid(BaseModel):
    """Dense energy field sampled over a GeoWindow (Value Object).

    The data array is made read-only at construction time, exactly like
    any other grid value object: callers receive a frozen copy.
    """

    data: NDArray[np.float64]  # 2D float64 array (height x width), read-only
    window: GeoWindow

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self) -> "ScalarGrid":
        if self.data.ndim != 2:
            raise ValueError(f"Data must be 2D, got {self.data.ndim}D")
        if self.data.shape[0] == 0 or self.data.shape[1] == 0:
            raise ValueError(f"Data cannot be empty: {self.data.shape}")

        frozen = np.array(self.data, dtype=np.float64, copy=True, order="C")
        frozen.flags.writeable = False
        object.__setattr__(self, "data", frozen)
        return self

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    def min(self) -> float:
        return float(self.data.min())

    def max(self) -> float:
        return float(self.data.max())

    def cell_size(self) -> tuple[float, float]:
        """(cell_width, cell_height) in degrees."""
        return self.window.cell_size(self.width, self.height)

    def value_at(self, x: int, y: int) -> float:
        """Energy at grid index (x eastward, y northward)."""
        return float(self.data[y, x])


Ring = NDArray[np.float64]  # (n, 2) vertices, first == last
Polygon = tuple[Ring, ...]  # exterior ring followed by holes


def _freeze_ring(ring: object) -> Ring:
    arr = np.array(ring, dtype=np.float64, copy=True)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Ring must have shape (n, 2), got {arr.shape}")
    arr.flags.writeable = False
    return arr


class Contour(BaseModel):
    """All polygons of the field at one threshold (Value Object).

    Invariants:
        C-1: threshold_value is finite
        C-2: normalized_value in [0, 1]
        C-3: every ring is an (n, 2) float64 array

    A contour may own zero polygons. Ring vertices live in whatever space
    the producing step left them in (grid, geographic or raster); the
    structure is identical across spaces.
    """

    threshold_value: float
    normalized_value: float = Field(ge=0, le=1)
    polygons: tuple[tuple[NDArray[np.float64], ...], ...] = ()

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_contour(self) -> "Contour":
        if not math.isfinite(self.threshold_value):
            raise ValueError(f"threshold_value must be finite: {self.threshold_value}")
        frozen = tuple(
            tuple(_freeze_ring(ring) for ring in polygon) for polygon in self.polygons
        )
        object.__setattr__(self, "polygons", frozen)
        return self

    def with_polygons(self, polygons: tuple[Polygon, ...]) -> "Contour":
        """Return a copy of this contour carrying different ring geometry."""
        return Contour(
            threshold_value=self.threshold_value,
            normalized_value=self.normalized_value,
            polygons=polygons,
        )

    def ring_count(self) -> int:
        return sum(len(polygon) for polygon in self.polygons)

    def vertex_count(self) -> int:
        return sum(len(ring) for polygon in self.polygons for ring in polygon)


class ProcessingStatistics(BaseModel):
    """Summary of one pipeline run, for display by a statistics consumer."""

    resource_count: int = Field(ge=0)
    contour_levels: int = Field(ge=0)
    processing_time_ms: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)
