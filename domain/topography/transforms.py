"""Topography Bounded Context - Space Transforms.

Affine maps from grid index space into geographic and raster space.
Both maps are pure and structure preserving: the same polygons, rings and
vertex counts come out as went in.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from affine import Affine

from domain.topography.value_objects import (
    Contour,
    GeoWindow,
    Polygon,
    RasterWindow,
    Ring,
)


def geographic_transform(window: GeoWindow, grid_width: int, grid_height: int) -> Affine:
    """Grid (x, y) -> (lng, lat).

    lng = west + x * cell_width, lat = south + y * cell_height. Grid row 0
    is the geographic south, so no axis flip is needed.
    """
    cell_w, cell_h = window.cell_size(grid_width, grid_height)
    return Affine(cell_w, 0.0, window.west, 0.0, cell_h, window.south)


def raster_transform(raster: RasterWindow, grid_width: int, grid_height: int) -> Affine:
    """Grid (x, y) -> raster (px, py).

    px = left + x * scale_x, py = top + (grid_height - y) * scale_y.
    Raster row 0 is the visual top while grid row 0 is the south, hence
    the negative y scale.
    """
    scale_x = raster.width / grid_width
    scale_y = raster.height / grid_height
    return Affine(
        scale_x, 0.0, raster.left, 0.0, -scale_y, raster.top + grid_height * scale_y
    )


def apply_transform(transform: Affine, ring: Ring) -> Ring:
    """Map every vertex of an (n, 2) ring through ``transform``."""
    xs, ys = ring[:, 0], ring[:, 1]
    return np.column_stack(
        (
            transform.a * xs + transform.b * ys + transform.c,
            transform.d * xs + transform.e * ys + transform.f,
        )
    )


def transform_contours(
    contours: Sequence[Contour], transform: Affine
) -> tuple[Contour, ...]:
    """Return new Contours whose ring vertices went through ``transform``."""
    result: list[Contour] = []
    for contour in contours:
        polygons: tuple[Polygon, ...] = tuple(
            tuple(apply_transform(transform, ring) for ring in polygon)
            for polygon in contour.polygons
        )
        result.append(contour.with_polygons(polygons))
    return tuple(result)


def to_geographic(
    contours: Sequence[Contour], window: GeoWindow, grid_width: int, grid_height: int
) -> tuple[Contour, ...]:
    """Grid-space contours -> (lng, lat) contours."""
    return transform_contours(
        contours, geographic_transform(window, grid_width, grid_height)
    )


def to_raster(
    contours: Sequence[Contour], raster: RasterWindow, grid_width: int, grid_height: int
) -> tuple[Contour, ...]:
    """Grid-space contours -> raster (px, py) contours, with the vertical flip."""
    return transform_contours(
        contours, raster_transform(raster, grid_width, grid_height)
    )
