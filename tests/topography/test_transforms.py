"""Tests for grid -> geographic and grid -> raster space transforms."""

from __future__ import annotations

import numpy as np
import pytest

from domain.topography.transforms import (
    apply_transform,
    geographic_transform,
    raster_transform,
    to_geographic,
    to_raster,
)
from domain.topography.value_objects import Contour, GeoWindow, RasterWindow

GRID_W, GRID_H = 150, 100


@pytest.fixture
def grid_contours() -> tuple[Contour, ...]:
    exterior = np.array([[10, 10], [50, 10], [50, 60], [10, 60], [10, 10]], dtype=np.float64)
    hole = np.array([[20, 20], [20, 30], [30, 30], [30, 20], [20, 20]], dtype=np.float64)
    island = np.array([[100, 80], [120, 80], [110, 95], [100, 80]], dtype=np.float64)
    return (
        Contour(threshold_value=0.2, normalized_value=0.25, polygons=((exterior, hole), (island,))),
        Contour(threshold_value=0.4, normalized_value=0.5, polygons=()),
    )


# ===========================================================================
# Geographic
# ===========================================================================
def test_geographic_corners(std_window):
    t = geographic_transform(std_window, GRID_W, GRID_H)

    assert t * (0, 0) == pytest.approx((std_window.west, std_window.south))
    assert t * (GRID_W, GRID_H) == pytest.approx((std_window.east, std_window.north))


def test_geographic_cell_centre(std_window):
    t = geographic_transform(std_window, 150, 150)

    lng, lat = t * (75.5, 75.5)
    assert (lng, lat) == pytest.approx((121.5755, 25.0755))


def test_to_geographic_keeps_vertices_inside_window(std_window, grid_contours):
    result = to_geographic(grid_contours, std_window, GRID_W, GRID_H)

    for contour in result:
        for polygon in contour.polygons:
            for ring in polygon:
                assert np.all(ring[:, 0] >= std_window.west)
                assert np.all(ring[:, 0] <= std_window.east)
                assert np.all(ring[:, 1] >= std_window.south)
                assert np.all(ring[:, 1] <= std_window.north)


def test_degenerate_window_collapses_axis():
    window = GeoWindow(south=25.05, west=121.5, north=25.05, east=121.6)
    ring = np.array([[0, 0], [10, 5], [3, 9], [0, 0]], dtype=np.float64)

    mapped = apply_transform(geographic_transform(window, 10, 10), ring)

    assert np.all(np.isfinite(mapped))
    assert np.all(mapped[:, 1] == 25.05)


# ===========================================================================
# Raster
# ===========================================================================
def test_raster_corners_flip_vertical(raster_window):
    t = raster_transform(raster_window, GRID_W, GRID_H)

    # Grid origin (south-west) lands at the visual bottom-left
    assert t * (0, 0) == pytest.approx((0.0, 600.0))
    # Grid top-right (north-east) lands at the visual top-right
    assert t * (GRID_W, GRID_H) == pytest.approx((800.0, 0.0))


def test_raster_y_strictly_decreases_with_grid_y(raster_window):
    ring = np.column_stack((np.full(11, 5.0), np.linspace(0, GRID_H, 11)))

    mapped = apply_transform(raster_transform(raster_window, GRID_W, GRID_H), ring)

    assert np.all(np.diff(mapped[:, 1]) < 0)
    assert np.allclose(mapped[:, 0], 5.0 * 800.0 / GRID_W)


def test_raster_offset_window():
    raster = RasterWindow(left=10.0, top=20.0, width=300.0, height=200.0)
    t = raster_transform(raster, 30, 20)

    assert t * (0, 20) == pytest.approx((10.0, 20.0))
    assert t * (30, 0) == pytest.approx((310.0, 220.0))


def test_raster_round_trip_with_inverse(raster_window, grid_contours):
    t = raster_transform(raster_window, GRID_W, GRID_H)
    ring = grid_contours[0].polygons[0][0]

    back = apply_transform(~t, apply_transform(t, ring))

    np.testing.assert_allclose(back, ring, atol=1e-9)


# ===========================================================================
# Structure preservation
# ===========================================================================
@pytest.mark.parametrize("space", ["geographic", "raster"])
def test_structure_preserved(space, std_window, raster_window, grid_contours):
    if space == "geographic":
        result = to_geographic(grid_contours, std_window, GRID_W, GRID_H)
    else:
        result = to_raster(grid_contours, raster_window, GRID_W, GRID_H)

    assert len(result) == len(grid_contours)
    for before, after in zip(grid_contours, result):
        assert after.threshold_value == before.threshold_value
        assert after.normalized_value == before.normalized_value
        assert len(after.polygons) == len(before.polygons)
        for poly_before, poly_after in zip(before.polygons, after.polygons):
            assert [r.shape for r in poly_after] == [r.shape for r in poly_before]


def test_inputs_are_not_mutated(raster_window, grid_contours):
    snapshot = [
        [ring.copy() for ring in polygon] for polygon in grid_contours[0].polygons
    ]

    to_raster(grid_contours, raster_window, GRID_W, GRID_H)

    for polygon, saved in zip(grid_contours[0].polygons, snapshot):
        for ring, saved_ring in zip(polygon, saved):
            assert np.array_equal(ring, saved_ring)


def test_transformed_rings_are_read_only(raster_window, grid_contours):
    result = to_raster(grid_contours, raster_window, GRID_W, GRID_H)

    assert not result[0].polygons[0][0].flags.writeable


def test_geographic_round_trip_with_inverse(std_window, grid_contours):
    t = geographic_transform(std_window, GRID_W, GRID_H)
    geo = to_geographic(grid_contours, std_window, GRID_W, GRID_H)

    for before, after in zip(grid_contours[0].polygons, geo[0].polygons):
        for ring, mapped in zip(before, after):
            np.testing.assert_allclose(apply_transform(~t, mapped), ring, atol=1e-6)
