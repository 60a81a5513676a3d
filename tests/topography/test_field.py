"""Tests for the energy field generator.

All tests build points and windows directly; no I/O.
Standard window: lat [25.0, 25.15], lon [121.5, 121.65], 0.001 deg cells.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from domain.topography.config import EngineConfig
from domain.topography.field import (
    accumulate_point,
    cell_centers,
    cell_range,
    gaussian_energy,
    generate_field,
    generate_field_exhaustive,
)
from domain.topography.value_objects import GeoWindow

HOSPITAL_SIGMA = 0.006
HOSPITAL_AMPLITUDE = 1.0

# Centre of cell (75, 75) in the standard window
CELL_75_LNG = 121.5755
CELL_75_LAT = 25.0755


def distance_grid(window: GeoWindow, config: EngineConfig, lat: float, lng: float) -> np.ndarray:
    """Degree-space distance from every cell centre to (lat, lng)."""
    cell_w, cell_h = window.cell_size(config.grid_width, config.grid_height)
    lngs = cell_centers(window.west, cell_w, 0, config.grid_width - 1)
    lats = cell_centers(window.south, cell_h, 0, config.grid_height - 1)
    return np.sqrt((lats[:, None] - lat) ** 2 + (lngs[None, :] - lng) ** 2)


# ===========================================================================
# Gaussian correctness
# ===========================================================================
def test_peak_equals_amplitude_at_own_cell(std_window, make_point):
    """A point at a cell centre puts exactly its amplitude into that cell."""
    grid = generate_field([make_point(CELL_75_LAT, CELL_75_LNG)], std_window)

    assert grid.value_at(75, 75) == pytest.approx(HOSPITAL_AMPLITUDE, rel=1e-9)
    assert grid.max() == pytest.approx(HOSPITAL_AMPLITUDE, rel=1e-9)


def test_value_at_distance_follows_gaussian(std_window, make_point):
    """Value at distance d equals A * exp(-d^2 / (2 sigma^2))."""
    config = EngineConfig()
    grid = generate_field([make_point(CELL_75_LAT, CELL_75_LNG)], std_window, config)
    distances = distance_grid(std_window, config, CELL_75_LAT, CELL_75_LNG)

    for x, y in [(80, 75), (75, 70), (78, 79), (85, 75)]:
        d = distances[y, x]
        expected = HOSPITAL_AMPLITUDE * math.exp(-(d**2) / (2 * HOSPITAL_SIGMA**2))
        assert grid.value_at(x, y) == pytest.approx(expected, rel=1e-9)


def test_gaussian_energy_helper():
    assert gaussian_energy(0.0, 0.006, 1.0) == 1.0
    assert gaussian_energy(0.006**2, 0.006, 2.0) == pytest.approx(2.0 * math.exp(-0.5))


def test_unknown_type_uses_default_profile(std_window, make_point):
    grid = generate_field([make_point(CELL_75_LAT, CELL_75_LNG, type="museum")], std_window)

    assert grid.value_at(75, 75) == pytest.approx(0.5, rel=1e-9)


def test_contributions_superpose(std_window, make_point):
    a = make_point(25.05, 121.55)
    b = make_point(25.06, 121.56, type="clinic")

    both = generate_field([a, b], std_window)
    only_a = generate_field([a], std_window)
    only_b = generate_field([b], std_window)

    np.testing.assert_allclose(both.data, only_a.data + only_b.data, rtol=1e-12, atol=0)


# ===========================================================================
# Cutoff window
# ===========================================================================
def test_cells_beyond_cutoff_are_untouched(std_window, make_point):
    """Cells farther than cutoff_multiplier * sigma keep their exact zero."""
    config = EngineConfig()
    grid = generate_field([make_point(25.07, 121.58)], std_window, config)
    distances = distance_grid(std_window, config, 25.07, 121.58)
    cutoff = config.cutoff_multiplier * HOSPITAL_SIGMA

    far = distances > cutoff * 1.0001
    assert far.any()
    assert np.all(grid.data[far] == 0.0)


@pytest.mark.slow
def test_truncated_matches_exhaustive_inside_cutoff(std_window, make_point):
    """Contributing cells are identical to the untruncated computation."""
    config = EngineConfig()
    point = make_point(25.07, 121.58)
    truncated = generate_field([point], std_window, config)
    exhaustive = generate_field_exhaustive([point], std_window, config)
    distances = distance_grid(std_window, config, 25.07, 121.58)

    near = distances < config.cutoff_multiplier * HOSPITAL_SIGMA * 0.9999
    np.testing.assert_allclose(truncated.data[near], exhaustive.data[near], rtol=1e-12)


def test_accumulate_point_touches_bounded_cell_count(std_window, make_point):
    config = EngineConfig()
    field = np.zeros((config.grid_height, config.grid_width))

    touched = accumulate_point(field, make_point(CELL_75_LAT, CELL_75_LNG), std_window, config)

    # cutoff = 18 cells -> at most a 38 x 38 window, circle ~ pi * 18^2
    assert 0 < touched <= 38 * 38
    assert touched == np.count_nonzero(field)


def test_cell_range_basic():
    assert cell_range(0.5, 0.0, 0.1, 0.12, 10) == (3, 7)


def test_cell_range_clamps_to_grid():
    assert cell_range(0.05, 0.0, 0.1, 0.12, 10) == (0, 2)
    assert cell_range(0.95, 0.0, 0.1, 0.12, 10) == (8, 9)


def test_cell_range_empty_when_window_misses_grid():
    lo, hi = cell_range(-1.0, 0.0, 0.1, 0.15, 10)
    assert lo > hi


def test_cell_range_zero_cell_size():
    assert cell_range(0.0, 0.0, 0.0, 0.1, 5) == (0, 4)
    lo, hi = cell_range(1.0, 0.0, 0.0, 0.1, 5)
    assert lo > hi


# ===========================================================================
# Points outside the window
# ===========================================================================
def test_point_just_outside_window_still_contributes(std_window, make_point):
    """No early rejection by location: only by intersected cell range."""
    grid = generate_field([make_point(25.075, std_window.east + 0.01)], std_window)

    assert grid.data[:, -1].max() > 0
    assert grid.data[:, 0].max() == 0.0


def test_point_far_outside_window_contributes_nothing(std_window, make_point):
    grid = generate_field([make_point(25.075, std_window.east + 1.0)], std_window)

    assert np.all(grid.data == 0.0)


# ===========================================================================
# Degenerate inputs
# ===========================================================================
def test_zero_points_yield_all_zero_grid(std_window):
    grid = generate_field([], std_window)

    assert grid.data.shape == (150, 150)
    assert np.all(grid.data == 0.0)


def test_degenerate_window_stays_finite(make_point):
    window = GeoWindow(south=25.05, west=121.5, north=25.05, east=121.65)
    grid = generate_field([make_point(25.05, 121.55)], window)

    assert np.all(np.isfinite(grid.data))
    # every row shares the same latitude, so every row is identical
    assert np.all(grid.data == grid.data[0])


def test_grid_size_follows_config(std_window, make_point):
    config = EngineConfig(grid_width=40, grid_height=30)
    grid = generate_field([make_point(25.05, 121.55)], std_window, config)

    assert (grid.height, grid.width) == (30, 40)


# ===========================================================================
# Determinism / immutability
# ===========================================================================
def test_generation_is_deterministic(std_window, make_point):
    points = [make_point(25.05, 121.55), make_point(25.1, 121.6, type="library")]

    first = generate_field(points, std_window)
    second = generate_field(points, std_window)

    assert np.array_equal(first.data, second.data)


def test_grid_data_is_read_only(std_window, make_point):
    grid = generate_field([make_point(25.05, 121.55)], std_window)

    assert not grid.data.flags.writeable
    with pytest.raises(ValueError):
        grid.data[0, 0] = 1.0
