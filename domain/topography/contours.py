"""Topography Bounded Context - Contour Extraction.

Slices a ScalarGrid into threshold contours with marching squares. NO I/O.

Geometry conventions (grid index space, y up):
    - Sample ``data[y, x]`` sits at ``(x + 0.5, y + 0.5)``.
    - The grid is padded with one ring of samples below every threshold,
      so every isoline closes; crossings against the padding lie on the
      grid frame (x = 0 or width, y = 0 or height).
    - A sample is inside a contour when ``value >= threshold``.
    - Rings keep the inside on their left: exteriors run counter-clockwise
      (positive signed area), holes clockwise.
    - Rings are closed (first vertex repeated at the end).
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from domain.topography.config import DEFAULT_CONFIG, EngineConfig
from domain.topography.value_objects import Contour, Polygon, Ring, ScalarGrid

# ---------------------------------------------------------------------------
# Marching squares tables
# ---------------------------------------------------------------------------
# Quad corner bits: bottom-left 1, bottom-right 2, top-right 4, top-left 8.
# Quad edge ids: 0 bottom, 1 right, 2 top, 3 left.
# Each segment is (entry edge, exit edge), oriented inside-on-the-left.
_SEGMENTS: dict[int, tuple[tuple[int, int], ...]] = {
    1: ((0, 3),),
    2: ((1, 0),),
    3: ((1, 3),),
    4: ((2, 1),),
    6: ((2, 0),),
    7: ((2, 3),),
    8: ((3, 2),),
    9: ((0, 2),),
    11: ((1, 2),),
    12: ((3, 1),),
    13: ((0, 1),),
    14: ((3, 0),),
}

# Saddles: (segments when the quad centre is inside, when it is outside)
_SADDLES: dict[int, tuple[tuple[tuple[int, int], ...], tuple[tuple[int, int], ...]]] = {
    5: (((0, 1), (2, 3)), ((0, 3), (2, 1))),
    10: (((1, 2), (3, 0)), ((1, 0), (3, 2))),
}

MIN_RING_VERTICES = 4  # closed triangle: 3 distinct vertices + closure

EdgeKey = tuple[str, int, int]  # ("h"|"v", padded column, padded row)


def _edge_key(edge: int, i: int, j: int) -> EdgeKey:
    """Key of a quad edge, shared with the neighbouring quad."""
    if edge == 0:
        return ("h", i, j)
    if edge == 1:
        return ("v", i + 1, j)
    if edge == 2:
        return ("h", i, j + 1)
    return ("v", i, j)


def _frame_position(k: int, n: int) -> float:
    """Position of padded sample ``k`` on an axis of ``n`` cells, clamped to the frame."""
    return min(max(k - 0.5, 0.0), float(n))


# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------
def compute_thresholds(
    field_min: float, field_max: float, level_count: int
) -> tuple[float, ...]:
    """Split ``[field_min, field_max]`` into ``level_count + 1`` equal steps.

    Returns the ``level_count`` interior boundaries in ascending order; the
    minimum (which would contour the whole grid) and the maximum are skipped.

    Raises:
        ValueError: If level_count < 1
    """
    if level_count < 1:
        raise ValueError(f"level_count must be >= 1, got {level_count}")
    step = (field_max - field_min) / (level_count + 1)
    return tuple(field_min + step * i for i in range(1, level_count + 1))


# ---------------------------------------------------------------------------
# Isoline tracing
# ---------------------------------------------------------------------------
def pad_field(data: NDArray[np.float64]) -> NDArray[np.float64]:
    """Surround ``data`` with one ring of -inf samples."""
    height, width = data.shape
    padded = np.full((height + 2, width + 2), -np.inf, dtype=np.float64)
    padded[1:-1, 1:-1] = data
    return padded


def trace_isolines(data: NDArray[np.float64], threshold: float) -> list[Ring]:
    """Extract closed isoline rings of ``data`` at ``threshold``.

    Args:
        data: 2D field indexed ``[y, x]``
        threshold: Finite iso-value

    Returns:
        Closed (n, 2) rings in grid index space, in row-major scan order of
        their first segment.
    """
    height, width = data.shape
    padded = pad_field(data)
    inside = padded >= threshold

    cases = (
        inside[:-1, :-1].astype(np.uint8)
        | (inside[:-1, 1:].astype(np.uint8) << 1)
        | (inside[1:, 1:].astype(np.uint8) << 2)
        | (inside[1:, :-1].astype(np.uint8) << 3)
    )
    rows, cols = np.nonzero((cases != 0) & (cases != 15))

    links: dict[EdgeKey, EdgeKey] = {}
    order: list[EdgeKey] = []
    for j, i in zip(rows.tolist(), cols.tolist()):
        case = int(cases[j, i])
        if case in _SADDLES:
            centre = (
                padded[j, i] + padded[j, i + 1] + padded[j + 1, i + 1] + padded[j + 1, i]
            ) / 4
            connected, separated = _SADDLES[case]
            segments = connected if centre >= threshold else separated
        else:
            segments = _SEGMENTS[case]
        for entry, exit_ in segments:
            start = _edge_key(entry, i, j)
            links[start] = _edge_key(exit_, i, j)
            order.append(start)

    vertices: dict[EdgeKey, tuple[float, float]] = {}

    def vertex(key: EdgeKey) -> tuple[float, float]:
        cached = vertices.get(key)
        if cached is not None:
            return cached
        kind, i, j = key
        if kind == "h":
            y = _frame_position(j, height)
            if 1 <= i and i + 1 <= width:
                a, b = padded[j, i], padded[j, i + 1]
                x = (i - 0.5) + (threshold - a) / (b - a)
            else:
                x = 0.0 if i == 0 else float(width)
        else:
            x = _frame_position(i, width)
            if 1 <= j and j + 1 <= height:
                a, b = padded[j, i], padded[j + 1, i]
                y = (j - 0.5) + (threshold - a) / (b - a)
            else:
                y = 0.0 if j == 0 else float(height)
        point = (float(x), float(y))
        vertices[key] = point
        return point

    rings: list[Ring] = []
    visited: set[EdgeKey] = set()
    for start in order:
        if start in visited:
            continue
        path = [start]
        visited.add(start)
        nxt = links[start]
        while nxt != start:
            path.append(nxt)
            visited.add(nxt)
            nxt = links[nxt]
        coords = [vertex(key) for key in path]
        coords.append(coords[0])
        if len(coords) >= MIN_RING_VERTICES:
            rings.append(np.asarray(coords, dtype=np.float64))
    return rings


# ---------------------------------------------------------------------------
# Polygon assembly
# ---------------------------------------------------------------------------
def signed_area(ring: Ring) -> float:
    """Shoelace area of a closed ring; positive when counter-clockwise (y up)."""
    x, y = ring[:, 0], ring[:, 1]
    return float(np.dot(x[:-1], y[1:]) - np.dot(x[1:], y[:-1])) / 2


def ring_contains(ring: Ring, x: float, y: float) -> bool:
    """Even-odd ray casting test for point ``(x, y)`` against a closed ring."""
    xs, ys = ring[:-1, 0], ring[:-1, 1]
    xe, ye = ring[1:, 0], ring[1:, 1]
    crosses = (ys > y) != (ye > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_at = xs + (y - ys) * (xe - xs) / (ye - ys)
    return bool(np.count_nonzero(crosses & (x < x_at)) % 2)


def assemble_polygons(rings: Sequence[Ring]) -> tuple[Polygon, ...]:
    """Group rings into polygons: each exterior followed by its holes.

    Exteriors keep scan order. A hole joins the smallest exterior that
    contains it; a hole no exterior contains is dropped.
    """
    exteriors: list[tuple[Ring, float]] = []
    holes: list[Ring] = []
    for ring in rings:
        area = signed_area(ring)
        if area > 0:
            exteriors.append((ring, area))
        elif area < 0:
            holes.append(ring)

    members: list[list[Ring]] = [[ring] for ring, _ in exteriors]
    for hole in holes:
        hx, hy = float(hole[0, 0]), float(hole[0, 1])
        best: int | None = None
        for index, (ring, area) in enumerate(exteriors):
            if ring_contains(ring, hx, hy) and (
                best is None or area < exteriors[best][1]
            ):
                best = index
        if best is not None:
            members[best].append(hole)
    return tuple(tuple(polygon) for polygon in members)


# ---------------------------------------------------------------------------
# Main Service: extract_contours
# ---------------------------------------------------------------------------
def extract_contours(
    grid: ScalarGrid,
    level_count: int | None = None,
    energy_floor: float | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[Contour, ...]:
    """Extract one Contour per threshold, ascending, in grid index space.

    Args:
        grid: Energy field
        level_count: Number of thresholds (default: config.contour_levels)
        energy_floor: Minimum field maximum worth contouring
            (default: config.energy_floor)
        config: Engine configuration supplying defaults

    Returns:
        Tuple of Contours; empty when the field maximum is below the floor
        or the field is perfectly flat (normalisation would divide by zero).
    """
    levels = config.contour_levels if level_count is None else level_count
    floor = config.energy_floor if energy_floor is None else energy_floor

    field_min, field_max = grid.min(), grid.max()
    if field_max < floor:
        return ()
    if field_max == field_min:
        return ()

    span = field_max - field_min
    contours: list[Contour] = []
    for threshold in compute_thresholds(field_min, field_max, levels):
        rings = trace_isolines(grid.data, threshold)
        contours.append(
            Contour(
                threshold_value=threshold,
                normalized_value=(threshold - field_min) / span,
                polygons=assemble_polygons(rings),
            )
        )
    return tuple(contours)
