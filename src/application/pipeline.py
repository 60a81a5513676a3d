"""Topography pipeline: the engine's single public entry point.

Sequences field generation -> contour extraction -> space transform and
attaches summary statistics. No I/O, no caching and no state between calls:
identical inputs give identical contours.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from domain.resources.services import filter_by_types
from domain.resources.value_objects import ResourcePoint
from domain.topography.config import DEFAULT_CONFIG, EngineConfig
from domain.topography.contours import extract_contours
from domain.topography.field import generate_field
from domain.topography.ports import NullObserver, ProcessingObserver
from domain.topography.transforms import to_geographic, to_raster
from domain.topography.value_objects import (
    Contour,
    GeoWindow,
    ProcessingStatistics,
    RasterWindow,
    ScalarGrid,
)


class ProcessingResult(BaseModel):
    """Contours in the requested space plus the field they came from."""

    contours: tuple[Contour, ...]
    field: ScalarGrid
    statistics: ProcessingStatistics

    model_config = ConfigDict(frozen=True)


class ContourPipeline:
    """Stateless orchestrator around the topography engine.

    Parameters
    ----------
    config: EngineConfig
        Shared, read-only engine parameters.
    observer: ProcessingObserver | None
        Receives progress notifications; defaults to a no-op observer.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        observer: ProcessingObserver | None = None,
    ) -> None:
        self.config = config
        self.observer: ProcessingObserver = observer or NullObserver()

    def process(
        self,
        points: Sequence[ResourcePoint],
        geo_window: GeoWindow,
        raster_window: RasterWindow,
        enabled_types: Iterable[str] | None = None,
    ) -> ProcessingResult:
        """Build contours in raster (pixel) space.

        Args:
            points: Validated resource points
            geo_window: Geographic extent of the viewport
            raster_window: Pixel rectangle of the drawing surface
            enabled_types: Optional type filter; None keeps every point

        Returns:
            ProcessingResult with raster-space contours
        """
        cfg = self.config
        return self._run(
            points,
            geo_window,
            enabled_types,
            lambda contours: to_raster(
                contours, raster_window, cfg.grid_width, cfg.grid_height
            ),
        )

    def process_geographic(
        self,
        points: Sequence[ResourcePoint],
        geo_window: GeoWindow,
        enabled_types: Iterable[str] | None = None,
    ) -> ProcessingResult:
        """Build contours in geographic (lng, lat) space."""
        cfg = self.config
        return self._run(
            points,
            geo_window,
            enabled_types,
            lambda contours: to_geographic(
                contours, geo_window, cfg.grid_width, cfg.grid_height
            ),
        )

    def _run(self, points, geo_window, enabled_types, transform) -> ProcessingResult:
        start = time.perf_counter()
        selected = filter_by_types(points, enabled_types)
        self.observer.on_start(len(selected))

        field = generate_field(selected, geo_window, self.config)
        grid_contours = extract_contours(field, config=self.config)
        if not grid_contours:
            self.observer.on_no_signal(field.max())
        else:
            self.observer.on_contours(len(grid_contours))

        contours = transform(grid_contours)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        statistics = ProcessingStatistics(
            resource_count=len(selected),
            contour_levels=len(contours),
            processing_time_ms=elapsed_ms,
        )
        self.observer.on_complete(statistics)
        return ProcessingResult(contours=contours, field=field, statistics=statistics)
