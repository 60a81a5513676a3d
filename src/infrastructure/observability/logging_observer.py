"""ProcessingObserver that reports pipeline progress through ``logging``."""

from __future__ import annotations

import logging

from domain.topography.value_objects import ProcessingStatistics

logger = logging.getLogger(__name__)


class LoggingObserver:
    """Log pipeline progress; timing at INFO, the rest at DEBUG."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def on_start(self, resource_count: int) -> None:
        self.log.debug("Processing %d resources", resource_count)

    def on_no_signal(self, field_max: float) -> None:
        self.log.debug("No significant energy in field (max=%.4f)", field_max)

    def on_contours(self, level_count: int) -> None:
        self.log.debug("Generated %d contour levels", level_count)

    def on_complete(self, statistics: ProcessingStatistics) -> None:
        self.log.info(
            "Processing completed in %.1fms (%d resources, %d levels)",
            statistics.processing_time_ms,
            statistics.resource_count,
            statistics.contour_levels,
        )
