"""Domain Port(s) for topography instrumentation.

Progress and timing reports leave the engine through an observer so that
the engine stays side-effect free. Concrete observers (e.g., logging)
live in infrastructure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from domain.topography.value_objects import ProcessingStatistics


class ProcessingObserver(Protocol):
    """Receives pipeline progress notifications."""

    def on_start(self, resource_count: int) -> None: ...

    def on_no_signal(self, field_max: float) -> None: ...

    def on_contours(self, level_count: int) -> None: ...

    def on_complete(self, statistics: "ProcessingStatistics") -> None: ...


class NullObserver:
    """Observer that ignores every notification."""

    def on_start(self, resource_count: int) -> None:
        pass

    def on_no_signal(self, field_max: float) -> None:
        pass

    def on_contours(self, level_count: int) -> None:
        pass

    def on_complete(self, statistics: "ProcessingStatistics") -> None:
        pass
