"""Resources Bounded Context - Domain Services.

Pure helpers over collections of resource points. NO I/O.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from domain.resources.value_objects import ResourcePoint


def filter_by_types(
    points: Iterable[ResourcePoint], enabled_types: Iterable[str] | None
) -> list[ResourcePoint]:
    """Keep only points whose type is enabled.

    ``None`` means every type is enabled. Input order is preserved.
    """
    if enabled_types is None:
        return list(points)
    enabled = frozenset(enabled_types)
    return [p for p in points if p.type in enabled]


def count_by_type(points: Sequence[ResourcePoint]) -> dict[str, int]:
    """Return per-type point counts, sorted by type name."""
    counts = Counter(p.type for p in points)
    return dict(sorted(counts.items()))
