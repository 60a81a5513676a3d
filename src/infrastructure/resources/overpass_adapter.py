"""Overpass adapter for ResourceRepository.

Implements loading of civic resource points from a saved Overpass API
response (JSON with an ``elements`` list) and returns domain ResourcePoint
Value Objects. Network retrieval is out of scope; this adapter only parses.

Lifecycle:
1) Check the file exists, is a regular non-empty .json file
2) Decode JSON and locate the ``elements`` list
3) Classify each element by its OSM tags; drop unknown types
4) Take coordinates from the node itself or a way's ``center``
5) Return ResourcePoints in payload order
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from domain.resources.errors import InvalidResourcePayloadError
from domain.resources.value_objects import ResourcePoint

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

# amenity tag value -> resource type, in classification priority order
_AMENITY_TYPES: tuple[tuple[str, str], ...] = (
    ("hospital", "hospital"),
    ("clinic", "clinic"),
    ("library", "library"),
)
_LATE_AMENITY_TYPES: tuple[tuple[str, str], ...] = (
    ("pharmacy", "pharmacy"),
    ("community_centre", "community"),
    ("kindergarten", "kindergarten"),
)

_NAME_KEYS = ("name", "name:zh", "name:en")
_ADDRESS_PARTS = ("addr:city", "addr:district", "addr:street", "addr:housenumber")


def resource_type_from_tags(tags: Mapping[str, Any] | None) -> str | None:
    """Classify an OSM element into a resource type, or None if unsupported.

    Any ``social_facility`` tag marks a social resource; it is checked after
    hospital/clinic/library and before the remaining amenities.
    """
    if not tags:
        return None
    amenity = tags.get("amenity")
    for value, resource_type in _AMENITY_TYPES:
        if amenity == value:
            return resource_type
    if tags.get("social_facility"):
        return "social"
    for value, resource_type in _LATE_AMENITY_TYPES:
        if amenity == value:
            return resource_type
    return None


def format_address(tags: Mapping[str, Any] | None) -> str | None:
    """Build a display address from ``addr:*`` tags.

    ``addr:full`` wins; otherwise city, district, street and house number
    are joined without separator (CJK address order).
    """
    if not tags:
        return None
    if tags.get("addr:full"):
        return str(tags["addr:full"])
    parts = [str(tags[key]) for key in _ADDRESS_PARTS if tags.get(key)]
    return "".join(parts) if parts else None


def _element_name(tags: Mapping[str, Any]) -> str | None:
    for key in _NAME_KEYS:
        if tags.get(key):
            return str(tags[key])
    return None


def _element_coordinates(element: Mapping[str, Any]) -> tuple[float, float] | None:
    """(lat, lng) of a node, or of a way/relation's ``center``."""
    center = element.get("center") or {}
    lat = element.get("lat", center.get("lat"))
    lng = element.get("lon", center.get("lon"))
    if lat is None or lng is None:
        return None
    return (float(lat), float(lng))


def parse_elements(elements: Iterable[Mapping[str, Any]]) -> list[ResourcePoint]:
    """Convert Overpass elements into ResourcePoints.

    Elements without coordinates, without a recognised type, or that fail
    value validation are skipped (logged at DEBUG).
    """
    points: list[ResourcePoint] = []
    for element in elements:
        tags = element.get("tags") or {}
        resource_type = resource_type_from_tags(tags)
        if resource_type is None:
            continue
        coords = _element_coordinates(element)
        if coords is None:
            logger.debug("Skipping element %s without coordinates", element.get("id"))
            continue
        try:
            point = ResourcePoint(
                id=element.get("id"),
                type=resource_type,
                lat=coords[0],
                lng=coords[1],
                name=_element_name(tags),
                address=format_address(tags),
                tags={str(k): str(v) for k, v in tags.items()},
            )
        except ValidationError as e:
            logger.debug(
                "Skipping invalid element %s (%d errors)",
                element.get("id"),
                e.error_count(),
            )
            continue
        points.append(point)
    return points


class OverpassResourceAdapter:
    """Infrastructure adapter for loading resource points from Overpass JSON.

    Parameters
    ----------
    max_bytes: int | None
        Optional size budget for the payload file. Larger files are rejected
        with InvalidResourcePayloadError before decoding.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self.max_bytes = max_bytes

    def load_points(self, file_path: Path | str) -> list[ResourcePoint]:
        """Load resource points from a saved Overpass response.

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidResourcePayloadError: If the file is empty, too large, not
                JSON, or lacks an ``elements`` list
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.suffix.lower() != ".json":
            raise InvalidResourcePayloadError(
                path.name, f"unsupported file extension: {path.suffix}"
            )

        try:
            st = path.stat()
            if st.st_size == 0:
                raise InvalidResourcePayloadError(path.name, "empty file")
            if self.max_bytes is not None and st.st_size > self.max_bytes:
                raise InvalidResourcePayloadError(
                    path.name,
                    f"file size {st.st_size}B exceeds budget {self.max_bytes}B",
                )
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidResourcePayloadError(
                path.name, f"malformed JSON at line {e.lineno}"
            ) from e

        if not isinstance(payload, dict) or not isinstance(
            payload.get("elements"), list
        ):
            raise InvalidResourcePayloadError(path.name, "missing 'elements' list")

        elements = payload["elements"]
        points = parse_elements(e for e in elements if isinstance(e, dict))
        logger.info(
            "Loaded %d resource points from %s (%d elements)",
            len(points),
            path.name,
            len(elements),
        )
        return points
