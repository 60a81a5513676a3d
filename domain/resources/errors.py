"""Resources Bounded Context - Error Hierarchy.

Custom exceptions for loading resource points from external payloads.
"""

from __future__ import annotations


class ResourceError(Exception):
    """Base error for resource operations."""


class InvalidResourcePayloadError(ResourceError):
    """Payload is not valid JSON or lacks the expected ``elements`` list.

    Attributes:
        source: Name of the offending payload (file name, never a full path)
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid resource payload {source}: {reason}")
