"""Resources Bounded Context - Value Objects.

Immutable descriptions of civic resource points and the per-type energy
profiles that shape their contribution to the care topography.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResourcePoint(BaseModel):
    """Single civic resource located in WGS84 (Value Object).

    Invariants:
        RP-1: id is a positive integer
        RP-2: lat in [-90, 90]
        RP-3: lng in [-180, 180]

    The type tag is free-form; unknown tags fall back to the default
    TypeProfile when the field is generated.
    """

    id: int = Field(gt=0)
    type: str
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    name: str | None = None
    address: str | None = None
    tags: Mapping[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def freeze_tags(self) -> "ResourcePoint":
        # Frozen model still exposes a mutable dict; wrap it read-only.
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))
        return self


class TypeProfile(BaseModel):
    """Gaussian spread and peak energy for one resource type (Value Object).

    sigma is expressed in degrees (roughly 0.001 deg ~ 100 m).
    """

    sigma: float = Field(gt=0)
    amplitude: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Default catalogue
# ---------------------------------------------------------------------------
DEFAULT_TYPE_PROFILES: Mapping[str, TypeProfile] = MappingProxyType(
    {
        "hospital": TypeProfile(sigma=0.006, amplitude=1.0),  # ~600m spread
        "clinic": TypeProfile(sigma=0.003, amplitude=0.5),  # ~300m spread
        "library": TypeProfile(sigma=0.005, amplitude=0.7),  # ~500m spread
        "social": TypeProfile(sigma=0.004, amplitude=0.8),  # ~400m spread
        "pharmacy": TypeProfile(sigma=0.002, amplitude=0.3),  # ~200m spread
        "community": TypeProfile(sigma=0.003, amplitude=0.5),  # ~300m spread
        "kindergarten": TypeProfile(sigma=0.002, amplitude=0.4),  # ~200m spread
    }
)

DEFAULT_PROFILE = TypeProfile(sigma=0.003, amplitude=0.5)

RESOURCE_TYPES: tuple[str, ...] = tuple(DEFAULT_TYPE_PROFILES)


def profiles_from_mapping(raw: Mapping[str, Any]) -> dict[str, TypeProfile]:
    """Build TypeProfiles from a plain ``{type: {sigma, amplitude}}`` mapping.

    Values that are already TypeProfile instances are passed through.
    """
    return {
        name: value if isinstance(value, TypeProfile) else TypeProfile.model_validate(value)
        for name, value in raw.items()
    }
