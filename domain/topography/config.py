"""Topography Bounded Context - Engine Configuration.

A single immutable configuration value is passed into every engine call.
It is safe to share one instance across threads: nothing in the engine
writes to it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.resources.value_objects import (
    DEFAULT_PROFILE,
    DEFAULT_TYPE_PROFILES,
    TypeProfile,
)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_GRID_SIZE = 150  # cells per axis (higher = smoother but slower)
DEFAULT_CONTOUR_LEVELS = 12
DEFAULT_CUTOFF_MULTIPLIER = 3.0  # at 3 sigma the Gaussian is ~1.1% of amplitude
DEFAULT_ENERGY_FLOOR = 0.01  # below this field maximum there is nothing to contour


class EngineConfig(BaseModel):
    """Immutable engine parameters (Value Object).

    Invariants:
        EC-1: grid_width, grid_height >= 2
        EC-2: contour_levels >= 1
        EC-3: cutoff_multiplier > 0
        EC-4: energy_floor >= 0
    """

    grid_width: int = Field(default=DEFAULT_GRID_SIZE, ge=2)
    grid_height: int = Field(default=DEFAULT_GRID_SIZE, ge=2)
    contour_levels: int = Field(default=DEFAULT_CONTOUR_LEVELS, ge=1)
    cutoff_multiplier: float = Field(default=DEFAULT_CUTOFF_MULTIPLIER, gt=0)
    energy_floor: float = Field(default=DEFAULT_ENERGY_FLOOR, ge=0)
    type_profiles: Mapping[str, TypeProfile] = Field(
        default_factory=lambda: dict(DEFAULT_TYPE_PROFILES)
    )
    default_profile: TypeProfile = DEFAULT_PROFILE

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def freeze_profiles(self) -> "EngineConfig":
        # Frozen model still exposes a mutable dict; wrap it read-only.
        object.__setattr__(
            self, "type_profiles", MappingProxyType(dict(self.type_profiles))
        )
        return self

    def profile_for(self, resource_type: str) -> TypeProfile:
        """Resolve the profile for a type, falling back to the default."""
        return self.type_profiles.get(resource_type, self.default_profile)

    def with_overrides(self, **changes: Any) -> "EngineConfig":
        """Return a new, validated config with some fields replaced.

        Raises:
            ValueError: If a name is not a config field or a value is invalid
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown config fields: {sorted(unknown)}")
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data["type_profiles"] = dict(self.type_profiles)
        data.update(changes)
        return EngineConfig(**data)


DEFAULT_CONFIG = EngineConfig()
