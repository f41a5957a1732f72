"""Coordinate and reverse-geocoding result models."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class Coordinate:
    lat: float  # [-90, 90]
    lng: float  # [-180, 180]


@dataclass(frozen=True)
class ObfuscatedCoordinate:
    """A randomly displaced Coordinate. Holds no link to the true point."""

    lat: float
    lng: float


@dataclass(frozen=True)
class ResolvedLocation:
    display_name: str
    source_coordinate: ObfuscatedCoordinate

    @property
    def has_name(self) -> bool:
        return bool(self.display_name)


class ResolutionStatus(StrEnum):
    RESOLVED = "resolved"
    NO_NAME = "no_name"
    FAILED = "failed"


@dataclass(frozen=True)
class LocationResolution:
    status: ResolutionStatus
    approximate: ObfuscatedCoordinate
    location: ResolvedLocation | None = None
    error: str | None = None

    @property
    def display_name(self) -> str:
        if self.status != ResolutionStatus.RESOLVED or self.location is None:
            return ""
        return self.location.display_name
