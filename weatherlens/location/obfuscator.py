"""Random coordinate displacement applied before reverse geocoding."""

import math
import random

from weatherlens.config.schema import SamplingMode
from weatherlens.models.location import Coordinate, ObfuscatedCoordinate

METERS_PER_DEGREE = 111000.0
# Sphere on which one degree of arc is exactly METERS_PER_DEGREE.
EARTH_RADIUS_M = METERS_PER_DEGREE * 180.0 / math.pi


def obfuscate(
    coordinate: Coordinate,
    radius_m: float,
    rng: random.Random | None = None,
    sampling: SamplingMode = SamplingMode.CENTER_BIASED,
) -> ObfuscatedCoordinate:
    """Displace a coordinate by a random offset of at most radius_m.

    CENTER_BIASED draws the distance uniformly along the radius, so points
    cluster near the true location. UNIFORM_AREA draws radius * sqrt(u),
    which spreads points evenly over the disc.

    The longitude offset is not scaled by 1/cos(lat). East-west displacement
    in metres therefore shrinks toward the poles but never exceeds the radius.

    Raises:
        ValueError: if radius_m is negative.
    """
    if radius_m < 0:
        raise ValueError(f"radius_m must be non-negative, got {radius_m}")
    if rng is None:
        rng = random.Random()

    radius_deg = radius_m / METERS_PER_DEGREE
    angle = rng.random() * 2 * math.pi
    if sampling == SamplingMode.UNIFORM_AREA:
        distance = radius_deg * math.sqrt(rng.random())
    else:
        distance = rng.random() * radius_deg

    lat = coordinate.lat + math.cos(angle) * distance
    lng = coordinate.lng + math.sin(angle) * distance
    return ObfuscatedCoordinate(lat=_clamp_lat(lat), lng=_wrap_lng(lng))


def great_circle_distance_m(
    a: Coordinate | ObfuscatedCoordinate, b: Coordinate | ObfuscatedCoordinate
) -> float:
    """Haversine distance in metres on the METERS_PER_DEGREE sphere."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = phi2 - phi1
    d_lambda = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def _clamp_lat(lat: float) -> float:
    return max(-90.0, min(90.0, lat))


def _wrap_lng(lng: float) -> float:
    if -180.0 <= lng < 180.0:
        return lng
    return (lng + 180.0) % 360.0 - 180.0
