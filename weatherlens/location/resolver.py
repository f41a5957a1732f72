"""Privacy-preserving reverse geocoding of map selections."""

import logging
import random
from collections.abc import Callable

import httpx

from weatherlens.config.schema import SamplingMode
from weatherlens.ingest.owm_client import OpenWeatherMapClient
from weatherlens.location.obfuscator import obfuscate
from weatherlens.models.location import (
    Coordinate,
    LocationResolution,
    ObfuscatedCoordinate,
    ResolutionStatus,
    ResolvedLocation,
)

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_M = 10000.0


class LocationResolver:
    """Turns an exact map click into an approximate, named location.

    Only the obfuscated point is ever sent to the geocoding service. It is
    also handed to `on_approximate` so the UI can draw the uncertainty circle.
    """

    def __init__(
        self,
        client: OpenWeatherMapClient,
        radius_m: float = DEFAULT_RADIUS_M,
        sampling: SamplingMode = SamplingMode.CENTER_BIASED,
        rng: random.Random | None = None,
    ):
        self.client = client
        self.radius_m = radius_m
        self.sampling = sampling
        self.rng = rng

    def resolve(
        self,
        coordinate: Coordinate,
        on_approximate: Callable[[ObfuscatedCoordinate], None] | None = None,
    ) -> LocationResolution:
        approx = obfuscate(coordinate, self.radius_m, rng=self.rng, sampling=self.sampling)
        if on_approximate is not None:
            on_approximate(approx)

        try:
            results = self.client.reverse_geocode(approx.lat, approx.lng, limit=1)
            if not results:
                logger.info("No reverse geocoding result near %.4f,%.4f", approx.lat, approx.lng)
                return LocationResolution(status=ResolutionStatus.NO_NAME, approximate=approx)
            name = format_display_name(results[0])
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            logger.warning(
                "Reverse geocoding failed near %.4f,%.4f: %s", approx.lat, approx.lng, e
            )
            return LocationResolution(
                status=ResolutionStatus.FAILED, approximate=approx, error=str(e)
            )

        location = ResolvedLocation(display_name=name, source_coordinate=approx)
        status = ResolutionStatus.RESOLVED if location.has_name else ResolutionStatus.NO_NAME
        return LocationResolution(status=status, approximate=approx, location=location)


def format_display_name(result: dict) -> str:
    """Join name, state and country, skipping absent or empty parts."""
    if not isinstance(result, dict):
        raise ValueError(f"Geocoding result must be an object, got {type(result).__name__}")
    parts = [result.get("name"), result.get("state"), result.get("country")]
    return ", ".join(p for p in parts if p)
