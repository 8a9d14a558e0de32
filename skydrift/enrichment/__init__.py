"""
SkyDrift Enrichment Component

Surface temperature lookup for balloon positions.

Main Classes:
    - OpenMeteoClient: Batched, rate-limited temperature lookups
    - TemperatureCache: Coordinate-keyed cache with expiry
    - TemperatureEnricher: Matches temperatures back onto positions

Example:
    >>> from skydrift.enrichment import OpenMeteoClient, TemperatureEnricher
    >>> enricher = TemperatureEnricher(OpenMeteoClient.from_config(config))
    >>> annotated = enricher.annotate_with_temperature(latest_points)
"""

from .cache import TemperatureCache
from .temperature import (
    OpenMeteoClient,
    PointWithTemperature,
    TemperatureEnricher,
    sample_points,
)

# Utilities
from . import constants

__all__ = [
    "OpenMeteoClient",
    "PointWithTemperature",
    "TemperatureCache",
    "TemperatureEnricher",
    "sample_points",
    "constants",
]
