"""
Surface Temperature Enrichment

Pairs balloon positions with the current surface temperature below them,
looked up from the Open-Meteo forecast API. Lookups are batched and paced
to stay within the API's rate limits. Any failure degrades to a ``None``
temperature; nothing here raises into the analysis pipeline.
"""

import random
import requests
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from .cache import TemperatureCache
from .constants import (
    BATCH_SIZE,
    DEFAULT_API_TIMEOUT,
    DELAY_SECONDS,
    OPEN_METEO_URL,
    TEMPERATURE_VARIABLE,
)
from ..utils import is_finite_number


@dataclass(frozen=True)
class PointWithTemperature:
    """A balloon position with the surface temperature below it, if known."""

    lat: float
    lon: float
    alt: float
    temperature_c: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def sample_points(
    points: Sequence[Any], sample_size: int, rng: Optional[random.Random] = None
) -> List[Any]:
    """
    Random sample of points without replacement.

    Args:
        points: Candidate points (usually latest balloon positions)
        sample_size: Number of points wanted
        rng: Random generator, for reproducible samples

    Returns:
        ``sample_size`` points, or all of them (shuffled) if fewer exist
    """
    if sample_size <= 0 or not points:
        return []

    rng = rng or random.Random()
    return rng.sample(list(points), min(sample_size, len(points)))


class OpenMeteoClient:
    """Fetches current 2 m temperatures from Open-Meteo."""

    def __init__(
        self,
        api_url: str = OPEN_METEO_URL,
        timeout: float = DEFAULT_API_TIMEOUT,
        batch_size: int = BATCH_SIZE,
        delay_seconds: float = DELAY_SECONDS,
        cache: Optional[TemperatureCache] = None,
    ):
        """
        Initialize temperature client.

        Args:
            api_url: Forecast endpoint
            timeout: Per-request timeout in seconds
            batch_size: Points requested concurrently (default: 5)
            delay_seconds: Pause between batches (default: 0.6s)
            cache: Optional temperature cache shared between calls
        """
        self.api_url = api_url
        self.timeout = timeout
        self.batch_size = max(1, batch_size)
        self.delay_seconds = delay_seconds
        self.cache = cache

    @classmethod
    def from_config(cls, config) -> "OpenMeteoClient":
        """Build a client (with its own cache) from a SkyDrift Config."""
        return cls(
            api_url=config.enrichment_api_url,
            timeout=config.enrichment_timeout,
            batch_size=config.enrichment_batch_size,
            delay_seconds=config.enrichment_delay,
            cache=TemperatureCache(ttl_seconds=config.cache_ttl),
        )

    def fetch_temperature(self, lat: float, lon: float) -> Optional[float]:
        """
        Current surface temperature at a coordinate.

        Returns:
            Temperature in °C, or None on any failure
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": TEMPERATURE_VARIABLE,
            "timezone": "auto",
        }

        try:
            response = requests.get(self.api_url, params=params, timeout=self.timeout)

            if not response.ok:
                print(
                    f"⚠️  Bad response at {lat}, {lon}: "
                    f"{response.status_code} {response.reason}"
                )
                return None

            data = response.json()
        except requests.exceptions.RequestException as e:
            print(f"⚠️  Error fetching temperature for {lat}, {lon}: {e}")
            return None
        except ValueError as e:
            print(f"⚠️  Invalid temperature response for {lat}, {lon}: {e}")
            return None

        current = data.get("current") if isinstance(data, dict) else None
        temperature = current.get(TEMPERATURE_VARIABLE) if isinstance(current, dict) else None

        return float(temperature) if is_finite_number(temperature) else None

    def fetch_temperatures(self, points: Sequence[Any]) -> List[Dict[str, Any]]:
        """
        Look up temperatures for many points.

        Cached coordinates skip the network. The rest are fetched in
        batches of ``batch_size`` with ``delay_seconds`` between batches.

        Args:
            points: Objects or dicts with ``lat`` and ``lon``

        Returns:
            List of ``{"lat", "lon", "temperature_c"}`` dicts
        """
        coords = [_coords(p) for p in points]
        results: Dict[tuple, Optional[float]] = {}

        pending = []
        for coord in coords:
            if coord in results or coord in pending:
                continue
            cached = self.cache.get(*coord) if self.cache is not None else None
            if cached is not None:
                results[coord] = cached
            else:
                pending.append(coord)

        total_batches = (len(pending) + self.batch_size - 1) // self.batch_size

        for batch_number, start in enumerate(range(0, len(pending), self.batch_size), 1):
            batch = pending[start : start + self.batch_size]

            with ThreadPoolExecutor(max_workers=len(batch)) as pool:
                temperatures = list(
                    pool.map(lambda c: self.fetch_temperature(*c), batch)
                )

            for coord, temperature in zip(batch, temperatures):
                results[coord] = temperature
                if temperature is not None and self.cache is not None:
                    self.cache.set(*coord, temperature)

            if batch_number < total_batches and self.delay_seconds > 0:
                print(
                    f"⏳ Pausing {self.delay_seconds}s after batch "
                    f"{batch_number} of {total_batches}"
                )
                time.sleep(self.delay_seconds)

        return [
            {"lat": lat, "lon": lon, "temperature_c": results.get((lat, lon))}
            for lat, lon in coords
        ]


def _coords(point: Any) -> tuple:
    if isinstance(point, dict):
        return point["lat"], point["lon"]
    return point.lat, point.lon


def _altitude(point: Any) -> Optional[float]:
    if isinstance(point, dict):
        return point.get("alt")
    return getattr(point, "alt", None)


class TemperatureEnricher:
    """
    Annotates balloon positions with surface temperatures.

    Results from the client are matched back by exact coordinate
    equality, so the client is free to reorder or drop entries.
    """

    def __init__(self, client: OpenMeteoClient):
        self.client = client

    def annotate_with_temperature(self, points: Sequence[Any]) -> List[PointWithTemperature]:
        """
        Pair each point with its temperature.

        Args:
            points: SamplePoints (or dicts) with lat, lon and alt

        Returns:
            PointWithTemperature per input point, in input order. All
            temperatures are None if the lookup failed entirely.
        """
        if not points:
            return []

        lookup: Dict[tuple, Optional[float]] = {}
        try:
            results = self.client.fetch_temperatures(points)
            if not isinstance(results, list):
                raise ValueError(f"Expected a list of results, got {type(results).__name__}")
        except Exception as e:
            print(f"⚠️  Temperature enrichment failed, continuing without it: {e}")
            results = []

        skipped = 0
        for result in results:
            if not isinstance(result, dict) or "lat" not in result or "lon" not in result:
                skipped += 1
                continue
            temperature = result.get("temperature_c")
            lookup[(result["lat"], result["lon"])] = (
                float(temperature) if is_finite_number(temperature) else None
            )

        if skipped:
            print(f"⚠️  Ignored {skipped} malformed temperature result(s)")

        annotated = []
        for point in points:
            lat, lon = _coords(point)
            annotated.append(
                PointWithTemperature(
                    lat=lat,
                    lon=lon,
                    alt=_altitude(point),
                    temperature_c=lookup.get((lat, lon)),
                )
            )
        return annotated
