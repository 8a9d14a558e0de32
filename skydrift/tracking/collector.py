"""
SkyDrift Snapshot Collector
Fetches the 24 hourly balloon snapshots from the upstream feed.
"""

import requests
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from .models import SnapshotMatrix
from ..config import Config
from ..utils import is_finite_number, validate_coordinates
from .constants import MAX_FETCH_WORKERS


@dataclass
class HourFetchResult:
    """Outcome of fetching a single hour slice."""

    index: int
    points: List[list] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class SnapshotResult:
    """A complete window plus fetch metadata."""

    matrix: SnapshotMatrix
    metadata: Dict[str, Any]


def validate_entry(entry: Any) -> bool:
    """
    Check a raw feed entry ``[lat, lon, alt, ...]``.

    The first three elements must be finite real numbers and the
    coordinates must be in range. Invalid entries are dropped, never
    repaired.
    """
    if not isinstance(entry, (list, tuple)) or len(entry) < 3:
        return False

    lat, lon, alt = entry[0], entry[1], entry[2]
    return is_finite_number(alt) and validate_coordinates(lat, lon)


class SnapshotCollector:
    """Collects the hourly snapshot window from the balloon feed."""

    def __init__(self, config: Config):
        """
        Initialize snapshot collector.

        Args:
            config: SkyDrift configuration object
        """
        self.config = config
        self.base_url = config.feed_base_url
        self.total_hours = config.total_hours
        self.timeout = config.feed_timeout
        self.headers = {"User-Agent": config.user_agent}

    def hour_url(self, hour_index: int) -> str:
        """URL of the slice ``hour_index`` hours ago, e.g. ``.../03.json``."""
        return f"{self.base_url}/{hour_index:02d}.json"

    def fetch_hour(self, hour_index: int) -> HourFetchResult:
        """
        Fetch and validate one hour slice.

        Any failure yields an empty slice with the error recorded, so one
        bad hour never breaks the window.

        Args:
            hour_index: Hours ago (0 = most recent)

        Returns:
            HourFetchResult with validated raw entries
        """
        url = self.hour_url(hour_index)

        try:
            response = requests.get(url, timeout=self.timeout, headers=self.headers)
            response.raise_for_status()
            data = response.json()

            if not isinstance(data, list):
                raise ValueError("Response is not an array")

            points = [list(entry) for entry in data if validate_entry(entry)]
            return HourFetchResult(index=hour_index, points=points)

        except requests.exceptions.Timeout:
            error = f"Request timeout after {self.timeout}s"
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            error = f"HTTP {status}"
        except requests.exceptions.RequestException as e:
            error = f"Request failed: {e}"
        except ValueError as e:
            error = f"Invalid response: {e}"

        print(f"⚠️  Failed to fetch {hour_index:02d}.json: {error}")
        return HourFetchResult(index=hour_index, points=[], error=error)

    def fetch_snapshot(self, now_ms: Optional[int] = None) -> SnapshotResult:
        """
        Fetch every hour slice of the window.

        Args:
            now_ms: Reference time for point timestamps (default: now)

        Returns:
            SnapshotResult with a full-length matrix and fetch metadata
        """
        if now_ms is None:
            now_ms = int(time.time() * 1000)

        workers = max(1, min(MAX_FETCH_WORKERS, self.total_hours))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(self.fetch_hour, range(self.total_hours)))

        # Keep chronological order regardless of completion order
        results.sort(key=lambda r: r.index)

        raw_slices = [r.points for r in results]
        matrix = SnapshotMatrix.from_raw(
            raw_slices, now_ms=now_ms, total_hours=self.total_hours
        )

        errors = [f"{r.index}: {r.error}" for r in results if r.error]
        metadata = {
            "total_points": matrix.total_points,
            "total_balloons": len(matrix[0]) if len(matrix) else 0,
            "hours_with_data": matrix.hours_with_data,
            "hours_with_errors": len(errors),
            "errors": errors,
            "fetched_at": datetime.now().isoformat(),
            "success": not errors,
        }

        if len(errors) == self.total_hours:
            print(f"❌ All {self.total_hours} hourly snapshots failed to load")

        return SnapshotResult(matrix=matrix, metadata=metadata)
