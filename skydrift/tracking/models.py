"""
Tracking Data Model
Sample points, hourly snapshot matrix and reconstructed trajectories.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Hashable, Iterator, List, Optional, Sequence, Tuple

from .constants import HOUR_IN_MS, TOTAL_HOURS


@dataclass(frozen=True)
class SamplePoint:
    """One observation of one balloon at one hour offset."""

    lat: float
    lon: float
    alt: float  # kilometers
    hours_ago: int
    timestamp_ms: int
    entity_key: Optional[Hashable] = None

    @classmethod
    def from_raw(
        cls, entry: Sequence[Any], hours_ago: int, now_ms: int
    ) -> "SamplePoint":
        """
        Build a point from a validated feed entry.

        Args:
            entry: ``[lat, lon, alt]`` or ``[lat, lon, alt, key]``
            hours_ago: Hour slice index (0 = most recent)
            now_ms: Reference time in milliseconds since epoch
        """
        key = entry[3] if len(entry) > 3 else None
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            key = None
        return cls(
            lat=float(entry[0]),
            lon=float(entry[1]),
            alt=float(entry[2]),
            hours_ago=hours_ago,
            timestamp_ms=now_ms - hours_ago * HOUR_IN_MS,
            entity_key=key,
        )

    @property
    def observed_at(self) -> datetime:
        """Observation time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp_ms / 1000, tz=timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "alt": self.alt,
            "hours_ago": self.hours_ago,
            "timestamp_ms": self.timestamp_ms,
        }


class SnapshotMatrix:
    """
    Fixed-size window of hourly slices, index 0 being the most recent hour.

    Positional index within a slice is the only correlation key the
    upstream feed offers. Failed hours are represented by empty slices so
    the window always has ``total_hours`` positions.
    """

    def __init__(
        self,
        slices: Sequence[Sequence[SamplePoint]] = (),
        total_hours: int = TOTAL_HOURS,
    ):
        padded = [tuple(s) for s in list(slices)[:total_hours]]
        padded.extend(() for _ in range(total_hours - len(padded)))
        self._slices: Tuple[Tuple[SamplePoint, ...], ...] = tuple(padded)

    @classmethod
    def from_raw(
        cls,
        raw_slices: Sequence[Sequence[Sequence[Any]]],
        now_ms: Optional[int] = None,
        total_hours: int = TOTAL_HOURS,
    ) -> "SnapshotMatrix":
        """
        Convert raw ``[lat, lon, alt]`` hour slices into sample points.

        Entries are expected to be validated already; see
        ``collector.validate_entry``.
        """
        if now_ms is None:
            now_ms = int(time.time() * 1000)

        slices = []
        for hour, raw in enumerate(list(raw_slices)[:total_hours]):
            slices.append(
                [SamplePoint.from_raw(entry, hour, now_ms) for entry in raw or []]
            )
        return cls(slices, total_hours=total_hours)

    @property
    def slices(self) -> Tuple[Tuple[SamplePoint, ...], ...]:
        return self._slices

    @property
    def total_points(self) -> int:
        return sum(len(s) for s in self._slices)

    @property
    def hours_with_data(self) -> int:
        return sum(1 for s in self._slices if s)

    @property
    def max_width(self) -> int:
        """Longest hour slice, 0 for an empty window."""
        return max((len(s) for s in self._slices), default=0)

    def __len__(self) -> int:
        return len(self._slices)

    def __iter__(self) -> Iterator[Tuple[SamplePoint, ...]]:
        return iter(self._slices)

    def __getitem__(self, hour: int) -> Tuple[SamplePoint, ...]:
        return self._slices[hour]

    def __repr__(self) -> str:
        return (
            f"SnapshotMatrix(hours={len(self)}, points={self.total_points}, "
            f"hours_with_data={self.hours_with_data})"
        )


@dataclass(frozen=True)
class Trajectory:
    """
    A reconstructed balloon path.

    ``path`` is ordered newest first (``hours_ago`` ascending). The id is
    the positional index (or entity key) assigned during reconstruction
    and is only meaningful within that pass.
    """

    id: Hashable
    path: Tuple[SamplePoint, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))

    @property
    def latest(self) -> Optional[SamplePoint]:
        return self.path[0] if self.path else None

    @property
    def oldest(self) -> Optional[SamplePoint]:
        return self.path[-1] if self.path else None

    @property
    def elapsed_hours(self) -> float:
        """Hours between the oldest and newest observation."""
        if len(self.path) < 2:
            return 0.0
        return (self.path[0].timestamp_ms - self.path[-1].timestamp_ms) / HOUR_IN_MS

    @property
    def altitudes(self) -> List[float]:
        return [p.alt for p in self.path]

    def __len__(self) -> int:
        return len(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "points": len(self.path),
            "path": [p.to_dict() for p in self.path],
        }
