"""
Analysis Result Types

Every statistic returns one of these records. When no trajectory
qualifies the record is still returned, with its identifying fields set
to None and ``found`` False, so callers can render "not enough data"
without special-casing exceptions or sentinel numbers.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Hashable, Optional

from ..tracking.models import Trajectory


@dataclass(frozen=True)
class AltitudeExtreme:
    """Highest or lowest single observation across all trajectories."""

    trajectory_id: Optional[Hashable] = None
    altitude: Optional[float] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    observed_at: Optional[datetime] = None

    @property
    def found(self) -> bool:
        return self.altitude is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DistanceExtreme:
    """Trajectory with the longest or shortest travelled distance."""

    trajectory: Optional[Trajectory] = None
    distance: float = 0.0

    @property
    def found(self) -> bool:
        return self.trajectory is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trajectory_id": self.trajectory.id if self.trajectory else None,
            "distance_km": self.distance,
        }


@dataclass(frozen=True)
class SpeedRecord:
    """Fastest average ground speed over the window."""

    trajectory_id: Optional[Hashable] = None
    average_speed_kmh: float = 0.0
    total_distance_km: float = 0.0
    total_time_hours: float = 0.0

    @property
    def found(self) -> bool:
        return self.trajectory_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AltitudeRangeRecord:
    """Trajectory covering the widest band of altitudes."""

    trajectory_id: Optional[Hashable] = None
    altitude_range: float = 0.0
    max_altitude: Optional[float] = None
    min_altitude: Optional[float] = None

    @property
    def found(self) -> bool:
        return self.trajectory_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ConsistencyRecord:
    """Trajectory that held its heading best."""

    trajectory_id: Optional[Hashable] = None
    consistency_percent: float = 0.0
    direction_change_count: int = 0
    average_direction_change_degrees: float = 0.0

    @property
    def found(self) -> bool:
        return self.trajectory_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ThresholdComparison:
    """How many trajectories peaked above a reference height."""

    total_count: int = 0
    above_count: int = 0
    percentage: float = 0.0
    threshold_km: float = 0.0

    @property
    def found(self) -> bool:
        return self.total_count > 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DriftSummary:
    """Average drift vector of the whole constellation."""

    bearing_degrees: Optional[float] = None
    compass_label: str = "N/A"
    avg_delta_lat: Optional[float] = None
    avg_delta_lon: Optional[float] = None
    trajectory_count: int = 0

    @property
    def found(self) -> bool:
        return self.bearing_degrees is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CoverageBounds:
    """Bounding box over every observed position."""

    total_trajectories: int = 0
    min_lat: Optional[float] = None
    max_lat: Optional[float] = None
    min_lon: Optional[float] = None
    max_lon: Optional[float] = None
    lat_range: float = 0.0
    lon_range: float = 0.0

    @property
    def found(self) -> bool:
        return self.min_lat is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
