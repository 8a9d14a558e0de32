"""
Trajectory Statistics
Aggregate analytics over a set of reconstructed balloon trajectories.

Every function accepts a possibly empty sequence of trajectories and
returns a defined result rather than raising. Trajectories that are too
short for a statistic are skipped. Scans use strict comparisons, so the
first trajectory (then the first point of its path) wins ties.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

from ..tracking.models import SamplePoint, Trajectory
from ..utils import (
    calculate_bearing,
    compass_label,
    haversine_distance,
    is_finite_number,
    normalize_bearing,
)
from .constants import (
    EVEREST_HEIGHT_KM,
    MAX_DIRECTION_CHANGE_DEG,
    MIN_POINTS_FOR_CONSISTENCY,
    MIN_POINTS_FOR_DISTANCE,
)
from .results import (
    AltitudeExtreme,
    AltitudeRangeRecord,
    ConsistencyRecord,
    CoverageBounds,
    DistanceExtreme,
    DriftSummary,
    SpeedRecord,
    ThresholdComparison,
)


def calculate_total_distance(path: Sequence[SamplePoint]) -> float:
    """
    Sum of great-circle distances between consecutive points.

    Args:
        path: Points of one trajectory

    Returns:
        Distance in kilometers, 0 for fewer than two points
    """
    total = 0.0
    for p1, p2 in zip(path, path[1:]):
        total += haversine_distance(p1.lat, p1.lon, p2.lat, p2.lon)
    return total


def _has_altitude(point: SamplePoint) -> bool:
    return is_finite_number(point.alt)


def _has_position(point: SamplePoint) -> bool:
    return is_finite_number(point.lat) and is_finite_number(point.lon)


def _altitude_extreme(trajectories: Sequence[Trajectory], highest: bool) -> AltitudeExtreme:
    best_point: Optional[SamplePoint] = None
    best_id = None

    for trajectory in trajectories:
        for point in trajectory.path:
            if not _has_altitude(point):
                continue
            if best_point is None:
                better = True
            elif highest:
                better = point.alt > best_point.alt
            else:
                better = point.alt < best_point.alt
            if better:
                best_point = point
                best_id = trajectory.id

    if best_point is None:
        return AltitudeExtreme()

    return AltitudeExtreme(
        trajectory_id=best_id,
        altitude=best_point.alt,
        lat=best_point.lat,
        lon=best_point.lon,
        observed_at=best_point.observed_at,
    )


def get_max_altitude(trajectories: Sequence[Trajectory]) -> AltitudeExtreme:
    """Highest observation of any balloon."""
    return _altitude_extreme(trajectories, highest=True)


def get_min_altitude(trajectories: Sequence[Trajectory]) -> AltitudeExtreme:
    """Lowest observation of any balloon."""
    return _altitude_extreme(trajectories, highest=False)


def get_max_distance(trajectories: Sequence[Trajectory]) -> DistanceExtreme:
    """
    Trajectory with the longest travelled distance.

    Only distances strictly above zero can win, so a set of stationary
    balloons reports no winner and distance 0.
    """
    max_distance = 0.0
    longest: Optional[Trajectory] = None

    for trajectory in trajectories:
        distance = calculate_total_distance(trajectory.path)
        if distance > max_distance:
            max_distance = distance
            longest = trajectory

    return DistanceExtreme(trajectory=longest, distance=max_distance)


def get_min_distance(trajectories: Sequence[Trajectory]) -> DistanceExtreme:
    """Trajectory with the shortest travelled distance."""
    min_distance = math.inf
    shortest: Optional[Trajectory] = None

    for trajectory in trajectories:
        distance = calculate_total_distance(trajectory.path)
        if distance < min_distance:
            min_distance = distance
            shortest = trajectory

    if shortest is None:
        return DistanceExtreme(trajectory=None, distance=0.0)

    return DistanceExtreme(trajectory=shortest, distance=min_distance)


def get_average_distance(trajectories: Sequence[Trajectory]) -> float:
    """Mean travelled distance in km, 0 for no trajectories."""
    if not trajectories:
        return 0.0

    total = sum(calculate_total_distance(t.path) for t in trajectories)
    return total / len(trajectories)


def get_average_altitude(trajectories: Sequence[Trajectory]) -> float:
    """Mean altitude in km over every observation, 0 for none."""
    altitudes = [p.alt for t in trajectories for p in t.path if _has_altitude(p)]
    if not altitudes:
        return 0.0
    return sum(altitudes) / len(altitudes)


def get_latest_points(trajectories: Sequence[Trajectory]) -> List[SamplePoint]:
    """Most recent observation of each trajectory."""
    return [t.latest for t in trajectories if t.path]


def get_fastest_mover(trajectories: Sequence[Trajectory]) -> SpeedRecord:
    """
    Trajectory with the highest average ground speed.

    Speed is total path distance divided by the hours between the oldest
    and newest observation. Trajectories without positive elapsed time
    are skipped.
    """
    fastest = SpeedRecord()

    for trajectory in trajectories:
        if len(trajectory.path) < MIN_POINTS_FOR_DISTANCE:
            continue

        hours = trajectory.elapsed_hours
        if not hours > 0:
            continue

        distance = calculate_total_distance(trajectory.path)
        speed = distance / hours

        if fastest.trajectory_id is None or speed > fastest.average_speed_kmh:
            fastest = SpeedRecord(
                trajectory_id=trajectory.id,
                average_speed_kmh=speed,
                total_distance_km=distance,
                total_time_hours=hours,
            )

    return fastest


def get_altitude_explorer(trajectories: Sequence[Trajectory]) -> AltitudeRangeRecord:
    """Trajectory with the largest difference between its highest and lowest point."""
    explorer = AltitudeRangeRecord()

    for trajectory in trajectories:
        altitudes = [p.alt for p in trajectory.path if _has_altitude(p)]
        if not altitudes:
            continue

        highest = max(altitudes)
        lowest = min(altitudes)
        altitude_range = highest - lowest

        if explorer.trajectory_id is None or altitude_range > explorer.altitude_range:
            explorer = AltitudeRangeRecord(
                trajectory_id=trajectory.id,
                altitude_range=altitude_range,
                max_altitude=highest,
                min_altitude=lowest,
            )

    return explorer


def _direction_changes(path: Sequence[SamplePoint]) -> List[float]:
    """
    Heading change at each interior point, in [0, 180].

    Paths are newest first, so for point ``i`` the older neighbour is
    ``i + 1`` and the newer one is ``i - 1``.
    """
    changes = []
    for i in range(1, len(path) - 1):
        older, current, newer = path[i + 1], path[i], path[i - 1]

        incoming = calculate_bearing(older.lat, older.lon, current.lat, current.lon)
        outgoing = calculate_bearing(current.lat, current.lon, newer.lat, newer.lon)

        diff = abs(outgoing - incoming)
        if diff > 180:
            diff = 360 - diff
        changes.append(diff)

    return changes


def get_direction_consistency(trajectories: Sequence[Trajectory]) -> ConsistencyRecord:
    """
    Trajectory that changed heading the least.

    Consistency is ``100 - avg_change / 180 * 100``, floored at 0: a
    balloon flying straight scores 100%, one reversing at every hour 0%.
    """
    best = ConsistencyRecord()

    for trajectory in trajectories:
        if len(trajectory.path) < MIN_POINTS_FOR_CONSISTENCY:
            continue

        changes = _direction_changes(trajectory.path)
        average_change = sum(changes) / len(changes)
        consistency = max(0.0, 100 - (average_change / MAX_DIRECTION_CHANGE_DEG) * 100)

        if best.trajectory_id is None or consistency > best.consistency_percent:
            best = ConsistencyRecord(
                trajectory_id=trajectory.id,
                consistency_percent=consistency,
                direction_change_count=len(changes),
                average_direction_change_degrees=average_change,
            )

    return best


def get_threshold_comparison(
    trajectories: Sequence[Trajectory], threshold_km: float = EVEREST_HEIGHT_KM
) -> ThresholdComparison:
    """
    Count trajectories whose peak altitude is above a reference height.

    Args:
        trajectories: Trajectories to compare
        threshold_km: Reference height (default: summit of Mount Everest)
    """
    total = len(trajectories)
    above = 0

    for trajectory in trajectories:
        altitudes = [p.alt for p in trajectory.path if _has_altitude(p)]
        if altitudes and max(altitudes) > threshold_km:
            above += 1

    percentage = (above / total) * 100 if total else 0.0

    return ThresholdComparison(
        total_count=total,
        above_count=above,
        percentage=percentage,
        threshold_km=threshold_km,
    )


def get_global_drift(trajectories: Sequence[Trajectory]) -> DriftSummary:
    """
    Average drift direction of the whole constellation.

    Uses the planar lat/lon delta from each balloon's oldest to newest
    position rather than a great-circle bearing; the averaged vector is
    then turned into a compass bearing.
    """
    delta_lats = []
    delta_lons = []

    for trajectory in trajectories:
        if len(trajectory.path) < MIN_POINTS_FOR_DISTANCE:
            continue

        newest, oldest = trajectory.latest, trajectory.oldest
        if not (_has_position(newest) and _has_position(oldest)):
            continue

        delta_lats.append(newest.lat - oldest.lat)
        delta_lons.append(newest.lon - oldest.lon)

    if not delta_lats:
        return DriftSummary()

    avg_delta_lat = sum(delta_lats) / len(delta_lats)
    avg_delta_lon = sum(delta_lons) / len(delta_lons)

    bearing = normalize_bearing(math.degrees(math.atan2(avg_delta_lon, avg_delta_lat)))

    return DriftSummary(
        bearing_degrees=bearing,
        compass_label=compass_label(bearing),
        avg_delta_lat=avg_delta_lat,
        avg_delta_lon=avg_delta_lon,
        trajectory_count=len(delta_lats),
    )


def get_coverage_bounds(trajectories: Sequence[Trajectory]) -> CoverageBounds:
    """Bounding box over every observed position."""
    points = [p for t in trajectories for p in t.path if _has_position(p)]

    if not points:
        return CoverageBounds(total_trajectories=len(trajectories))

    lats = [p.lat for p in points]
    lons = [p.lon for p in points]

    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)

    return CoverageBounds(
        total_trajectories=len(trajectories),
        min_lat=min_lat,
        max_lat=max_lat,
        min_lon=min_lon,
        max_lon=max_lon,
        lat_range=max_lat - min_lat,
        lon_range=max_lon - min_lon,
    )


class StatisticsEngine:
    """
    Comprehensive statistical analysis engine.
    """

    def __init__(self, threshold_km: float = EVEREST_HEIGHT_KM):
        """
        Initialize statistics engine.

        Args:
            threshold_km: Reference height for the threshold comparison
        """
        self.threshold_km = threshold_km

    def get_comprehensive_stats(self, trajectories: Sequence[Trajectory]) -> Dict[str, Any]:
        """Get complete statistical overview."""
        return {
            "overview": self._get_overview(trajectories),
            "altitude": self._get_altitude_stats(trajectories),
            "distance": self._get_distance_stats(trajectories),
            "highlights": self._get_highlights(trajectories),
            "drift": get_global_drift(trajectories).to_dict(),
            "coverage": get_coverage_bounds(trajectories).to_dict(),
        }

    def _get_overview(self, trajectories: Sequence[Trajectory]) -> Dict[str, Any]:
        """Get basic overview statistics."""
        return {
            "total_trajectories": len(trajectories),
            "total_points": sum(len(t.path) for t in trajectories),
            "average_altitude_km": get_average_altitude(trajectories),
            "average_distance_km": get_average_distance(trajectories),
        }

    def _get_altitude_stats(self, trajectories: Sequence[Trajectory]) -> Dict[str, Any]:
        """Get altitude extremes."""
        return {
            "highest": get_max_altitude(trajectories).to_dict(),
            "lowest": get_min_altitude(trajectories).to_dict(),
        }

    def _get_distance_stats(self, trajectories: Sequence[Trajectory]) -> Dict[str, Any]:
        """Get distance extremes and average."""
        return {
            "longest": get_max_distance(trajectories).to_dict(),
            "shortest": get_min_distance(trajectories).to_dict(),
            "average_km": get_average_distance(trajectories),
        }

    def _get_highlights(self, trajectories: Sequence[Trajectory]) -> Dict[str, Any]:
        """Get per-balloon record holders."""
        return {
            "fastest": get_fastest_mover(trajectories).to_dict(),
            "altitude_explorer": get_altitude_explorer(trajectories).to_dict(),
            "most_consistent": get_direction_consistency(trajectories).to_dict(),
            "above_threshold": get_threshold_comparison(
                trajectories, self.threshold_km
            ).to_dict(),
        }
