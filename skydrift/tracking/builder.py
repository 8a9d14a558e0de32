"""
Trajectory Builder
Reconstructs per-balloon paths from the hourly snapshot matrix.
"""

from collections.abc import Sequence
from typing import List, Optional, Union

from .correlation import CorrelationStrategy, PositionalCorrelation
from .models import SamplePoint, SnapshotMatrix, Trajectory
from ..config import Settings

MatrixLike = Union[SnapshotMatrix, Sequence]


class TrajectoryBuilder:
    """
    Builds trajectories from a snapshot matrix.

    Candidate paths come from the correlation strategy; only paths with at
    least ``min_points`` observations become trajectories, since shorter
    ones cannot support distance or direction analytics.

    Example:
        >>> builder = TrajectoryBuilder()
        >>> trajectories = builder.build(matrix)
        >>> print(f"Reconstructed {len(trajectories)} balloons")
    """

    def __init__(
        self,
        strategy: Optional[CorrelationStrategy] = None,
        min_points: int = Settings.MIN_TRAJECTORY_POINTS,
    ):
        """
        Initialize trajectory builder.

        Args:
            strategy: Correlation strategy (default: PositionalCorrelation)
            min_points: Minimum path length to keep a trajectory (default: 2)
        """
        self.strategy = strategy or PositionalCorrelation()
        self.min_points = min_points

    def build(self, matrix: MatrixLike) -> List[Trajectory]:
        """
        Reconstruct trajectories from hour slices.

        Args:
            matrix: SnapshotMatrix or sequence of hour slices of SamplePoints,
                    most recent hour first

        Returns:
            List of trajectories in id assignment order. Empty for an empty
            or all-empty matrix.

        Raises:
            TypeError: If matrix is not a sequence of hour slices
        """
        slices = self._as_slices(matrix)
        candidates = self.strategy.correlate(slices)

        return [
            Trajectory(id=trajectory_id, path=path)
            for trajectory_id, path in candidates.items()
            if len(path) >= self.min_points
        ]

    @staticmethod
    def _as_slices(matrix: MatrixLike) -> List[Sequence]:
        if isinstance(matrix, SnapshotMatrix):
            return list(matrix.slices)

        if isinstance(matrix, (str, bytes)) or not isinstance(matrix, Sequence):
            raise TypeError(
                f"Expected a sequence of hour slices, got {type(matrix).__name__}"
            )

        slices = []
        for hour, points in enumerate(matrix):
            if points is None:
                points = ()
            if isinstance(points, (str, bytes)) or not isinstance(points, Sequence):
                raise TypeError(
                    f"Hour slice {hour} is not a sequence: {type(points).__name__}"
                )
            for point in points:
                if not isinstance(point, SamplePoint):
                    raise TypeError(
                        f"Hour slice {hour} contains {type(point).__name__}, "
                        "expected SamplePoint (see SnapshotMatrix.from_raw)"
                    )
            slices.append(points)
        return slices


def build_trajectories(
    matrix: MatrixLike, strategy: Optional[CorrelationStrategy] = None
) -> List[Trajectory]:
    """Shortcut for ``TrajectoryBuilder(strategy).build(matrix)``."""
    return TrajectoryBuilder(strategy).build(matrix)
