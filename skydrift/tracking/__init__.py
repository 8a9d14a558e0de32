"""
SkyDrift Tracking Component

Snapshot collection and trajectory reconstruction for the balloon feed.

Main Classes:
    - SnapshotCollector: Fetches the 24 hourly feed slices
    - SnapshotMatrix: Hourly window of sample points
    - TrajectoryBuilder: Reconstructs per-balloon paths
    - PositionalCorrelation / KeyedCorrelation: Identity strategies

Example:
    >>> from skydrift import Config
    >>> from skydrift.tracking import SnapshotCollector, TrajectoryBuilder
    >>> snapshot = SnapshotCollector(Config()).fetch_snapshot()
    >>> trajectories = TrajectoryBuilder().build(snapshot.matrix)
"""

# Core tracking components
from .models import SamplePoint, SnapshotMatrix, Trajectory
from .correlation import (
    CorrelationStrategy,
    PositionalCorrelation,
    KeyedCorrelation,
    get_correlation_strategy,
)
from .builder import TrajectoryBuilder, build_trajectories
from .collector import SnapshotCollector, SnapshotResult, validate_entry

# Utilities
from . import constants

__all__ = [
    # Data model
    "SamplePoint",
    "SnapshotMatrix",
    "Trajectory",
    # Reconstruction
    "CorrelationStrategy",
    "PositionalCorrelation",
    "KeyedCorrelation",
    "get_correlation_strategy",
    "TrajectoryBuilder",
    "build_trajectories",
    # Collection
    "SnapshotCollector",
    "SnapshotResult",
    "validate_entry",
    # Modules
    "constants",
]
