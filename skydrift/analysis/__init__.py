"""
SkyDrift Analysis Component

Descriptive analytics over reconstructed balloon trajectories.

Main Classes:
    - TrajectoryAnalyzer: Main coordinator for all analyses
    - StatisticsEngine: Distance, altitude, speed and drift statistics
    - ReportGenerator: Multi-format report generation

Example:
    >>> from skydrift.analysis import TrajectoryAnalyzer
    >>> analyzer = TrajectoryAnalyzer()
    >>> results = analyzer.analyze_all(output_path='report.json')
"""

# Main analysis components
from .analyzer import TrajectoryAnalyzer
from .statistics import (
    StatisticsEngine,
    calculate_total_distance,
    get_altitude_explorer,
    get_average_altitude,
    get_average_distance,
    get_coverage_bounds,
    get_direction_consistency,
    get_fastest_mover,
    get_global_drift,
    get_latest_points,
    get_max_altitude,
    get_max_distance,
    get_min_altitude,
    get_min_distance,
    get_threshold_comparison,
)
from .regression import RegressionResult, linear_fit, compute_temperature_trend
from .reporter import ReportGenerator

# Utilities
from . import constants
from . import results

__all__ = [
    # Main classes
    'TrajectoryAnalyzer',
    'StatisticsEngine',
    'ReportGenerator',
    'RegressionResult',

    # Statistics
    'calculate_total_distance',
    'get_altitude_explorer',
    'get_average_altitude',
    'get_average_distance',
    'get_coverage_bounds',
    'get_direction_consistency',
    'get_fastest_mover',
    'get_global_drift',
    'get_latest_points',
    'get_max_altitude',
    'get_max_distance',
    'get_min_altitude',
    'get_min_distance',
    'get_threshold_comparison',

    # Regression
    'linear_fit',
    'compute_temperature_trend',

    # Modules
    'constants',
    'results',
]
