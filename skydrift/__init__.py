"""
SkyDrift - Balloon Constellation Trajectory Analytics

Reconstructs high-altitude balloon trajectories from a 24-hour window of
hourly position snapshots and derives descriptive analytics: distance,
altitude extremes, speed, drift direction and the altitude vs surface
temperature trend.

Components:
    - tracking: Snapshot collection and trajectory reconstruction
    - analysis: Trajectory statistics, regression and reports
    - enrichment: Surface temperature lookup
    - visualization: Interactive map generation

Example:
    >>> from skydrift import Config
    >>> from skydrift.analysis import TrajectoryAnalyzer
    >>> analyzer = TrajectoryAnalyzer(Config('config.yaml'))
    >>> results = analyzer.analyze_all(output_path='report.json')
"""

# Component imports for easy access
from . import tracking
from . import analysis
from . import enrichment
from . import visualization
from . import utils
from . import config
from .config import Config

SKYDRIFT_VERSION = "v0.1.0"

__version__ = SKYDRIFT_VERSION
__author__ = "SkyDrift Project"
__license__ = "MIT"

__all__ = [
    "tracking",
    "analysis",
    "enrichment",
    "visualization",
    "utils",
    "config",
    "Config",
]
