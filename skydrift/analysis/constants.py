"""
Analysis Constants
"""

from ..config import Constants, Settings

# Threshold comparison
EVEREST_HEIGHT_KM: float = Constants.EVEREST_HEIGHT_KM  # Reference height for "above Everest"

# Minimum path lengths per statistic
MIN_POINTS_FOR_DISTANCE: int = Settings.MIN_TRAJECTORY_POINTS  # Distance, speed and drift need two fixes
MIN_POINTS_FOR_CONSISTENCY: int = 3  # A turn needs a point on each side

# Direction consistency scale
MAX_DIRECTION_CHANGE_DEG: float = 180.0  # Full reversal scores 0%
