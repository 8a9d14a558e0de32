"""
Tracking Constants
"""

from ..config import Settings

# Snapshot window
TOTAL_HOURS = Settings.TOTAL_HOURS
HOUR_IN_MS = 60 * 60 * 1000

# Parallel hour requests
MAX_FETCH_WORKERS = 8
