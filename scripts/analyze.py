#!/usr/bin/env python3
"""
SkyDrift Trajectory Analysis Script

Usage:
    python scripts/analyze.py [--config CONFIG_FILE] [--output REPORT] [--map MAP_FILE]
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skydrift.cli import main


if __name__ == "__main__":
    main()
