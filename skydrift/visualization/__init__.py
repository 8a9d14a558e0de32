"""
SkyDrift Visualization Component

Interactive map of reconstructed balloon trajectories.

Main Classes:
    - TrajectoryMapGenerator: Folium world map with one path per balloon

Example:
    >>> from skydrift.visualization import TrajectoryMapGenerator
    >>> generator = TrajectoryMapGenerator()
    >>> generator.add_trajectories(results['trajectories'])
    >>> generator.save('balloons.html')

Map Styles:
    - CartoDB.Positron (default)
    - CartoDB.DarkMatter
    - OpenStreetMap
"""

from .map_generator import TrajectoryMapGenerator, MAP_TILE_URLS

__all__ = [
    "TrajectoryMapGenerator",
    "MAP_TILE_URLS",
]
