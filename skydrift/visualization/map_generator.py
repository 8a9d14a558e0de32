"""
Trajectory Map Generator
Creates interactive Folium maps of reconstructed balloon trajectories.
"""

import folium
from typing import Optional, Sequence

from skydrift.config import Settings, Colors
from ..tracking.models import Trajectory
from ..analysis.statistics import get_max_altitude

MAP_TILE_URLS = {
    "CartoDB.DarkMatter": "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
    "CartoDB.Positron": "https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png",
    "OpenStreetMap": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
}


class TrajectoryMapGenerator:
    """
    Generates a world map of balloon trajectories using Folium.

    Each trajectory is drawn as a polyline colored by its average
    altitude, with a marker at the balloon's latest position.
    """

    def __init__(
        self,
        center_lat: float = 0.0,
        center_lon: float = 0.0,
        zoom: int = Settings.DEFAULT_ZOOM,
        style: str = Settings.DEFAULT_MAP_STYLE,
    ):
        """
        Initialize map generator.

        Args:
            center_lat: Initial map center latitude
            center_lon: Initial map center longitude
            zoom: Initial zoom level (default: 2, whole world)
            style: Map style/theme (default: CartoDB.Positron)
        """
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom = zoom
        self.style = style
        self.trajectory_count = 0
        self.legend_added = False

        # Create base map
        self.map = self._create_base_map()

    def _create_base_map(self) -> folium.Map:
        """Create base Folium map."""

        if self.style in MAP_TILE_URLS:
            tiles = MAP_TILE_URLS[self.style]
        else:
            tiles = self.style

        return folium.Map(
            location=[self.center_lat, self.center_lon],
            zoom_start=self.zoom,
            tiles=tiles,
            attr="SkyDrift Balloon Trajectories",
            world_copy_jump=True,
        )

    def add_trajectory(self, trajectory: Trajectory):
        """
        Add one trajectory to the map.

        Args:
            trajectory: Reconstructed trajectory (newest point first)
        """
        if not trajectory.path:
            return

        coords = [[p.lat, p.lon] for p in trajectory.path]
        altitudes = trajectory.altitudes
        avg_altitude = sum(altitudes) / len(altitudes)
        color = self._get_altitude_color(avg_altitude)
        latest = trajectory.latest

        folium.PolyLine(
            coords,
            color=color,
            weight=Settings.TRAJECTORY_WEIGHT,
            opacity=Settings.TRAJECTORY_OPACITY,
            tooltip=f"Balloon #{trajectory.id}",
        ).add_to(self.map)

        folium.CircleMarker(
            [latest.lat, latest.lon],
            radius=Settings.MARKER_RADIUS,
            color=color,
            fill=True,
            fill_opacity=Settings.MARKER_FILL_OPACITY,
            popup=self._create_trajectory_popup(trajectory),
            tooltip=f"Balloon #{trajectory.id}",
        ).add_to(self.map)

        self.trajectory_count += 1

    def add_trajectories(self, trajectories: Sequence[Trajectory], highlight_highest: bool = True):
        """
        Add many trajectories, optionally marking the highest observation.
        """
        for trajectory in trajectories:
            self.add_trajectory(trajectory)

        self.add_legend()

        if highlight_highest:
            highest = get_max_altitude(trajectories)
            if highest.found:
                folium.Marker(
                    [highest.lat, highest.lon],
                    popup=f"Highest: Balloon #{highest.trajectory_id} at {highest.altitude:.2f} km",
                    tooltip="Highest observation",
                    icon=folium.Icon(color="red", icon="arrow-up", prefix="fa"),
                ).add_to(self.map)

    def _create_trajectory_popup(self, trajectory: Trajectory) -> str:
        """
        Create HTML popup for a trajectory's latest position.

        Args:
            trajectory: Trajectory to describe

        Returns:
            HTML string for popup
        """
        latest = trajectory.latest

        html = f"""
        <div style='font-family: Arial; min-width: 180px;'>
            <h4 style='margin: 0 0 10px 0; color: {Colors.TRAJECTORY_COLOR};'>
                🎈 Balloon #{trajectory.id}
            </h4>
            <table style='width: 100%; border-collapse: collapse;'>
                <tr><td><b>Lat:</b></td><td>{latest.lat:.2f}°</td></tr>
                <tr><td><b>Lon:</b></td><td>{latest.lon:.2f}°</td></tr>
                <tr><td><b>Altitude:</b></td><td>{latest.alt:.2f} km</td></tr>
                <tr><td><b>Positions:</b></td><td>{len(trajectory.path)}</td></tr>
            </table>
        </div>
        """
        return html

    def _get_altitude_color(self, altitude_km: Optional[float]) -> str:
        """
        Get color based on altitude.

        Args:
            altitude_km: Altitude in kilometers

        Returns:
            Color hex code
        """
        if altitude_km is None:
            return Colors.TRAJECTORY_COLOR

        for class_name, (low, high) in Settings.ALTITUDE_CLASSES.items():
            if low <= altitude_km < high:
                return Colors.ALTITUDE_COLORS[class_name]

        # Below zero (sensor noise)
        return Colors.ALTITUDE_COLORS["low"]

    def add_legend(self):
        """Add a fixed altitude color legend to the map (once)."""
        if self.legend_added:
            return

        rows = ""
        for class_name, (low, high) in Settings.ALTITUDE_CLASSES.items():
            label = f"{low:g}+ km" if high == float("inf") else f"{low:g}-{high:g} km"
            rows += (
                f"<div><span style='display: inline-block; width: 12px; height: 12px; "
                f"margin-right: 6px; background: {Colors.ALTITUDE_COLORS[class_name]};'>"
                f"</span>{label}</div>"
            )

        html = f"""
        <div id='skydrift-legend' style='position: fixed; bottom: 30px; left: 30px;
             z-index: 9999; background: white; padding: 8px 12px; border-radius: 4px;
             font-family: Arial; font-size: 12px; box-shadow: 0 0 4px rgba(0,0,0,0.3);'>
            <b>Average altitude</b>
            {rows}
        </div>
        """
        self.map.get_root().html.add_child(folium.Element(html))
        self.legend_added = True

    def save(self, filename: str):
        """
        Save map to HTML file.

        Args:
            filename: Output filename (should end in .html)
        """
        self.map.save(filename)

        # Modify HTML file to include title
        with open(filename, "r", encoding="utf-8") as f:
            html_content = f.read()
        insert = "<head>\n    <title>SkyDrift Map</title>"
        html_content = html_content.replace("<head>", insert, 1)
        with open(filename, "w", encoding="utf-8") as f:
            f.write(html_content)

        print(f"✅ Map saved to: {filename}")
