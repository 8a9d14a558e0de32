"""
Report Generator
Creates trajectory analysis reports in various formats.
"""

import json
from pathlib import Path
from typing import Any, Dict

from ..utils import format_altitude, format_bearing, format_distance, format_speed

# In-memory only; reports carry the derived statistics
_EXCLUDED_SECTIONS = ("trajectories",)


class ReportGenerator:
    """
    Generates analysis reports in multiple formats.
    """

    def generate_report(self, analysis_results: Dict[str, Any],
                       output_path: str, format: str = 'json'):
        """
        Generate analysis report.

        Args:
            analysis_results: Complete analysis results
            output_path: Output file path
            format: Report format ('json', 'txt', 'html')
        """
        results = {
            k: v for k, v in analysis_results.items() if k not in _EXCLUDED_SECTIONS
        }

        if format not in ('json', 'txt', 'html'):
            raise ValueError(f"Unsupported format: {format}")

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        if format == 'json':
            self._generate_json_report(results, output_path)
        elif format == 'txt':
            self._generate_text_report(results, output_path)
        else:
            self._generate_html_report(results, output_path)

    def _generate_json_report(self, results: Dict[str, Any], output_path: str):
        """Generate JSON report."""
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(results, f, indent=2, default=str)

    def _summary_rows(self, results: Dict[str, Any]):
        """Label/value pairs shared by the text and HTML reports."""
        overview = results['overview']
        highest = results['altitude']['highest']
        lowest = results['altitude']['lowest']
        longest = results['distance']['longest']
        highlights = results['highlights']
        fastest = highlights['fastest']
        explorer = highlights['altitude_explorer']
        consistent = highlights['most_consistent']
        above = highlights['above_threshold']
        drift = results['drift']

        def balloon(trajectory_id):
            return 'N/A' if trajectory_id is None else f"#{trajectory_id}"

        rows = [
            ("Balloons Tracked", f"{overview['total_trajectories']:,}"),
            ("Positions", f"{overview['total_points']:,}"),
            ("Average Altitude", format_altitude(overview['average_altitude_km'])),
            ("Average Distance", format_distance(overview['average_distance_km'])),
            ("Highest Balloon",
             f"{balloon(highest['trajectory_id'])} at {format_altitude(highest['altitude'])}"),
            ("Lowest Balloon",
             f"{balloon(lowest['trajectory_id'])} at {format_altitude(lowest['altitude'])}"),
            ("Longest Journey",
             f"{balloon(longest['trajectory_id'])}, {format_distance(longest['distance_km'])}"),
            ("Fastest Balloon",
             f"{balloon(fastest['trajectory_id'])}, {format_speed(fastest['average_speed_kmh'])}"),
            ("Altitude Explorer",
             f"{balloon(explorer['trajectory_id'])}, range {explorer['altitude_range']:.2f} km"),
            ("Most Consistent",
             f"{balloon(consistent['trajectory_id'])}, {consistent['consistency_percent']:.1f}%"),
            (f"Above {above['threshold_km']:.3f} km",
             f"{above['above_count']} of {above['total_count']} ({above['percentage']:.1f}%)"),
            ("Dominant Drift", format_bearing(drift['bearing_degrees'])),
        ]

        fit = (results.get('temperature_trend') or {}).get('fit')
        if fit:
            rows.append(("Temperature Trend",
                         f"{fit['slope']:.2f} °C/km (R² = {fit['r2']:.2f}, n = {fit['n']})"))
        else:
            rows.append(("Temperature Trend", "Not enough data"))

        return rows

    def _generate_text_report(self, results: Dict[str, Any], output_path: str):
        """Generate text report."""
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("=" * 70 + "\n")
            f.write("SKYDRIFT TRAJECTORY ANALYSIS REPORT\n")
            f.write("=" * 70 + "\n\n")

            f.write(f"Generated: {results['metadata']['analysis_date']}\n")
            f.write(f"Correlation: {results['metadata']['correlation']}\n\n")

            f.write("OVERVIEW\n")
            f.write("-" * 70 + "\n")
            for label, value in self._summary_rows(results):
                f.write(f"{label + ':':<20} {value}\n")
            f.write("\n")

            coverage = results['coverage']
            f.write("COVERAGE\n")
            f.write("-" * 70 + "\n")
            if coverage['min_lat'] is None:
                f.write("No positions observed\n")
            else:
                f.write(f"Latitude:  {coverage['min_lat']:.2f} to {coverage['max_lat']:.2f} "
                        f"({coverage['lat_range']:.2f}°)\n")
                f.write(f"Longitude: {coverage['min_lon']:.2f} to {coverage['max_lon']:.2f} "
                        f"({coverage['lon_range']:.2f}°)\n")
            f.write("\n")

    def _generate_html_report(self, results: Dict[str, Any], output_path: str):
        """Generate HTML report."""
        html = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>SkyDrift Trajectory Analysis Report</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; }}
        h1 {{ color: #2c3e50; }}
        h2 {{ color: #34495e; border-bottom: 2px solid #2ecc71; padding-bottom: 10px; }}
        table {{ border-collapse: collapse; width: 100%; margin: 20px 0; }}
        th, td {{ border: 1px solid #ddd; padding: 12px; text-align: left; }}
        th {{ background-color: #2ecc71; color: white; }}
        tr:nth-child(even) {{ background-color: #f2f2f2; }}
    </style>
</head>
<body>
    <h1>🎈 SkyDrift Trajectory Analysis Report</h1>
    <p>Generated: {results['metadata']['analysis_date']}</p>

    <h2>Overview</h2>
    <table>
        <tr>
            <th>Statistic</th>
            <th>Value</th>
        </tr>
"""

        for label, value in self._summary_rows(results):
            html += f"""
        <tr>
            <td>{label}</td>
            <td>{value}</td>
        </tr>
"""

        html += """
    </table>
</body>
</html>
"""

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html)
