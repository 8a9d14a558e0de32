"""
Tests for reporting.
"""

import json
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from skydrift.analysis.reporter import ReportGenerator
from skydrift.analysis.statistics import StatisticsEngine


@pytest.fixture
def sample_results():
    results = {
        "metadata": {
            "analysis_date": "2024-01-01T00:00:00",
            "correlation": "positional",
            "threshold_km": 8.849,
            "snapshot": {"total_points": 12345},
        },
        "temperature_trend": {
            "sample_size": 3,
            "points_with_temperature": 3,
            "points": [],
            "fit": {"slope": -6.5, "intercept": 15.0, "r2": 0.87, "n": 3},
        },
        "trajectories": ["not serializable", object()],
    }
    results.update(StatisticsEngine().get_comprehensive_stats([]))
    results["overview"]["total_trajectories"] = 1234
    results["altitude"]["highest"].update({"trajectory_id": 7, "altitude": 21.5})
    results["coverage"].update(
        {
            "min_lat": -10.0,
            "max_lat": 50.0,
            "min_lon": 0.0,
            "max_lon": 90.0,
            "lat_range": 60.0,
            "lon_range": 90.0,
        }
    )
    return results


class TestReportGenerator:
    """Tests for ReportGenerator class."""

    def test_generate_json_report(self, tmp_path, sample_results):
        """Test JSON report generation."""
        output_file = tmp_path / "report.json"
        generator = ReportGenerator()

        generator.generate_report(sample_results, output_file, format="json")

        assert output_file.exists()

        with open(output_file) as f:
            data = json.load(f)

        assert "trajectories" not in data
        assert data["metadata"]["snapshot"]["total_points"] == 12345
        assert data["overview"]["total_trajectories"] == 1234
        assert data["temperature_trend"]["fit"]["slope"] == -6.5

    def test_results_not_modified(self, tmp_path, sample_results):
        ReportGenerator().generate_report(sample_results, tmp_path / "r.json")
        assert "trajectories" in sample_results

    def test_generate_text_report(self, tmp_path, sample_results):
        """Test text report generation."""
        output_file = tmp_path / "report.txt"
        generator = ReportGenerator()

        generator.generate_report(sample_results, output_file, format="txt")

        content = output_file.read_text(encoding="utf-8")

        assert "SKYDRIFT TRAJECTORY ANALYSIS REPORT" in content
        assert "Balloons Tracked:" in content
        assert "1,234" in content
        assert "#7 at 21.50 km" in content
        assert "-6.50 °C/km" in content
        assert "Latitude:  -10.00 to 50.00 (60.00°)" in content

    def test_text_report_without_data(self, tmp_path):
        results = {
            "metadata": {"analysis_date": "2024-01-01", "correlation": "keyed"},
            "temperature_trend": {"fit": None},
        }
        results.update(StatisticsEngine().get_comprehensive_stats([]))
        output_file = tmp_path / "empty.txt"

        ReportGenerator().generate_report(results, output_file, format="txt")

        content = output_file.read_text(encoding="utf-8")
        assert "No positions observed" in content
        assert "Not enough data" in content
        assert "N/A" in content

    def test_generate_html_report(self, tmp_path, sample_results):
        """Test HTML report generation."""
        output_file = tmp_path / "report.html"
        generator = ReportGenerator()

        generator.generate_report(sample_results, output_file, format="html")

        content = output_file.read_text(encoding="utf-8")

        assert "<title>SkyDrift Trajectory Analysis Report</title>" in content
        assert "🎈 SkyDrift Trajectory Analysis Report" in content
        assert "<td>Balloons Tracked</td>" in content
        assert "<td>1,234</td>" in content

    def test_creates_parent_directory(self, tmp_path, sample_results):
        output_file = tmp_path / "nested" / "dir" / "report.json"
        ReportGenerator().generate_report(sample_results, output_file)
        assert output_file.exists()

    def test_unsupported_format_raises_error(self, tmp_path, sample_results):
        """Test that unsupported format raises ValueError."""
        output_file = tmp_path / "report.xyz"
        generator = ReportGenerator()

        with pytest.raises(ValueError, match="Unsupported format"):
            generator.generate_report(sample_results, output_file, format="xml")
        assert not output_file.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
