"""
Tests for SkyDrift snapshot collector.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import requests
from requests.exceptions import RequestException

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skydrift.config import Config
from skydrift.tracking.collector import SnapshotCollector, validate_entry


@pytest.fixture
def temp_config():
    """Create configuration pointing at a test feed."""
    config = Config()
    config.set("feed.base_url", "https://feed.test/treasure/")
    config.set("feed.timeout_seconds", 5)
    return config


def make_response(payload):
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status = Mock()
    return response


class TestValidateEntry:
    """Tests for feed entry validation."""

    def test_valid_entry(self):
        assert validate_entry([45.0, -120.5, 12.3]) is True
        assert validate_entry([90, 180, 0]) is True
        assert validate_entry([1, 2, 3, "key"]) is True

    def test_out_of_range(self):
        assert validate_entry([91.0, 0, 10]) is False
        assert validate_entry([0, -180.5, 10]) is False

    def test_non_numeric(self):
        assert validate_entry(["45", 0, 10]) is False
        assert validate_entry([45, None, 10]) is False
        assert validate_entry([45, 0, float("nan")]) is False
        assert validate_entry([True, 0, 10]) is False

    def test_wrong_shape(self):
        assert validate_entry([45, 0]) is False
        assert validate_entry("45,0,10") is False
        assert validate_entry(None) is False
        assert validate_entry({"lat": 1}) is False


class TestSnapshotCollector:
    """Tests for SnapshotCollector class."""

    def test_init(self, temp_config):
        collector = SnapshotCollector(temp_config)
        assert collector.base_url == "https://feed.test/treasure"
        assert collector.total_hours == 24
        assert collector.timeout == 5.0

    def test_hour_url_zero_padded(self, temp_config):
        collector = SnapshotCollector(temp_config)
        assert collector.hour_url(0) == "https://feed.test/treasure/00.json"
        assert collector.hour_url(7) == "https://feed.test/treasure/07.json"
        assert collector.hour_url(23) == "https://feed.test/treasure/23.json"

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_hour_filters_invalid(self, mock_get, temp_config):
        """Invalid entries are dropped, valid ones kept in order."""
        mock_get.return_value = make_response(
            [
                [10.0, 20.0, 15.0],
                [100.0, 0.0, 1.0],
                ["bad", 0.0, 1.0],
                [1.0, 2.0],
                [-10.0, -20.0, 5.0],
            ]
        )

        collector = SnapshotCollector(temp_config)
        result = collector.fetch_hour(3)

        assert result.index == 3
        assert result.error is None
        assert result.points == [[10.0, 20.0, 15.0], [-10.0, -20.0, 5.0]]

        args, kwargs = mock_get.call_args
        assert args[0] == "https://feed.test/treasure/03.json"
        assert kwargs["timeout"] == 5.0
        assert kwargs["headers"]["User-Agent"] == "SkyDrift/1.0"

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_hour_not_array(self, mock_get, temp_config, capsys):
        mock_get.return_value = make_response({"error": "nope"})

        result = SnapshotCollector(temp_config).fetch_hour(0)

        assert result.points == []
        assert "not an array" in result.error
        assert "Failed to fetch 00.json" in capsys.readouterr().out

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_hour_timeout(self, mock_get, temp_config):
        mock_get.side_effect = requests.exceptions.Timeout()

        result = SnapshotCollector(temp_config).fetch_hour(1)

        assert result.points == []
        assert "timeout" in result.error

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_hour_http_error(self, mock_get, temp_config):
        response = make_response([])
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            response=Mock(status_code=404)
        )
        mock_get.return_value = response

        result = SnapshotCollector(temp_config).fetch_hour(2)

        assert result.points == []
        assert result.error == "HTTP 404"

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_hour_request_error(self, mock_get, temp_config):
        mock_get.side_effect = RequestException("connection reset")

        result = SnapshotCollector(temp_config).fetch_hour(4)

        assert result.points == []
        assert "connection reset" in result.error

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_hour_bad_json(self, mock_get, temp_config):
        response = make_response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        result = SnapshotCollector(temp_config).fetch_hour(5)

        assert result.points == []
        assert "Expecting value" in result.error

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_snapshot_pads_failed_hours(self, mock_get, temp_config):
        """Failed hours become empty slices, the window stays 24 long."""
        payloads = {
            "https://feed.test/treasure/00.json": [[1.0, 1.0, 10.0], [2.0, 2.0, 11.0]],
            "https://feed.test/treasure/01.json": [[1.1, 1.1, 10.5]],
        }

        def fake_get(url, **kwargs):
            if url in payloads:
                return make_response(payloads[url])
            raise RequestException("down")

        mock_get.side_effect = fake_get

        snapshot = SnapshotCollector(temp_config).fetch_snapshot(now_ms=1_700_000_000_000)

        assert len(snapshot.matrix) == 24
        assert len(snapshot.matrix[0]) == 2
        assert len(snapshot.matrix[1]) == 1
        assert all(len(snapshot.matrix[h]) == 0 for h in range(2, 24))
        assert snapshot.matrix[1][0].hours_ago == 1

        meta = snapshot.metadata
        assert meta["total_points"] == 3
        assert meta["total_balloons"] == 2
        assert meta["hours_with_data"] == 2
        assert meta["hours_with_errors"] == 22
        assert meta["success"] is False
        assert meta["errors"][0].startswith("2:")

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_snapshot_all_failed(self, mock_get, temp_config, capsys):
        mock_get.side_effect = RequestException("down")

        snapshot = SnapshotCollector(temp_config).fetch_snapshot()

        assert len(snapshot.matrix) == 24
        assert snapshot.matrix.total_points == 0
        assert snapshot.metadata["hours_with_errors"] == 24
        assert "All 24 hourly snapshots failed" in capsys.readouterr().out

    @patch("skydrift.tracking.collector.requests.get")
    def test_fetch_snapshot_success(self, mock_get, temp_config):
        mock_get.return_value = make_response([[1.0, 1.0, 10.0]])

        snapshot = SnapshotCollector(temp_config).fetch_snapshot()

        assert snapshot.metadata["success"] is True
        assert snapshot.metadata["errors"] == []
        assert snapshot.metadata["hours_with_data"] == 24


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
