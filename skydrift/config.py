"""
SkyDrift Configuration Management

This module provides configuration management for the SkyDrift balloon
analytics system. It includes physical constants, analysis settings,
visualization options, and runtime configuration loaded from YAML files.
"""

import os
from typing import Any, Dict, Optional

import yaml

# =============================================================================
# Physical Constants
# =============================================================================


class Constants:
    """Physical constants representing real-world measurements."""

    EARTH_RADIUS_KM: float = 6371.0  # Mean Earth radius for distance calculations
    EVEREST_HEIGHT_KM: float = 8.849  # Summit of Mount Everest
    KM_TO_FEET: float = 3280.84  # Altitude conversion factor


# =============================================================================
# Analysis & Tracking Settings
# =============================================================================


class Settings:
    """Configurable settings for trajectory reconstruction and analysis."""

    # --- Upstream Services ---
    FEED_BASE_URL: str = "https://a.windbornesystems.com/treasure"  # Hourly {hh}.json files
    OPEN_METEO_URL: str = "https://api.open-meteo.com/v1/forecast"  # Surface temperatures
    USER_AGENT: str = "SkyDrift/1.0"  # Sent with feed requests
    API_TIMEOUT_SECONDS: int = 10  # Per-request timeout

    # --- Snapshot Window ---
    TOTAL_HOURS: int = 24  # Number of hourly slices in one observation window
    MIN_TRAJECTORY_POINTS: int = 2  # Fewer points cannot carry distance/direction

    # --- Enrichment ---
    DEFAULT_SAMPLE_SIZE: int = 50  # Latest positions sent for temperature lookup
    ENRICHMENT_BATCH_SIZE: int = 5  # Points fetched concurrently per batch
    ENRICHMENT_DELAY_SECONDS: float = 0.6  # Pause between batches (rate limit)
    TEMPERATURE_CACHE_TTL_SECONDS: int = 600  # Cached temperatures expire after 10 min

    # Altitude classification boundaries (kilometers)
    ALTITUDE_CLASSES: Dict[str, tuple[float, float]] = {
        "low": (0, 5),
        "medium": (5, 10),
        "high": (10, 15),
        "very_high": (15, 20),
        "stratosphere": (20, float("inf")),
    }

    # --- Visualization ---
    DEFAULT_MAP_STYLE: str = "CartoDB.Positron"  # Base map tile style
    DEFAULT_ZOOM: int = 2  # Whole-world view
    TRAJECTORY_WEIGHT: float = 1.5  # Trajectory line thickness
    TRAJECTORY_OPACITY: float = 0.6  # Trajectory transparency (0-1)
    MARKER_RADIUS: int = 3  # Latest position marker size (pixels)
    MARKER_FILL_OPACITY: float = 0.8  # Marker fill transparency (0-1)


# =============================================================================
# Color Schemes
# =============================================================================


class Colors:
    """Color definitions for visualizations."""

    # Altitude-based color coding (hex colors)
    ALTITUDE_COLORS: Dict[str, str] = {
        "low": "#ff7a18",  # Orange: 0-5 km
        "medium": "#f5e663",  # Yellow: 5-10 km
        "high": "#00e5a8",  # Green: 10-15 km
        "very_high": "#00b4ff",  # Blue: 15-20 km
        "stratosphere": "#7c3aed",  # Purple: 20 km+
    }

    TRAJECTORY_COLOR: str = "#2ecc71"  # Default trajectory color


# =============================================================================
# Runtime Configuration
# =============================================================================


class Config:
    """
    Runtime configuration manager for SkyDrift.

    Loads settings from YAML files or uses sensible defaults.
    Provides property-based access to common settings.

    Example:
        >>> config = Config('config.yaml')
        >>> print(f"Feed: {config.feed_base_url}")
        >>> print(f"Sample size: {config.sample_size}")
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None or missing,
                        uses default configuration.
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file or return defaults.

        Sections missing from the file are filled in from the defaults.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return self._get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
                if self._validate_config(config):
                    return self._merge_defaults(config)
                else:
                    print("⚠️  Invalid config structure, using defaults")
                    return self._get_default_config()
        except Exception as e:
            print(f"⚠️  Could not load config file: {e}")
            return self._get_default_config()

    def _validate_config(self, config: Dict[str, Any]) -> bool:
        """
        Validate configuration structure and required fields.

        Args:
            config: Configuration dictionary to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            # Required: feed section
            assert isinstance(config, dict)
            assert "feed" in config
            assert "base_url" in config["feed"]
            assert isinstance(config["feed"]["base_url"], str)

            hours = config["feed"].get("total_hours", Settings.TOTAL_HOURS)
            # The feed always publishes exactly one 24-slot window
            assert hours == Settings.TOTAL_HOURS

            # Optional: analysis section
            analysis = config.get("analysis") or {}
            threshold = analysis.get("threshold_km", Constants.EVEREST_HEIGHT_KM)
            assert isinstance(threshold, (float, int))
            assert analysis.get("correlation", "positional") in ("positional", "keyed")

            # Optional: enrichment section
            enrichment = config.get("enrichment") or {}
            batch_size = enrichment.get("batch_size", Settings.ENRICHMENT_BATCH_SIZE)
            assert isinstance(batch_size, int) and batch_size > 0
            sample_size = enrichment.get("sample_size", Settings.DEFAULT_SAMPLE_SIZE)
            assert isinstance(sample_size, int) and sample_size >= 0

            return True
        except (AssertionError, KeyError, TypeError, AttributeError):
            return False

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        Returns:
            Default configuration dictionary
        """
        return {
            "feed": {
                "base_url": Settings.FEED_BASE_URL,
                "total_hours": Settings.TOTAL_HOURS,
                "timeout_seconds": Settings.API_TIMEOUT_SECONDS,
                "user_agent": Settings.USER_AGENT,
            },
            "analysis": {
                "threshold_km": Constants.EVEREST_HEIGHT_KM,
                "correlation": "positional",
            },
            "enrichment": {
                "enabled": True,
                "api_url": Settings.OPEN_METEO_URL,
                "batch_size": Settings.ENRICHMENT_BATCH_SIZE,
                "delay_seconds": Settings.ENRICHMENT_DELAY_SECONDS,
                "sample_size": Settings.DEFAULT_SAMPLE_SIZE,
                "cache_ttl_seconds": Settings.TEMPERATURE_CACHE_TTL_SECONDS,
                "timeout_seconds": Settings.API_TIMEOUT_SECONDS,
            },
            "output": {
                "report_path": "output/skydrift_report.json",
                "report_format": "json",
                "map_path": None,
            },
        }

    def _merge_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Fill sections and keys missing from a loaded config with defaults."""
        merged = self._get_default_config()
        for section, values in config.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    def save_config(self) -> None:
        """
        Save current configuration to YAML file.

        Raises:
            ValueError: If config_path is not set
        """
        if self.config_path is None:
            raise ValueError("Cannot save config: no config_path specified")

        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                yaml.dump(self._config, f, default_flow_style=False)
        except Exception as e:
            print(f"❌ Error saving config: {e}")
            raise

    # --- Property Accessors ---

    @property
    def feed_base_url(self) -> str:
        """Get base URL of the hourly snapshot feed."""
        return self._config["feed"]["base_url"].rstrip("/")

    @property
    def total_hours(self) -> int:
        """Get number of hourly slices per window."""
        return int(self._config["feed"].get("total_hours", Settings.TOTAL_HOURS))

    @property
    def feed_timeout(self) -> float:
        """Get feed request timeout in seconds."""
        return float(self._config["feed"].get("timeout_seconds", Settings.API_TIMEOUT_SECONDS))

    @property
    def user_agent(self) -> str:
        """Get User-Agent header sent to the feed."""
        return self._config["feed"].get("user_agent", Settings.USER_AGENT)

    @property
    def threshold_km(self) -> float:
        """Get reference height for the threshold comparison in kilometers."""
        return float(self.get("analysis.threshold_km", Constants.EVEREST_HEIGHT_KM))

    @property
    def correlation(self) -> str:
        """Get trajectory correlation strategy name."""
        return self.get("analysis.correlation", "positional")

    @property
    def enrichment_enabled(self) -> bool:
        """Whether temperature enrichment runs during analysis."""
        return bool(self.get("enrichment.enabled", True))

    @property
    def enrichment_api_url(self) -> str:
        """Get temperature lookup endpoint."""
        return self.get("enrichment.api_url", Settings.OPEN_METEO_URL)

    @property
    def enrichment_batch_size(self) -> int:
        """Get number of points fetched per enrichment batch."""
        return int(self.get("enrichment.batch_size", Settings.ENRICHMENT_BATCH_SIZE))

    @property
    def enrichment_delay(self) -> float:
        """Get pause between enrichment batches in seconds."""
        return float(
            self.get("enrichment.delay_seconds", Settings.ENRICHMENT_DELAY_SECONDS)
        )

    @property
    def enrichment_timeout(self) -> float:
        """Get enrichment request timeout in seconds."""
        return float(self.get("enrichment.timeout_seconds", Settings.API_TIMEOUT_SECONDS))

    @property
    def sample_size(self) -> int:
        """Get number of latest positions sampled for enrichment."""
        return int(self.get("enrichment.sample_size", Settings.DEFAULT_SAMPLE_SIZE))

    @property
    def cache_ttl(self) -> float:
        """Get temperature cache lifetime in seconds."""
        return float(
            self.get(
                "enrichment.cache_ttl_seconds", Settings.TEMPERATURE_CACHE_TTL_SECONDS
            )
        )

    @property
    def report_path(self) -> Optional[str]:
        """Get default report output path."""
        return self.get("output.report_path")

    @property
    def report_format(self) -> str:
        """Get default report format."""
        return self.get("output.report_format", "json")

    @property
    def map_path(self) -> Optional[str]:
        """Get default map output path."""
        return self.get("output.map_path")

    # --- Generic Accessors ---

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'enrichment.sample_size')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('enrichment.sample_size', 50)
            100
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'analysis.threshold_km')
            value: Value to set

        Example:
            >>> config.set('enrichment.sample_size', 100)
        """
        keys = key.split(".")
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        # Set final value
        config[keys[-1]] = value
