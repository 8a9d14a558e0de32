"""
Main Trajectory Analyzer
Coordinates collection, reconstruction, statistics and enrichment.
"""

import random
from datetime import datetime
from typing import Any, Dict, Optional

from .statistics import StatisticsEngine, get_latest_points
from .regression import compute_temperature_trend
from .reporter import ReportGenerator
from ..config import Config
from ..enrichment import OpenMeteoClient, TemperatureEnricher, sample_points
from ..tracking import SnapshotCollector, TrajectoryBuilder, get_correlation_strategy
from ..utils import format_bearing, format_distance


class TrajectoryAnalyzer:
    """
    Main analyzer coordinating all analysis components.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        collector: Optional[SnapshotCollector] = None,
        enricher: Optional[TemperatureEnricher] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize trajectory analyzer.

        Args:
            config: SkyDrift configuration (default: built-in defaults)
            collector: Snapshot source (default: SnapshotCollector(config))
            enricher: Temperature enricher (default: Open-Meteo when enabled)
            rng: Random generator used to sample positions for enrichment
        """
        self.config = config or Config()
        self.collector = collector or SnapshotCollector(self.config)

        if enricher is None and self.config.enrichment_enabled:
            enricher = TemperatureEnricher(OpenMeteoClient.from_config(self.config))
        self.enricher = enricher

        self.rng = rng or random.Random()

        # Initialize components
        self.builder = TrajectoryBuilder(get_correlation_strategy(self.config.correlation))
        self.statistics = StatisticsEngine(threshold_km=self.config.threshold_km)
        self.reporter = ReportGenerator()

    def analyze_all(
        self, output_path: Optional[str] = None, report_format: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Fetch the current window and run the complete analysis suite.

        Args:
            output_path: Optional path to save report
            report_format: Report format (default: from config)

        Returns:
            Complete analysis results
        """
        print("\n🛰️  Fetching hourly balloon snapshots...")
        snapshot = self.collector.fetch_snapshot()
        meta = snapshot.metadata
        print(
            f"   {meta['total_points']:,} positions across "
            f"{meta['hours_with_data']}/{self.config.total_hours} hours"
        )

        return self.analyze_matrix(
            snapshot.matrix,
            output_path=output_path,
            report_format=report_format,
            snapshot_metadata=meta,
        )

    def analyze_matrix(
        self,
        matrix,
        output_path: Optional[str] = None,
        report_format: Optional[str] = None,
        snapshot_metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Run the complete analysis suite on a snapshot matrix.

        Args:
            matrix: SnapshotMatrix or sequence of hour slices
            output_path: Optional path to save report
            report_format: Report format (default: from config)
            snapshot_metadata: Fetch metadata to include in the results

        Returns:
            Complete analysis results. ``trajectories`` holds the
            reconstructed Trajectory objects and is left out of reports.
        """
        print("\n" + "=" * 70)
        print("🎈 SKYDRIFT TRAJECTORY ANALYSIS")
        print("=" * 70)

        trajectories = self.builder.build(matrix)
        print(f"\n🧭 Reconstructed {len(trajectories)} trajectories")

        results: Dict[str, Any] = {
            "metadata": {
                "analysis_date": datetime.now().isoformat(),
                "correlation": self.builder.strategy.name,
                "threshold_km": self.statistics.threshold_km,
                "snapshot": snapshot_metadata or {},
            }
        }

        print("\n📊 Running trajectory statistics...")
        results.update(self.statistics.get_comprehensive_stats(trajectories))

        print("\n🌡️  Analyzing altitude vs surface temperature...")
        results["temperature_trend"] = self.analyze_temperature_trend(trajectories)

        results["trajectories"] = trajectories

        self._print_summary(results)

        if output_path:
            self.reporter.generate_report(
                results, output_path, format=report_format or self.config.report_format
            )
            print(f"\n💾 Report saved to: {output_path}")

        return results

    def analyze_temperature_trend(self, trajectories) -> Dict[str, Any]:
        """
        Fit surface temperature against altitude for a sample of balloons.

        Returns:
            Dictionary with the sample size, annotated points and the fit
            (None when enrichment is off or there is not enough data)
        """
        sample_size = self.config.sample_size
        trend: Dict[str, Any] = {
            "sample_size": 0,
            "points_with_temperature": 0,
            "points": [],
            "fit": None,
        }

        if self.enricher is None or sample_size <= 0 or not trajectories:
            print("   Skipped (enrichment disabled or no trajectories)")
            return trend

        sample = sample_points(get_latest_points(trajectories), sample_size, self.rng)
        annotated = self.enricher.annotate_with_temperature(sample)
        fit = compute_temperature_trend(annotated)

        trend["sample_size"] = len(sample)
        trend["points_with_temperature"] = sum(
            1 for p in annotated if p.temperature_c is not None
        )
        trend["points"] = [p.to_dict() for p in annotated]
        trend["fit"] = fit.to_dict() if fit else None

        if fit:
            print(
                f"   {fit.slope:.2f} °C/km (R² = {fit.r2:.2f}, n = {fit.n})"
            )
        else:
            print("   ⚠️  Not enough data to determine trend")

        return trend

    def _print_summary(self, results: Dict[str, Any]) -> None:
        overview = results["overview"]
        highest = results["altitude"]["highest"]
        drift = results["drift"]

        print("\n📋 Summary:")
        print(f"   Balloons:         {overview['total_trajectories']:,}")
        print(f"   Average distance: {format_distance(overview['average_distance_km'])}")
        if highest["altitude"] is not None:
            print(
                f"   Highest balloon:  #{highest['trajectory_id']} "
                f"at {highest['altitude']:.2f} km"
            )
        print(f"   Dominant drift:   {format_bearing(drift['bearing_degrees'])}")
