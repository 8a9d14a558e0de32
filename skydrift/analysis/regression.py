"""
Regression Analyzer
Ordinary least squares fit of surface temperature against altitude.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..utils import is_finite_number


@dataclass(frozen=True)
class RegressionResult:
    """Linear fit ``y = slope * x + intercept``."""

    slope: float  # °C per km
    intercept: float  # °C
    r2: float
    n: int

    def predict(self, x: float) -> float:
        """Evaluate the fitted line at ``x``."""
        return self.slope * x + self.intercept

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _extract_xy(point: Any) -> Tuple[Any, Any]:
    """
    Pull the (explanatory, response) pair out of a sample.

    Accepts ``(x, y)`` pairs, dicts with ``x``/``y`` or ``alt``/``temperature_c``
    keys, and objects exposing ``alt`` and ``temperature_c``.
    """
    if isinstance(point, dict):
        if "x" in point:
            return point.get("x"), point.get("y")
        return point.get("alt"), point.get("temperature_c")
    if isinstance(point, (tuple, list)):
        return point[0], point[1]
    return getattr(point, "alt", None), getattr(point, "temperature_c", None)


def linear_fit(points: Iterable[Any]) -> Optional[RegressionResult]:
    """
    Fit a straight line through the samples with a known response.

    Samples whose response is missing (None) or whose values are not
    finite numbers are ignored.

    Args:
        points: Samples, see ``_extract_xy`` for accepted shapes

    Returns:
        RegressionResult, or None when there are no usable samples or all
        x values are identical (the slope would be undefined)

    Example:
        >>> fit = linear_fit([(1, 20), (2, 18), (3, 16)])
        >>> round(fit.slope, 6), round(fit.intercept, 6), fit.n
        (-2.0, 22.0, 3)
    """
    valid: List[Tuple[float, float]] = []
    for point in points:
        x, y = _extract_xy(point)
        if y is None:
            continue
        if is_finite_number(x) and is_finite_number(y):
            valid.append((float(x), float(y)))

    n = len(valid)
    if n == 0:
        return None

    mean_x = sum(x for x, _ in valid) / n
    mean_y = sum(y for _, y in valid) / n

    s_xx = sum((x - mean_x) ** 2 for x, _ in valid)
    s_xy = sum((x - mean_x) * (y - mean_y) for x, y in valid)

    # All samples at one altitude: no slope can be fitted
    if s_xx == 0:
        return None

    slope = s_xy / s_xx
    intercept = mean_y - slope * mean_x

    ss_tot = sum((y - mean_y) ** 2 for _, y in valid)
    ss_res = sum((y - (slope * x + intercept)) ** 2 for x, y in valid)

    if ss_tot == 0:
        # Constant response is fitted exactly by the flat line
        r2 = 1.0
    else:
        r2 = 1 - ss_res / ss_tot

    return RegressionResult(slope=slope, intercept=intercept, r2=r2, n=n)


def compute_temperature_trend(points_with_temperature: Iterable[Any]) -> Optional[RegressionResult]:
    """Altitude (km) vs surface temperature (°C) trend of enriched samples."""
    return linear_fit(points_with_temperature)
