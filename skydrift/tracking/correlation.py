"""
Trajectory Correlation Strategies

The upstream feed carries no stable balloon identifier, so observations
from different hours have to be correlated heuristically. Two strategies
are provided:

- PositionalCorrelation: the point at index ``i`` of every hour slice
  belongs to balloon ``i``. Only as reliable as the feed's ordering; if the
  ordering shifts between hours, unrelated balloons get spliced together.
- KeyedCorrelation: groups points by ``SamplePoint.entity_key`` when the
  feed provides one, falling back to positional correlation otherwise.
"""

from collections import OrderedDict
from typing import Dict, Hashable, List, Optional, Sequence

from .models import SamplePoint

HourSlices = Sequence[Sequence[SamplePoint]]


class CorrelationStrategy:
    """Base class: turn hour slices into candidate paths keyed by id."""

    name = "base"

    def correlate(self, slices: HourSlices) -> Dict[Hashable, List[SamplePoint]]:
        """
        Group observations into candidate paths.

        Args:
            slices: Hour slices, most recent first

        Returns:
            Ordered mapping of trajectory id to newest-first path
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PositionalCorrelation(CorrelationStrategy):
    """Use the index within each hour slice as the balloon identity."""

    name = "positional"

    def correlate(self, slices: HourSlices) -> Dict[Hashable, List[SamplePoint]]:
        max_width = max((len(hour) for hour in slices), default=0)

        candidates: Dict[Hashable, List[SamplePoint]] = OrderedDict()
        for i in range(max_width):
            path = [hour[i] for hour in slices if i < len(hour)]
            candidates[i] = path

        return candidates


class KeyedCorrelation(CorrelationStrategy):
    """
    Group observations by their entity key.

    Points without a key are ignored. A window in which no point carries
    a key is handed to the fallback strategy.
    """

    name = "keyed"

    def __init__(self, fallback: Optional[CorrelationStrategy] = None):
        self.fallback = fallback or PositionalCorrelation()

    def correlate(self, slices: HourSlices) -> Dict[Hashable, List[SamplePoint]]:
        has_keys = any(p.entity_key is not None for hour in slices for p in hour)
        if not has_keys:
            return self.fallback.correlate(slices)

        candidates: Dict[Hashable, List[SamplePoint]] = OrderedDict()
        for hour in slices:
            for point in hour:
                if point.entity_key is None:
                    continue
                candidates.setdefault(point.entity_key, []).append(point)

        return candidates

    def __repr__(self) -> str:
        return f"KeyedCorrelation(fallback={self.fallback!r})"


_STRATEGIES = {
    PositionalCorrelation.name: PositionalCorrelation,
    KeyedCorrelation.name: KeyedCorrelation,
}


def get_correlation_strategy(name: str) -> CorrelationStrategy:
    """
    Look up a correlation strategy by name.

    Raises:
        ValueError: If the name is not a known strategy
    """
    try:
        return _STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown correlation strategy: {name!r} "
            f"(expected one of {sorted(_STRATEGIES)})"
        ) from None
