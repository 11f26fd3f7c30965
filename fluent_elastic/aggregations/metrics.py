"""Metric aggregation builders.

Metric aggregations compute values over the numeric (or, for value_count and
cardinality, any) values read from a field or produced by a script.
"""

from typing import List

import attr

from fluent_elastic.core.utilities import check_range

from .base import MetricAggregation

# Maximum precision threshold accepted by the cardinality aggregation
MAX_PRECISION_THRESHOLD = 40000


class StatsAggregation(MetricAggregation):
    """Returns min, max, sum, count and avg at once."""

    kind = "stats"


class ExtendedStatsAggregation(MetricAggregation):
    """Stats plus sum_of_squares, variance and std_deviation."""

    kind = "extended_stats"

    def sigma(self, value: float) -> "ExtendedStatsAggregation":
        """Number of standard deviations used for the std_deviation_bounds."""
        if value < 0:
            raise ValueError(f"Invalid sigma value {value}. Must not be negative")
        self._params.register_part("sigma", value)
        return self


class MinAggregation(MetricAggregation):
    kind = "min"


class MaxAggregation(MetricAggregation):
    kind = "max"


class SumAggregation(MetricAggregation):
    kind = "sum"


class AvgAggregation(MetricAggregation):
    kind = "avg"


class ValueCountAggregation(MetricAggregation):
    """Counts the values extracted from the aggregated documents."""

    kind = "value_count"


@attr.s
class PercentilesAggregation(MetricAggregation):
    """Computes one or more percentiles over numeric values."""

    kind = "percentiles"

    _percents: List[float] = attr.ib(factory=list, init=False)

    def percents(self, *values: float) -> "PercentilesAggregation":
        """Percentiles to compute. Every value must be between 0 and 100.

        Several calls add to the same list.
        """
        checked = [check_range("percent", value, 0, 100) for value in values]
        if checked:
            self._params.register_part("percents", self._percents)
        self._percents.extend(checked)
        return self

    def keyed(self, value: bool = True) -> "PercentilesAggregation":
        self._params.register_part("keyed", value)
        return self

    def compression(self, value: int) -> "PercentilesAggregation":
        """TDigest compression, trading memory for accuracy."""
        self._params.register_part("tdigest", {"compression": value})
        return self


class CardinalityAggregation(MetricAggregation):
    """Approximate count of distinct values."""

    kind = "cardinality"

    def precision_threshold(self, value: int) -> "CardinalityAggregation":
        """Counts below this value are expected to be close to exact.

        Raises:
            ValueError: If the threshold is outside 0 to 40000.
        """
        self._params.register_part(
            "precision_threshold",
            check_range("precision_threshold", value, 0, MAX_PRECISION_THRESHOLD),
        )
        return self
