"""Aggregation builders for Elasticsearch/OpenSearch search requests.

This package provides the fluent aggregation builders. It includes:

1. The Aggregations builder, one registration method per aggregation kind
2. Bucket aggregation builders (terms, filter, range, histogram, ...)
3. Metric aggregation builders (stats, min, max, percentiles, ...)

The aggregations package is organized as follows:
- aggregations.py: The Aggregations builder and the kind -> builder table
- base.py: Base classes and option validation shared by the builders
- bucket.py: Bucket aggregation builders
- metrics.py: Metric aggregation builders

When adding a new aggregation kind:
1. Subclass BucketAggregation or MetricAggregation and set `kind` to its JSON key
2. Declare mandatory options in `required_keys`
3. Add the class to AGGREGATION_TYPES and a registration method to Aggregations
"""

from .aggregations import AGGREGATION_TYPES, Aggregations
from .base import Aggregation, BucketAggregation, MetricAggregation
from .bucket import (
    DateHistogramAggregation,
    FilterAggregation,
    GlobalAggregation,
    HistogramAggregation,
    MissingAggregation,
    NestedAggregation,
    RangeAggregation,
    TermsAggregation,
)
from .metrics import (
    AvgAggregation,
    CardinalityAggregation,
    ExtendedStatsAggregation,
    MaxAggregation,
    MinAggregation,
    PercentilesAggregation,
    StatsAggregation,
    SumAggregation,
    ValueCountAggregation,
)

__all__ = [
    "AGGREGATION_TYPES",
    "Aggregations",
    # Base classes
    "Aggregation",
    "BucketAggregation",
    "MetricAggregation",
    # Bucket aggregations
    "DateHistogramAggregation",
    "FilterAggregation",
    "GlobalAggregation",
    "HistogramAggregation",
    "MissingAggregation",
    "NestedAggregation",
    "RangeAggregation",
    "TermsAggregation",
    # Metric aggregations
    "AvgAggregation",
    "CardinalityAggregation",
    "ExtendedStatsAggregation",
    "MaxAggregation",
    "MinAggregation",
    "PercentilesAggregation",
    "StatsAggregation",
    "SumAggregation",
    "ValueCountAggregation",
]
