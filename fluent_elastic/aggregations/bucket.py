"""Bucket aggregation builders.

Bucket aggregations split the matched documents into buckets. Each builder
renders `"<name>": { "<kind>": { <options> } }` and may carry sub-aggregations
computed for every bucket.
"""

from typing import Any, Dict, List, Optional, Union

import attr

from fluent_elastic.core.composer import Configure
from fluent_elastic.core.utilities import check_direction, drop_none
from fluent_elastic.queries.clauses import QueryClause

from .base import BucketAggregation, ValuesSourceMixin

# Supported calendar-aware intervals
SUPPORTED_CALENDAR_INTERVALS = [
    "minute",
    "1m",
    "hour",
    "1h",
    "day",
    "1d",
    "week",
    "1w",
    "month",
    "1M",
    "quarter",
    "1q",
    "year",
    "1y",
]

Terms = Union[str, List[Any]]


class TermsAggregation(ValuesSourceMixin, BucketAggregation):
    """Returns the N most frequent terms of a field."""

    kind = "terms"
    required_keys = (("field", "script"),)

    def size(self, value: int) -> "TermsAggregation":
        """Number of buckets to return."""
        self._params.register_part("size", value)
        return self

    def shard_size(self, value: int) -> "TermsAggregation":
        """Number of terms each shard returns before the final reduce."""
        self._params.register_part("shard_size", value)
        return self

    def min_doc_count(self, value: int) -> "TermsAggregation":
        self._params.register_part("min_doc_count", value)
        return self

    def order(self, key: str, direction: str = "desc") -> "TermsAggregation":
        """Order buckets by `key`, e.g. "_count", "_key" or a sub-aggregation name."""
        self._params.register_part("order", {key: check_direction(direction)})
        return self

    def include(self, terms: Terms) -> "TermsAggregation":
        """Only bucket terms matching a regular expression or listed explicitly."""
        self._params.register_part("include", terms)
        return self

    def exclude(self, terms: Terms) -> "TermsAggregation":
        self._params.register_part("exclude", terms)
        return self


class FilterAggregation(BucketAggregation):
    """A single bucket of the documents matching a query clause."""

    kind = "filter"
    required_keys = (("filter",),)
    brackets = None

    def filter(self, configure: Configure) -> "FilterAggregation":
        """Set the clause documents must match, replacing any earlier clause.

        Args:
            configure: Callback over a `QueryClause` builder.
        """
        self._params.register_expression(
            QueryClause, configure, key="filter", replace=True
        )
        return self


@attr.s
class RangeAggregation(ValuesSourceMixin, BucketAggregation):
    """One bucket per range. Each range includes `from` and excludes `to`."""

    kind = "range"
    required_keys = (("field", "script"), ("ranges",))

    _ranges: List[Dict[str, Any]] = attr.ib(factory=list, init=False)

    def range(
        self,
        from_: Optional[float] = None,
        to: Optional[float] = None,
        key: Optional[str] = None,
    ) -> "RangeAggregation":
        """Add a range bucket. Either bound may be omitted for an open range."""
        self._params.register_part("ranges", self._ranges)
        self._ranges.append(drop_none(**{"key": key, "from": from_, "to": to}))
        return self

    def keyed(self, value: bool = True) -> "RangeAggregation":
        """Return buckets as an object keyed by range instead of a list."""
        self._params.register_part("keyed", value)
        return self


class GlobalAggregation(BucketAggregation):
    """A single bucket of every document in the search context, ignoring the query."""

    kind = "global"


class MissingAggregation(BucketAggregation):
    """A single bucket of the documents that have no value for a field."""

    kind = "missing"
    required_keys = (("field",),)

    def field(self, name: str) -> "MissingAggregation":
        self._params.register_part("field", name)
        return self


class NestedAggregation(BucketAggregation):
    """A single bucket aggregating the nested documents stored under a path."""

    kind = "nested"
    required_keys = (("path",),)

    def path(self, value: str) -> "NestedAggregation":
        self._params.register_part("path", value)
        return self


class _IntervalBucketMixin:
    """Options shared by the histogram aggregations."""

    def min_doc_count(self, value: int):
        self._params.register_part("min_doc_count", value)
        return self

    def extended_bounds(self, min: Any, max: Any):
        """Force buckets to be created from `min` up to `max` even when empty."""
        self._params.register_part("extended_bounds", {"min": min, "max": max})
        return self

    def offset(self, value: Any):
        self._params.register_part("offset", value)
        return self

    def order(self, key: str, direction: str = "asc"):
        self._params.register_part("order", {key: check_direction(direction)})
        return self

    def keyed(self, value: bool = True):
        self._params.register_part("keyed", value)
        return self


class HistogramAggregation(_IntervalBucketMixin, ValuesSourceMixin, BucketAggregation):
    """Fixed size buckets over numeric values.

    A value is rounded down to its closest bucket: with an interval of 5, a
    price of 32 falls in the bucket keyed 30.
    """

    kind = "histogram"
    required_keys = (("field", "script"), ("interval",))

    def interval(self, value: float) -> "HistogramAggregation":
        if value <= 0:
            raise ValueError(f"Invalid interval value {value}. Must be greater than 0")
        self._params.register_part("interval", value)
        return self


class DateHistogramAggregation(
    _IntervalBucketMixin, ValuesSourceMixin, BucketAggregation
):
    """Histogram over date values, with calendar-aware or fixed intervals."""

    kind = "date_histogram"
    required_keys = (("field", "script"), ("calendar_interval", "fixed_interval"))

    def calendar_interval(self, value: str) -> "DateHistogramAggregation":
        """Use a calendar-aware interval, replacing any fixed interval.

        Raises:
            ValueError: If the interval is not a supported calendar unit.
        """
        if value not in SUPPORTED_CALENDAR_INTERVALS:
            raise ValueError(
                f"Invalid calendar interval '{value}'. Must be one of {SUPPORTED_CALENDAR_INTERVALS}"
            )
        self._params.discard("fixed_interval")
        self._params.register_part("calendar_interval", value)
        return self

    def fixed_interval(self, value: str) -> "DateHistogramAggregation":
        """Use a fixed interval such as "30d" or "12h", replacing any calendar interval."""
        self._params.discard("calendar_interval")
        self._params.register_part("fixed_interval", value)
        return self

    def format(self, value: str) -> "DateHistogramAggregation":
        """Date format used for the bucket keys."""
        self._params.register_part("format", value)
        return self

    def time_zone(self, value: str) -> "DateHistogramAggregation":
        self._params.register_part("time_zone", value)
        return self
