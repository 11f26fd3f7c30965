"""The aggregations builder.

An aggregation builds analytic information over the set of documents matched
by a search. `Aggregations` collects any number of named aggregations and
renders them as `"aggregations": { <agg1>,<agg2>,... }`.
"""

from typing import Dict, Type

import attr

from fluent_elastic.core.composer import (
    Configure,
    Envelope,
    ExpressionComposer,
    QueryPart,
)

from .base import Aggregation
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


AGGREGATIONS_ENVELOPE = Envelope.keyed("aggregations")

# JSON key -> builder for every aggregation kind Aggregations can register
AGGREGATION_TYPES: Dict[str, Type[Aggregation]] = {
    cls.kind: cls
    for cls in (
        TermsAggregation,
        FilterAggregation,
        RangeAggregation,
        StatsAggregation,
        ExtendedStatsAggregation,
        MinAggregation,
        MaxAggregation,
        SumAggregation,
        AvgAggregation,
        ValueCountAggregation,
        PercentilesAggregation,
        CardinalityAggregation,
        GlobalAggregation,
        MissingAggregation,
        NestedAggregation,
        HistogramAggregation,
        DateHistogramAggregation,
    )
}


def _make_composer() -> ExpressionComposer:
    return ExpressionComposer(AGGREGATIONS_ENVELOPE, owner="aggregations")


@attr.s
class Aggregations(QueryPart):
    """Fluent builder for the `aggregations` member of a search request.

    Every method takes a callback over a fresh builder of the matching
    aggregation kind and returns `self`. Callbacks are stored, not called: they
    run when `render()` is called, in registration order.

    Example:
        >>> Aggregations().terms(lambda t: t.name("by_category").field("category")).render()
        '"aggregations": { "by_category": { "terms": { "field": "category" } } }'
    """

    _composer: ExpressionComposer = attr.ib(factory=_make_composer, init=False)

    def __len__(self) -> int:
        """Return the number of registered aggregations."""
        return len(self._composer)

    @property
    def is_empty(self) -> bool:
        """Check whether no aggregation was registered."""
        return len(self._composer) == 0

    def _register(
        self, aggregation_type: Type[Aggregation], configure: Configure
    ) -> "Aggregations":
        self._composer.register_expression(
            aggregation_type, configure, key=aggregation_type.kind
        )
        return self

    def aggregation(self, kind: str, configure: Configure) -> "Aggregations":
        """Register an aggregation by its JSON key, e.g. "terms" or "date_histogram".

        Raises:
            ValueError: If `kind` is not a known aggregation.
        """
        try:
            aggregation_type = AGGREGATION_TYPES[kind]
        except KeyError:
            raise ValueError(
                f"Unknown aggregation '{kind}'. Must be one of {sorted(AGGREGATION_TYPES)}"
            )
        return self._register(aggregation_type, configure)

    def terms(self, configure: Configure) -> "Aggregations":
        """Buckets for the N most frequent terms of a field."""
        return self._register(TermsAggregation, configure)

    def filter(self, configure: Configure) -> "Aggregations":
        """A single bucket of the documents matching a query clause.

        Often used to narrow the context of its sub-aggregations.
        """
        return self._register(FilterAggregation, configure)

    def range(self, configure: Configure) -> "Aggregations":
        """One bucket per user-defined range, from inclusive and to exclusive."""
        return self._register(RangeAggregation, configure)

    def stats(self, configure: Configure) -> "Aggregations":
        """Min, max, sum, count and avg of numeric values."""
        return self._register(StatsAggregation, configure)

    def extended_stats(self, configure: Configure) -> "Aggregations":
        """Stats plus sum_of_squares, variance and std_deviation."""
        return self._register(ExtendedStatsAggregation, configure)

    def min(self, configure: Configure) -> "Aggregations":
        """Minimum of numeric values."""
        return self._register(MinAggregation, configure)

    def max(self, configure: Configure) -> "Aggregations":
        """Maximum of numeric values."""
        return self._register(MaxAggregation, configure)

    def sum(self, configure: Configure) -> "Aggregations":
        """Sum of numeric values."""
        return self._register(SumAggregation, configure)

    def avg(self, configure: Configure) -> "Aggregations":
        """Average of numeric values."""
        return self._register(AvgAggregation, configure)

    def value_count(self, configure: Configure) -> "Aggregations":
        """Number of values extracted from the aggregated documents."""
        return self._register(ValueCountAggregation, configure)

    def percentiles(self, configure: Configure) -> "Aggregations":
        """Values below which given percentages of the observed values fall."""
        return self._register(PercentilesAggregation, configure)

    def cardinality(self, configure: Configure) -> "Aggregations":
        """Approximate count of distinct values."""
        return self._register(CardinalityAggregation, configure)

    def global_(self, configure: Configure) -> "Aggregations":
        """A single bucket of all documents in the search context, not influenced by the query."""
        return self._register(GlobalAggregation, configure)

    def missing(self, configure: Configure) -> "Aggregations":
        """A single bucket of the documents missing a field value."""
        return self._register(MissingAggregation, configure)

    def nested(self, configure: Configure) -> "Aggregations":
        """A single bucket for aggregating nested documents."""
        return self._register(NestedAggregation, configure)

    def histogram(self, configure: Configure) -> "Aggregations":
        """Fixed size interval buckets over numeric values."""
        return self._register(HistogramAggregation, configure)

    def date_histogram(self, configure: Configure) -> "Aggregations":
        """Interval buckets over date values, with calendar-aware intervals."""
        return self._register(DateHistogramAggregation, configure)

    def has_required_parts(self) -> bool:
        """Aggregations are optional, so an empty builder is valid."""
        return self._composer.has_required_parts()

    def render(self) -> str:
        """Render every registered aggregation inside the `aggregations` envelope.

        An empty builder renders `"aggregations": {  }`; whether to emit it is up
        to the caller.
        """
        return self._composer.render()
