"""Query clause builders.

These composers require at least one part: a `QueryClause` renders exactly one
leaf or compound clause, and a `BoolQuery` needs at least one occurrence.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Union

import attr

from fluent_elastic.core.composer import (
    Configure,
    Envelope,
    ExpressionComposer,
    QueryPart,
)
from fluent_elastic.core.utilities import drop_none

Bound = Union[int, float, str, date, datetime]

CLAUSE_ENVELOPE = Envelope.parse("{ {body} }", min_parts=1, max_parts=1)

BOOL_ENVELOPE = Envelope.keyed("bool", min_parts=1)


def _make_clause_composer() -> ExpressionComposer:
    return ExpressionComposer(CLAUSE_ENVELOPE, owner="query clause")


def _make_bool_composer() -> ExpressionComposer:
    return ExpressionComposer(BOOL_ENVELOPE, owner="bool query")


@attr.s
class QueryClause(QueryPart):
    """A single query clause, rendered as `{ "<type>": { ... } }`.

    Exactly one clause method may be called. Combine several conditions with
    `bool`.
    """

    _composer: ExpressionComposer = attr.ib(factory=_make_clause_composer, init=False)

    def term(self, field: str, value: Any) -> "QueryClause":
        """Match documents whose field holds exactly `value`."""
        self._composer.register_part("term", {field: value})
        return self

    def terms(self, field: str, values: Iterable[Any]) -> "QueryClause":
        """Match documents whose field holds any of `values`."""
        self._composer.register_part("terms", {field: list(values)})
        return self

    def match(
        self, field: str, query: str, operator: Optional[str] = None
    ) -> "QueryClause":
        """Full text match on an analyzed field."""
        if operator is None:
            self._composer.register_part("match", {field: query})
        else:
            self._composer.register_part(
                "match", {field: {"query": query, "operator": operator}}
            )
        return self

    def match_all(self) -> "QueryClause":
        self._composer.register_part("match_all", {})
        return self

    def exists(self, field: str) -> "QueryClause":
        """Match documents that have a value for `field`."""
        self._composer.register_part("exists", {"field": field})
        return self

    def prefix(self, field: str, value: str) -> "QueryClause":
        self._composer.register_part("prefix", {field: value})
        return self

    def range(
        self,
        field: str,
        gt: Optional[Bound] = None,
        gte: Optional[Bound] = None,
        lt: Optional[Bound] = None,
        lte: Optional[Bound] = None,
        format: Optional[str] = None,
    ) -> "QueryClause":
        """Match documents whose field falls within the given bounds.

        Unset bounds are left out. Dates and datetimes are rendered in RFC 3339 format.
        """
        bounds = drop_none(gt=gt, gte=gte, lt=lt, lte=lte, format=format)
        self._composer.register_part("range", {field: bounds})
        return self

    def bool(self, configure: Configure) -> "QueryClause":
        """Combine clauses with a bool query.

        Args:
            configure: Callback over a `BoolQuery` builder, called at render time.
        """
        self._composer.register_expression(
            BoolQuery, configure, key="bool", replace=True
        )
        return self

    def render(self) -> str:
        return self._composer.render()


@attr.s
class BoolQuery(QueryPart):
    """Compound clause rendered as `"bool": { "must": [ ... ], ... }`.

    Each occurrence collects its clauses in one array, in call order.
    """

    _composer: ExpressionComposer = attr.ib(factory=_make_bool_composer, init=False)
    _occurrences: Dict[str, ExpressionComposer] = attr.ib(factory=dict, init=False)

    def _occurrence(self, occur: str, clauses: Iterable[Configure]) -> "BoolQuery":
        array = self._occurrences.get(occur)
        if array is None:
            array = ExpressionComposer(
                Envelope.keyed(occur, brackets="[]", min_parts=1),
                owner=f"bool {occur}",
            )
            self._occurrences[occur] = array
            self._composer.register(array.render, key=occur)

        for configure in clauses:
            array.register_expression(QueryClause, configure)
        return self

    def must(self, *clauses: Configure) -> "BoolQuery":
        """Clauses that must match and contribute to the score."""
        return self._occurrence("must", clauses)

    def filter(self, *clauses: Configure) -> "BoolQuery":
        """Clauses that must match, without scoring."""
        return self._occurrence("filter", clauses)

    def should(self, *clauses: Configure) -> "BoolQuery":
        return self._occurrence("should", clauses)

    def must_not(self, *clauses: Configure) -> "BoolQuery":
        return self._occurrence("must_not", clauses)

    def minimum_should_match(self, value: Union[int, str]) -> "BoolQuery":
        self._composer.register_part("minimum_should_match", value)
        return self

    def render(self) -> str:
        return self._composer.render()
