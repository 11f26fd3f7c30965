"""Search request body builder.

SearchBody is the parent serializer of the query and aggregation builders: it
renders a complete JSON request body and leaves the aggregations member out
when no aggregation was registered.
"""

import logging
from typing import Any, Dict, List, Optional

import attr
import orjson

from fluent_elastic.aggregations import Aggregations
from fluent_elastic.core.composer import (
    Configure,
    Envelope,
    ExpressionComposer,
    QueryPart,
)
from fluent_elastic.core.config import get_settings
from fluent_elastic.core.format import beautify_json
from fluent_elastic.core.utilities import check_direction, check_range

from .clauses import QueryClause

logger = logging.getLogger(__name__)

# Default index.max_result_window of Elasticsearch/OpenSearch
MAX_RESULT_WINDOW = 10000

BODY_ENVELOPE = Envelope.parse("{ {body} }")


def _make_body_composer() -> ExpressionComposer:
    return ExpressionComposer(BODY_ENVELOPE, owner="search body")


@attr.s
class SearchBody(QueryPart):
    """Fluent builder for a search request body."""

    _composer: ExpressionComposer = attr.ib(factory=_make_body_composer, init=False)
    _aggregations: List[Configure] = attr.ib(factory=list, init=False)
    _sort: List[Dict[str, Any]] = attr.ib(factory=list, init=False)

    def query(self, configure: Configure) -> "SearchBody":
        """Set the query clause, replacing any earlier one.

        Args:
            configure: Callback over a `QueryClause` builder.
        """
        query = ExpressionComposer(
            Envelope.keyed("query", brackets=None), owner="query"
        )
        query.register_expression(QueryClause, configure)
        self._composer.register(query.render, key="query", replace=True)
        return self

    def aggregations(self, configure: Configure) -> "SearchBody":
        """Register aggregations. Several calls are applied to one `Aggregations` in call order."""
        self._composer.register(
            self._render_aggregations, key="aggregations", replace=True
        )
        self._aggregations.append(configure)
        return self

    def size(self, value: int) -> "SearchBody":
        """Number of hits to return. Use 0 for aggregation-only searches."""
        self._composer.register_part(
            "size", check_range("size", value, 0, MAX_RESULT_WINDOW)
        )
        return self

    def from_(self, value: int) -> "SearchBody":
        """Offset of the first hit to return."""
        self._composer.register_part(
            "from", check_range("from", value, 0, MAX_RESULT_WINDOW)
        )
        return self

    def sort(self, field: str, order: str = "asc") -> "SearchBody":
        """Add a sort criterion. Criteria apply in call order."""
        self._composer.register_part("sort", self._sort)
        self._sort.append({field: {"order": check_direction(order)}})
        return self

    def _render_aggregations(self) -> Optional[str]:
        aggregations = Aggregations()
        for configure in self._aggregations:
            configured = configure(aggregations)
            if configured is not None:
                aggregations = configured

        if aggregations.is_empty:
            logger.debug(
                "No aggregation registered, leaving the aggregations member out"
            )
            return None
        return aggregations.render()

    def render(self) -> str:
        return self._composer.render()

    def to_json(self, pretty: Optional[bool] = None) -> str:
        """Render the body, indented when `pretty` is true.

        Args:
            pretty: Indent the output. Defaults to the pretty_print setting.
        """
        if pretty is None:
            pretty = get_settings().pretty_print
        text = self.render()
        return beautify_json(text) if pretty else text

    def to_dict(self) -> Dict[str, Any]:
        """Render the body and parse it into a dictionary."""
        return orjson.loads(self.render())
