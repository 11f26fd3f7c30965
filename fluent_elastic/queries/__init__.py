"""Query builders for Elasticsearch/OpenSearch search requests.

The queries package is organized as follows:
- clauses.py: Single query clauses and the bool compound clause
- search.py: The search request body builder

search.py depends on the aggregations package, which itself uses the clauses
for the filter aggregation, so only the clauses are re-exported here. Import
SearchBody from fluent_elastic.queries.search.
"""

from .clauses import BoolQuery, QueryClause

__all__ = [
    "BoolQuery",
    "QueryClause",
]
