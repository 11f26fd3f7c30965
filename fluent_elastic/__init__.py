"""fluent_elastic: fluent query and aggregation builder for Elasticsearch/OpenSearch."""

__version__ = "0.1.0"
