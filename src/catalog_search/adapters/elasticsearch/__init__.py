"""Elasticsearch adapter – async engine backend."""
from catalog_search.adapters.elasticsearch.backend import ElasticsearchBackend

__all__ = ["ElasticsearchBackend"]
