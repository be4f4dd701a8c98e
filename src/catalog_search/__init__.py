"""
catalog_search – product catalog search layer over Elasticsearch.

Import path convention::

    from catalog_search.application.expressions import MatchText, Range, SortSpec
    from catalog_search.application.pagination import OffsetRequest, CursorRequest
    from catalog_search.application.search import CatalogSearchService
    from catalog_search.adapters.elasticsearch import ElasticsearchBackend
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
