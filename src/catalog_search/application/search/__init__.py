"""Application search – query compiler, engine port, service and repository.

Leaf building blocks live in sibling packages and are importable from
there directly:

- :mod:`catalog_search.application.expressions` – predicates, sort, date math
- :mod:`catalog_search.application.pagination` – page requests and pages
- :mod:`catalog_search.application.aggregation` – aggregation specs and results
- :mod:`catalog_search.application.suggest` – completion suggestions
- :mod:`catalog_search.application.results` – typed hits
"""
from catalog_search.application.search.backend import SearchBackend
from catalog_search.application.search.compiler import QueryCompiler
from catalog_search.application.search.query import SearchQuery
from catalog_search.application.search.repository import DocumentRepository
from catalog_search.application.search.service import CatalogSearchService, SearchResponse

__all__ = [
    "CatalogSearchService",
    "DocumentRepository",
    "QueryCompiler",
    "SearchBackend",
    "SearchQuery",
    "SearchResponse",
]
