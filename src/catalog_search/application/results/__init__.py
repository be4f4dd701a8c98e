"""Application results – typed hits mapped from raw engine responses."""
from catalog_search.application.results.hits import SearchHit, SearchHits, map_hit, map_hits

__all__ = ["SearchHit", "SearchHits", "map_hit", "map_hits"]
