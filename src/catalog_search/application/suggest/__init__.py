"""Application suggest – fuzzy prefix completion."""
from catalog_search.application.suggest.completion import build_suggest, decode_suggestions
from catalog_search.application.suggest.request import SuggestionRequest

__all__ = ["SuggestionRequest", "build_suggest", "decode_suggestions"]
