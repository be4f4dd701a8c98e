"""Application suggest – build completion requests, decode suggestion hits."""
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from catalog_search.application.results.hits import SearchHit, map_hit
from catalog_search.application.suggest.request import SuggestionRequest
from catalog_search.catalog.codec import DocumentCodec
from catalog_search.catalog.fields import FieldType, IndexSchema
from catalog_search.kernel.errors import DecodeMismatchError, InvalidExpressionError

T = TypeVar("T")


def build_suggest(request: SuggestionRequest, schema: IndexSchema) -> dict[str, Any]:
    definition = schema.resolve(request.field)
    if definition.type is not FieldType.COMPLETION:
        raise InvalidExpressionError(
            f"field '{definition.name}' is not a completion field",
            field=definition.name,
            fragment=request,
        )
    completion: dict[str, Any] = {
        "field": definition.name,
        "size": request.size,
        "skip_duplicates": request.skip_duplicates,
    }
    if request.fuzzy:
        completion["fuzzy"] = {
            "fuzziness": request.fuzziness,
            "transpositions": request.transpositions,
        }
    return {request.name: {"prefix": request.prefix, "completion": completion}}


def decode_suggestions(
    request: SuggestionRequest,
    response: Mapping[str, Any],
    codec: DocumentCodec[T],
) -> list[SearchHit[T]]:
    """Flatten every entry's options, in engine order, into hits.

    Each option must carry its document ``_source``; one that does not
    fails the whole decode with its position in the path.
    """
    suggest = response.get("suggest")
    if not isinstance(suggest, Mapping) or request.name not in suggest:
        raise DecodeMismatchError(f"suggest>{request.name}", "completion suggestion")
    hits: list[SearchHit[T]] = []
    for entry in suggest[request.name]:
        options = entry.get("options") if isinstance(entry, Mapping) else None
        if not isinstance(options, list):
            raise DecodeMismatchError(f"suggest>{request.name}", "suggestion entry with options")
        for option in options:
            if not isinstance(option, Mapping) or not isinstance(option.get("_source"), Mapping):
                raise DecodeMismatchError(f"suggest>{request.name}[{len(hits)}]", "suggestion option with _source")
            hits.append(map_hit(option, codec, rank=len(hits)))
    return hits


__all__ = ["build_suggest", "decode_suggestions"]
