"""Elasticsearch adapter – ElasticsearchBackend."""
from __future__ import annotations

from typing import Any, Awaitable, Sequence, TypeVar

from elasticsearch import (
    ApiError,
    AsyncElasticsearch,
    ConnectionError as EsConnectionError,
    ConnectionTimeout,
    TransportError,
)

from catalog_search.config.settings import SearchSettings
from catalog_search.kernel.errors import (
    EngineRejectedError,
    EngineTimeoutError,
    EngineUnavailableError,
)
from catalog_search.observability.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)

# request-body keys whose client keyword differs
_BODY_KWARGS = {"from": "from_", "aggs": "aggregations"}


class ElasticsearchBackend:
    """:class:`~catalog_search.application.search.SearchBackend` over ``AsyncElasticsearch``.

    Transport failures surface as engine errors; the original exception is
    chained as ``cause``:

    - ``ConnectionTimeout`` → :class:`EngineTimeoutError`
    - ``ConnectionError`` / other ``TransportError`` → :class:`EngineUnavailableError`
    - ``ApiError`` (4xx/5xx) → :class:`EngineRejectedError`
    """

    def __init__(self, client: AsyncElasticsearch, *, resource: str = "elasticsearch") -> None:
        self._client = client
        self._resource = resource

    @classmethod
    def from_settings(cls, settings: SearchSettings) -> "ElasticsearchBackend":
        kwargs: dict[str, Any] = {"request_timeout": settings.request_timeout}
        if settings.api_key:
            kwargs["api_key"] = settings.api_key
        client = AsyncElasticsearch(list(settings.hosts), **kwargs)
        return cls(client, resource=",".join(settings.hosts))

    @property
    def client(self) -> AsyncElasticsearch:
        return self._client

    async def close(self) -> None:
        await self._client.close()

    # ------------------------------------------------------------------
    # SearchBackend interface
    # ------------------------------------------------------------------

    async def search(self, index: str, body: dict[str, Any], *, timeout: float | None = None) -> dict[str, Any]:
        kwargs = {_BODY_KWARGS.get(key, key): value for key, value in body.items()}
        client = self._client if timeout is None else self._client.options(request_timeout=timeout)
        response = await self._call("search", client.search(index=index, **kwargs), index=index)
        return dict(response.body)

    async def index(
        self,
        index: str,
        source: dict[str, Any],
        *,
        id: str | None = None,
        refresh: bool = False,
    ) -> str:
        response = await self._call(
            "index",
            self._client.index(index=index, document=source, id=id, refresh=refresh),
            index=index,
        )
        return str(response["_id"])

    async def bulk_index(
        self,
        index: str,
        documents: Sequence[tuple[str | None, dict[str, Any]]],
        *,
        refresh: bool = False,
    ) -> list[str]:
        operations: list[dict[str, Any]] = []
        for id, source in documents:
            action: dict[str, Any] = {"_index": index}
            if id is not None:
                action["_id"] = id
            operations.append({"index": action})
            operations.append(source)
        response = await self._call(
            "bulk", self._client.bulk(operations=operations, refresh=refresh), index=index
        )
        ids: list[str | None] = []
        failed: list[dict[str, Any]] = []
        for position, item in enumerate(response["items"]):
            result = item.get("index", {})
            error = result.get("error")
            if not error:
                ids.append(str(result["_id"]))
                continue
            ids.append(None)
            failed.append(
                {
                    "position": position,
                    "id": result.get("_id"),
                    "status": result.get("status"),
                    "error_type": error.get("type"),
                    "reason": str(error.get("reason", error)),
                }
            )
        if failed:
            first = failed[0]
            logger.warning(
                "engine.bulk_items_failed",
                index=index,
                failed=len(failed),
                total=len(ids),
                error_type=first["error_type"],
            )
            # items before and after a failure are already indexed
            raise EngineRejectedError(
                f"{len(failed)} of {len(ids)} bulk items failed; first: {first['reason']}",
                status_code=first["status"],
                error_type=first["error_type"],
                detail={"indexed_ids": ids, "failed": failed},
            )
        return [id for id in ids if id is not None]

    async def delete_all(self, index: str, *, refresh: bool = False) -> int:
        response = await self._call(
            "delete_by_query",
            self._client.delete_by_query(
                index=index,
                query={"match_all": {}},
                conflicts="proceed",
                refresh=refresh,
            ),
            index=index,
        )
        return int(response.get("deleted", 0))

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------

    async def _call(self, operation: str, call: Awaitable[T], *, index: str) -> T:
        try:
            return await call
        except ConnectionTimeout as exc:
            logger.warning("engine.request_failed", operation=operation, index=index, error="timeout")
            raise EngineTimeoutError(
                f"Search engine timed out during '{operation}'", cause=exc
            ) from exc
        except ApiError as exc:
            reason, error_type = _api_error_reason(exc)
            logger.warning(
                "engine.request_failed",
                operation=operation,
                index=index,
                status=exc.status_code,
                error_type=error_type,
            )
            raise EngineRejectedError(
                reason, status_code=exc.status_code, error_type=error_type, cause=exc
            ) from exc
        except (EsConnectionError, TransportError) as exc:
            logger.warning("engine.request_failed", operation=operation, index=index, error=type(exc).__name__)
            raise EngineUnavailableError(self._resource, cause=exc) from exc


def _api_error_reason(exc: ApiError) -> tuple[str, str | None]:
    body = exc.body if isinstance(exc.body, dict) else {}
    error = body.get("error")
    if isinstance(error, dict):
        root = (error.get("root_cause") or [error])[0]
        return str(root.get("reason") or error.get("reason") or exc.message), root.get("type") or error.get("type")
    if isinstance(error, str):
        return error, None
    return str(exc.message), None


__all__ = ["ElasticsearchBackend"]
