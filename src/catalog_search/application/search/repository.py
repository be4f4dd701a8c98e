"""Application search – DocumentRepository (persistence boundary)."""
from __future__ import annotations

from typing import Generic, Iterable, TypeVar

from catalog_search.application.search.backend import SearchBackend
from catalog_search.catalog.codec import DocumentCodec, ProductCodec
from catalog_search.catalog.document import Product
from catalog_search.catalog.fields import PRODUCT_SCHEMA
from catalog_search.config.settings import SearchSettings
from catalog_search.observability.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class DocumentRepository(Generic[T]):
    """Save and clear documents of one index.

    Documents without an identity are new; the engine assigns their id and
    the returned copies carry it.  Documents with an identity are
    re-indexed under it.  With ``refresh`` the writes are searchable as
    soon as the call returns.

    Usage::

        repo = DocumentRepository(backend)
        saved = await repo.save(product)
        assert saved.id is not None
    """

    def __init__(
        self,
        backend: SearchBackend,
        codec: DocumentCodec[T] | None = None,
        *,
        index: str = PRODUCT_SCHEMA.index,
        refresh: bool = True,
    ) -> None:
        self._backend = backend
        self._codec: DocumentCodec[T] = codec or ProductCodec()  # type: ignore[assignment]
        self._index = index
        self._refresh = refresh

    @classmethod
    def from_settings(cls, backend: SearchBackend, settings: SearchSettings) -> "DocumentRepository[Product]":
        return cls(backend, index=settings.index, refresh=settings.refresh_on_write)

    async def save(self, document: T) -> T:
        id = await self._backend.index(
            self._index,
            self._codec.encode(document),
            id=self._codec.identity(document),
            refresh=self._refresh,
        )
        return self._codec.with_identity(document, id)

    async def save_all(self, documents: Iterable[T]) -> list[T]:
        docs = list(documents)
        if not docs:
            return []
        ids = await self._backend.bulk_index(
            self._index,
            [(self._codec.identity(d), self._codec.encode(d)) for d in docs],
            refresh=self._refresh,
        )
        logger.debug("repository.saved", index=self._index, count=len(ids))
        return [self._codec.with_identity(d, id) for d, id in zip(docs, ids, strict=True)]

    async def delete_all(self) -> int:
        deleted = await self._backend.delete_all(self._index, refresh=self._refresh)
        logger.debug("repository.cleared", index=self._index, deleted=deleted)
        return deleted


__all__ = ["DocumentRepository"]
