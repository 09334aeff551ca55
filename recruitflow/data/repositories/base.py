"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class. They
convert between store documents and Pydantic models and delegate the
actual persistence to the injected :class:`EntityStore`.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from recruitflow.data.models.base import BaseDocument, utcnow
from recruitflow.data.models.pagination import (
    Page,
    page_offset,
    validate_page_params,
)
from recruitflow.data.store import EntityKind, EntityStore, SortOrder, get_entity_store
from recruitflow.utils.config import get_settings
from recruitflow.utils.exceptions import NotFoundError, StoreFailureError
from recruitflow.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common store operations.

    Subclasses must define the entity kind and model class.
    """

    @property
    @abstractmethod
    def kind(self) -> EntityKind:
        """Entity kind (collection) this repository manages."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, store: Optional[EntityStore] = None) -> None:
        """Initialize repository with an entity store (the default store if omitted)."""
        self._store = store or get_entity_store()

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def entity_name(self) -> str:
        """Human-readable entity name used in error messages."""
        return self.model_class.__name__

    def transaction(self) -> AbstractContextManager[None]:
        """Consistent read-then-act window on the underlying store."""
        return self._store.transaction()

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert a store document to a Pydantic model."""
        if document is None:
            return None
        try:
            return self.model_class.model_validate(document)
        except PydanticValidationError as e:
            raise StoreFailureError(
                f"Stored {self.entity_name} {document.get('_id')} is malformed", e
            ) from e

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert a list of store documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert a Pydantic model to a store document."""
        return model.model_dump_store()

    # -------------------------------------------------------------------------
    # CRUD Operations
    # -------------------------------------------------------------------------

    def create(self, model: T) -> T:
        """Create a new document."""
        document = self._to_document(model)
        now = utcnow()
        document["created_at"] = now
        document["updated_at"] = now

        inserted = self._store.insert(self.kind, document)
        logger.debug(f"Created {self.kind.value} document: {inserted['_id']}")
        return self._to_model(inserted)

    def get_by_id(self, id_value: str) -> Optional[T]:
        """Get a document by its ID."""
        return self._to_model(self._store.get(self.kind, id_value))

    def get_or_raise(self, id_value: str) -> T:
        """Get a document by its ID, raising NotFoundError when absent."""
        model = self.get_by_id(id_value)
        if model is None:
            raise NotFoundError(self.entity_name, id_value)
        return model

    def find(
        self,
        query: Optional[dict[str, Any]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        order: Optional[SortOrder] = None,
    ) -> list[T]:
        """Find documents matching a query, newest first unless ``order`` says otherwise."""
        documents = self._store.query(
            self.kind, query or {}, order=order, offset=skip, limit=limit
        )
        return self._to_models(documents)

    def update(self, id_value: str, update_data: dict[str, Any]) -> T:
        """Merge-patch a document by ID; raises NotFoundError when absent."""
        patch = dict(update_data)
        patch["updated_at"] = utcnow()
        try:
            document = self._store.update(self.kind, id_value, patch)
        except NotFoundError:
            raise NotFoundError(self.entity_name, id_value) from None
        return self._to_model(document)

    def delete(self, id_value: str) -> bool:
        """Delete a document by ID."""
        deleted = self._store.delete(self.kind, id_value)
        if deleted:
            logger.debug(f"Deleted {self.kind.value} document: {id_value}")
        return deleted

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        return self._store.count(self.kind, query or {})

    def exists(self, query: dict[str, Any]) -> bool:
        """Check if any document matches the query."""
        return self._store.exists(self.kind, query)

    # -------------------------------------------------------------------------
    # Pagination
    # -------------------------------------------------------------------------

    def paginate(
        self,
        query: Optional[dict[str, Any]] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        order: Optional[SortOrder] = None,
    ) -> Page[T]:
        """
        Return one page of documents matching ``query``.

        ``total`` is the unpaginated count; a page past the end is
        returned empty rather than as an error.
        """
        workflow = get_settings().workflow
        if page_size is None:
            page_size = workflow.default_page_size
        validate_page_params(page, page_size, workflow.max_page_size)

        total = self.count(query)
        items = self.find(
            query, skip=page_offset(page, page_size), limit=page_size, order=order
        )
        return Page[self.model_class].build(items, total, page, page_size)

    # -------------------------------------------------------------------------
    # Bulk Operations
    # -------------------------------------------------------------------------

    def bulk_delete(self, ids: list[str]) -> int:
        """Delete multiple documents by IDs, one at a time through :meth:`delete`."""
        if not ids:
            return 0
        deleted = sum(1 for id_value in ids if self.delete(id_value))
        logger.debug(f"Bulk deleted {deleted} {self.kind.value} documents")
        return deleted
