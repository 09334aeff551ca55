"""
MongoDB entity store.

Maps the store contract onto PyMongo collections named after each
:class:`EntityKind`. With ``DB_USE_TRANSACTIONS`` enabled (replica set
required) :meth:`MongoEntityStore.transaction` runs its block inside a
multi-document transaction; every operation issued from the same thread
inside the block joins it. Without transactions, read-then-write guards
rely on single-document atomic operations: ``increment`` (``$inc``) and
the filtered ``delete``.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from pymongo import ReturnDocument
from pymongo.client_session import ClientSession
from pymongo.errors import PyMongoError

from recruitflow.data.database import DatabaseManager, get_database_manager
from recruitflow.utils.exceptions import NotFoundError, StoreFailureError
from recruitflow.utils.logger import get_logger

from .base import DEFAULT_ORDER, EntityKind, EntityStore, SortOrder

logger = get_logger(__name__)


class MongoEntityStore(EntityStore):
    """Entity store backed by a MongoDB database."""

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        use_transactions: Optional[bool] = None,
    ) -> None:
        self._db_manager = db_manager or get_database_manager()
        if use_transactions is None:
            use_transactions = self._db_manager.use_transactions
        self._use_transactions = use_transactions
        self._local = threading.local()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _collection(self, kind: EntityKind) -> Any:
        return self._db_manager.get_collection(EntityKind(kind).value)

    def _session(self) -> Optional[ClientSession]:
        return getattr(self._local, "session", None)

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except PyMongoError as e:
            logger.error(f"MongoDB failure while trying to {action}: {e}")
            raise StoreFailureError(f"Failed to {action}", e) from e

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[None]:
        # Nested blocks join the outer transaction
        if self._session() is not None or not self._use_transactions:
            yield
            return

        with self._store_errors("run transaction"):
            with self._db_manager.session() as session:
                with session.start_transaction():
                    self._local.session = session
                    try:
                        yield
                    finally:
                        self._local.session = None

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def get(self, kind: EntityKind, record_id: str) -> Optional[dict[str, Any]]:
        with self._store_errors(f"read {kind.value} {record_id}"):
            return self._collection(kind).find_one(
                {"_id": record_id}, session=self._session()
            )

    def insert(self, kind: EntityKind, record: dict[str, Any]) -> dict[str, Any]:
        if not record.get("_id"):
            raise StoreFailureError(f"Cannot insert into {kind.value} without an _id")

        document = dict(record)
        with self._store_errors(f"insert into {kind.value}"):
            self._collection(kind).insert_one(document, session=self._session())
        logger.debug(f"Inserted {kind.value} document: {document['_id']}")
        return document

    def update(
        self, kind: EntityKind, record_id: str, patch: dict[str, Any]
    ) -> dict[str, Any]:
        changes = {k: v for k, v in patch.items() if k != "_id"}
        if not changes:
            current = self.get(kind, record_id)
            if current is None:
                raise NotFoundError(kind.value, record_id)
            return current

        with self._store_errors(f"update {kind.value} {record_id}"):
            updated = self._collection(kind).find_one_and_update(
                {"_id": record_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
                session=self._session(),
            )
        if updated is None:
            raise NotFoundError(kind.value, record_id)
        logger.debug(f"Updated {kind.value} document {record_id}: {sorted(changes)}")
        return updated

    def increment(
        self, kind: EntityKind, record_id: str, field: str, amount: int = 1
    ) -> Optional[dict[str, Any]]:
        with self._store_errors(f"increment {field} on {kind.value} {record_id}"):
            return self._collection(kind).find_one_and_update(
                {"_id": record_id},
                {"$inc": {field: amount}},
                return_document=ReturnDocument.AFTER,
                session=self._session(),
            )

    def delete(
        self,
        kind: EntityKind,
        record_id: str,
        filter: Optional[dict[str, Any]] = None,
    ) -> bool:
        with self._store_errors(f"delete {kind.value} {record_id}"):
            result = self._collection(kind).delete_one(
                {**(filter or {}), "_id": record_id}, session=self._session()
            )
        if result.deleted_count > 0:
            logger.debug(f"Deleted {kind.value} document: {record_id}")
            return True
        return False

    def query(
        self,
        kind: EntityKind,
        filter: Optional[dict[str, Any]] = None,
        order: Optional[SortOrder] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        with self._store_errors(f"query {kind.value}"):
            cursor = (
                self._collection(kind)
                .find(filter or {}, session=self._session())
                .sort(order or DEFAULT_ORDER)
                .skip(offset)
            )
            if limit is not None:
                cursor = cursor.limit(limit)
            return list(cursor)

    def count(self, kind: EntityKind, filter: Optional[dict[str, Any]] = None) -> int:
        with self._store_errors(f"count {kind.value}"):
            return self._collection(kind).count_documents(
                filter or {}, session=self._session()
            )

    def exists(self, kind: EntityKind, filter: dict[str, Any]) -> bool:
        with self._store_errors(f"count {kind.value}"):
            return (
                self._collection(kind).count_documents(
                    filter, limit=1, session=self._session()
                )
                > 0
            )

    def close(self) -> None:
        self._db_manager.close()
