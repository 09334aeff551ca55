"""
In-process entity store.

Keeps every collection in a dict guarded by a re-entrant lock. Each
instance is fully isolated, which makes it the store of choice for tests
and for running the CLI without a database.
"""

import copy
import re
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from recruitflow.utils.exceptions import NotFoundError, StoreFailureError
from recruitflow.utils.logger import get_logger

from .base import DEFAULT_ORDER, EntityKind, EntityStore, SortOrder

logger = get_logger(__name__)


def _resolve(document: dict[str, Any], key: str) -> Any:
    """Read a possibly dotted key (``culture.legal_values``) from a document."""
    value: Any = document
    for part in key.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _is_operator_dict(condition: Any) -> bool:
    return (
        isinstance(condition, dict)
        and bool(condition)
        and all(k.startswith("$") for k in condition)
    )


def _match_condition(value: Any, condition: Any) -> bool:
    if not _is_operator_dict(condition):
        return value == condition

    for op, operand in condition.items():
        if op == "$in":
            if value not in operand:
                return False
        elif op == "$ne":
            if value == operand:
                return False
        elif op == "$regex":
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(operand, value, flags):
                return False
        elif op == "$options":
            continue
        else:
            raise StoreFailureError(f"Unsupported query operator: {op}")
    return True


def matches_filter(document: dict[str, Any], filter: Optional[dict[str, Any]]) -> bool:
    """Evaluate a MongoDB-style filter against a single document."""
    for key, condition in (filter or {}).items():
        if key == "$or":
            if not any(matches_filter(document, sub) for sub in condition):
                return False
        elif key == "$and":
            if not all(matches_filter(document, sub) for sub in condition):
                return False
        elif not _match_condition(_resolve(document, key), condition):
            return False
    return True


def _sort_records(records: list[dict[str, Any]], order: SortOrder) -> None:
    # Stable sorts applied from the least to the most significant key
    for field, direction in reversed(order):
        records.sort(
            key=lambda r: (_resolve(r, field) is not None, _resolve(r, field)),
            reverse=direction < 0,
        )


class InMemoryEntityStore(EntityStore):
    """Dict-backed store; safe to share between threads."""

    def __init__(self) -> None:
        self._collections: dict[EntityKind, dict[str, dict[str, Any]]] = {
            kind: {} for kind in EntityKind
        }
        self._lock = threading.RLock()

    def _collection(self, kind: EntityKind) -> dict[str, dict[str, Any]]:
        return self._collections[EntityKind(kind)]

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield

    def get(self, kind: EntityKind, record_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            record = self._collection(kind).get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def insert(self, kind: EntityKind, record: dict[str, Any]) -> dict[str, Any]:
        record_id = record.get("_id")
        if not record_id:
            raise StoreFailureError(f"Cannot insert into {kind.value} without an _id")

        with self._lock:
            collection = self._collection(kind)
            if record_id in collection:
                raise StoreFailureError(f"Duplicate _id in {kind.value}: {record_id}")
            collection[record_id] = copy.deepcopy(record)
            logger.debug(f"Inserted {kind.value} record: {record_id}")
            return copy.deepcopy(record)

    def update(
        self, kind: EntityKind, record_id: str, patch: dict[str, Any]
    ) -> dict[str, Any]:
        with self._lock:
            collection = self._collection(kind)
            record = collection.get(record_id)
            if record is None:
                raise NotFoundError(kind.value, record_id)

            changes = {k: copy.deepcopy(v) for k, v in patch.items() if k != "_id"}
            record.update(changes)
            logger.debug(f"Updated {kind.value} record {record_id}: {sorted(changes)}")
            return copy.deepcopy(record)

    def increment(
        self, kind: EntityKind, record_id: str, field: str, amount: int = 1
    ) -> Optional[dict[str, Any]]:
        with self._lock:
            record = self._collection(kind).get(record_id)
            if record is None:
                return None
            record[field] = (record.get(field) or 0) + amount
            return copy.deepcopy(record)

    def delete(
        self,
        kind: EntityKind,
        record_id: str,
        filter: Optional[dict[str, Any]] = None,
    ) -> bool:
        with self._lock:
            collection = self._collection(kind)
            record = collection.get(record_id)
            if record is None or not matches_filter(record, filter):
                return False
            del collection[record_id]
            logger.debug(f"Deleted {kind.value} record: {record_id}")
            return True

    def query(
        self,
        kind: EntityKind,
        filter: Optional[dict[str, Any]] = None,
        order: Optional[SortOrder] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        with self._lock:
            records = [
                r for r in self._collection(kind).values() if matches_filter(r, filter)
            ]
            _sort_records(records, order or DEFAULT_ORDER)
            end = None if limit is None else offset + limit
            return copy.deepcopy(records[offset:end])

    def count(self, kind: EntityKind, filter: Optional[dict[str, Any]] = None) -> int:
        with self._lock:
            return sum(
                1 for r in self._collection(kind).values() if matches_filter(r, filter)
            )

    def clear(self) -> None:
        """Drop every record in every collection."""
        with self._lock:
            for collection in self._collections.values():
                collection.clear()
