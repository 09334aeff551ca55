"""
Entity store adapter interface.

The store is the only persistence boundary the core talks to. Records
are plain documents keyed by ``_id``; filters use the MongoDB query
subset listed on :meth:`EntityStore.query`. Implementations are injected
into repositories, so each test can run against its own isolated store.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any, Optional

# (field, direction) pairs, direction 1 ascending / -1 descending
SortOrder = list[tuple[str, int]]

# Newest first, ties broken by id (ids grow with creation time)
DEFAULT_ORDER: SortOrder = [("created_at", -1), ("_id", -1)]


class EntityKind(str, Enum):
    """Entity kinds the store holds; values are collection names."""

    JOB = "jobs"
    CANDIDATE = "candidates"
    INTERVIEW = "interviews"


class EntityStore(ABC):
    """
    Abstract CRUD adapter for jobs, candidates and interviews.

    Existence failures are reported distinctly: ``get`` returns ``None``,
    ``update`` raises :class:`NotFoundError`, ``delete`` returns ``False``.
    Any backend failure is raised as :class:`StoreFailureError`.
    """

    @abstractmethod
    def get(self, kind: EntityKind, record_id: str) -> Optional[dict[str, Any]]:
        """Fetch one record by id."""

    @abstractmethod
    def insert(self, kind: EntityKind, record: dict[str, Any]) -> dict[str, Any]:
        """Insert a new record; ``record['_id']`` must be set and unused."""

    @abstractmethod
    def update(
        self, kind: EntityKind, record_id: str, patch: dict[str, Any]
    ) -> dict[str, Any]:
        """Merge-patch a record: only the keys in ``patch`` are written.

        Returns the updated record.
        """

    @abstractmethod
    def increment(
        self, kind: EntityKind, record_id: str, field: str, amount: int = 1
    ) -> Optional[dict[str, Any]]:
        """
        Atomically add ``amount`` to a numeric field (missing counts as 0).

        Returns the updated record, or ``None`` when it does not exist.
        """

    @abstractmethod
    def delete(
        self,
        kind: EntityKind,
        record_id: str,
        filter: Optional[dict[str, Any]] = None,
    ) -> bool:
        """
        Delete a record, atomically requiring it to also match ``filter``.

        ``False`` when it did not exist or did not match.
        """

    @abstractmethod
    def query(
        self,
        kind: EntityKind,
        filter: Optional[dict[str, Any]] = None,
        order: Optional[SortOrder] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """
        Find records matching ``filter``.

        Supported filter operators: plain equality, ``$in``, ``$ne``,
        ``$regex`` (with ``$options``), ``$or`` and ``$and``.
        ``order`` defaults to :data:`DEFAULT_ORDER`; ``limit=None`` means
        no limit.
        """

    @abstractmethod
    def count(self, kind: EntityKind, filter: Optional[dict[str, Any]] = None) -> int:
        """Count records matching ``filter``."""

    def exists(self, kind: EntityKind, filter: dict[str, Any]) -> bool:
        """Check if any record matches ``filter``."""
        return bool(self.query(kind, filter, limit=1))

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """
        Context manager giving a consistent read-then-act window.

        A precondition checked inside the block still holds when the
        dependent write inside the same block executes.
        """

    def close(self) -> None:
        """Release backend resources."""
