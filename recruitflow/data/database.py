"""
Database connection manager for RecruitFlow.

Provides MongoDB connection management (PyMongo) for the MongoDB
entity store.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional
from urllib.parse import quote_plus, urlencode

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from recruitflow.utils.config import DatabaseSettings, get_settings
from recruitflow.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages the MongoDB client and database handle.

    Clients are created lazily so importing the package never opens a
    connection.
    """

    def __init__(self, db_settings: Optional[DatabaseSettings] = None) -> None:
        """Initialize database manager with settings."""
        self._settings = db_settings or get_settings().database
        self._db_name = self._settings.name
        self._uri = self._build_uri()
        self._client: Optional[MongoClient] = None

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Security: URL-encodes credentials to prevent injection attacks.
        """
        db_settings = self._settings

        # Validate host to prevent injection
        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.has_credentials:
            auth = f"{quote_plus(db_settings.username)}:{quote_plus(db_settings.password)}@"

        options = {}
        if db_settings.auth_source:
            options["authSource"] = db_settings.auth_source
        if db_settings.replica_set:
            options["replicaSet"] = db_settings.replica_set
        query = f"/?{urlencode(options)}" if options else ""

        return f"mongodb://{auth}{host}:{db_settings.port}{query}"

    @property
    def use_transactions(self) -> bool:
        return self._settings.use_transactions

    # -------------------------------------------------------------------------
    # Client
    # -------------------------------------------------------------------------

    def get_client(self) -> MongoClient:
        """Get or create the MongoDB client."""
        if self._client is None:
            logger.info("Creating MongoDB client")
            self._client = MongoClient(
                self._uri,
                serverSelectionTimeoutMS=self._settings.timeout_ms,
                connectTimeoutMS=self._settings.timeout_ms,
                maxPoolSize=50,
                tz_aware=True,
            )
        return self._client

    def get_database(self) -> Database:
        """Get database instance."""
        return self.get_client()[self._db_name]

    def get_collection(self, collection_name: str) -> Any:
        """Get a collection by name."""
        return self.get_database()[collection_name]

    @contextmanager
    def session(self) -> Iterator[ClientSession]:
        """Context manager for a client session."""
        session = self.get_client().start_session()
        try:
            yield session
        finally:
            session.end_session()

    def check_connection(self) -> bool:
        """Check if the connection is healthy."""
        try:
            self.get_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Connection check failed: {e}")
            self.close()
            return False
        except PyMongoError as e:
            logger.error(f"Unexpected connection error: {e}")
            self.close()
            return False

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the client connection."""
        if self._client:
            logger.info("Closing MongoDB client")
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> None:
        """Create indexes backing the listing and guard queries."""
        logger.info("Ensuring database indexes")

        jobs = self.get_collection("jobs")
        jobs.create_index("status")
        jobs.create_index([("created_at", DESCENDING), ("_id", DESCENDING)])

        candidates = self.get_collection("candidates")
        candidates.create_index("job_id")
        candidates.create_index([("job_id", ASCENDING), ("status", ASCENDING)])
        candidates.create_index([("created_at", DESCENDING), ("_id", DESCENDING)])

        interviews = self.get_collection("interviews")
        interviews.create_index("candidate_id")
        interviews.create_index("job_id")
        interviews.create_index("status")
        interviews.create_index([("created_at", DESCENDING), ("_id", DESCENDING)])

        logger.info("Database indexes created successfully")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
