"""
CodeStore — MongoDB-backed persistence layer for saved base64 codes.

Usage::

    store = CodeStore.connect("mongodb://localhost:27017/codevault")

    # Create or overwrite a code
    ok = store.save(owner_id="1234", owner_display_name="alice",
                    name="greeting", payload="aGVsbG8=")

    # Look up a single payload
    payload = store.get(owner_id="1234", name="greeting")

    # List an owner's codes
    for summary in store.list_codes(owner_id="1234"):
        print(summary.name, summary.created_on())

Every record is keyed on (userId, name); a unique compound index makes the
server reject a second document for the same pair, so concurrent saves for
one key always end up as a single record.

Only ``connect`` raises. The query methods log storage failures and report
them as ``False`` / ``None`` / ``[]``.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from codevault.exceptions import StoreConnectionError
from codevault.store.models import CodeRecord, CodeSummary

__all__ = ["CodeStore"]

logger = logging.getLogger(__name__)

# Milliseconds the driver waits for a reachable server before giving up
_SERVER_SELECTION_TIMEOUT_MS = 5000


class CodeStore:
    """
    Save / get / list interface over the ``codes`` collection.

    The unique (userId, name) index is created automatically on open.
    """

    def __init__(self, collection: Collection) -> None:
        self._codes = collection
        self._ensure_indexes()

    # ── Construction ──────────────────────────────────────────────────────

    @classmethod
    def connect(
        cls,
        uri: str,
        database: str = "codevault",
        collection: str = "codes",
    ) -> "CodeStore":
        """
        Open a MongoDB connection and return a ready store.

        *database* is used only when the URI does not name one.

        Raises:
            StoreConnectionError: the server is unreachable or rejected the
                                  index creation.
        """
        try:
            client: MongoClient = MongoClient(
                uri, serverSelectionTimeoutMS=_SERVER_SELECTION_TIMEOUT_MS
            )
            client.admin.command("ping")
            db = client.get_default_database(default=database)
            store = cls(db[collection])
        except PyMongoError as exc:
            raise StoreConnectionError(f"Cannot connect to MongoDB: {exc}") from exc
        logger.info("Connected to MongoDB (%s.%s)", db.name, collection)
        return store

    # ── Internal helpers ──────────────────────────────────────────────────

    def _ensure_indexes(self) -> None:
        """Create the unique (userId, name) index if it doesn't already exist."""
        self._codes.create_index(
            [("userId", ASCENDING), ("name", ASCENDING)],
            unique=True,
            name="userId_1_name_1",
        )

    # ── Public API ────────────────────────────────────────────────────────

    def save(
        self,
        owner_id: str,
        owner_display_name: str,
        name: str,
        payload: str,
    ) -> bool:
        """
        Create or overwrite the code *name* of *owner_id*.

        A single upsert replaces ``code`` and ``username`` in place; the
        ``createdAt`` of an existing record is left untouched.

        Returns:
            True on success, False if the database rejected the write.
        """
        now = datetime.now(tz=timezone.utc)
        try:
            self._codes.update_one(
                {"userId": owner_id, "name": name},
                {
                    "$set": {"username": owner_display_name, "code": payload},
                    "$setOnInsert": {"createdAt": now},
                },
                upsert=True,
            )
        except PyMongoError:
            logger.exception("Failed to save code %r for user %s", name, owner_id)
            return False
        logger.debug("Saved code %r for user %s", name, owner_id)
        return True

    def get(self, owner_id: str, name: str) -> Optional[str]:
        """
        Return the stored payload for (owner_id, name).

        Returns:
            The base64 string, or None when absent or on a storage error.
        """
        try:
            doc = self._codes.find_one(
                {"userId": owner_id, "name": name}, {"code": 1, "_id": 0}
            )
        except PyMongoError:
            logger.exception("Failed to fetch code %r for user %s", name, owner_id)
            return None
        return doc["code"] if doc else None

    def get_record(self, owner_id: str, name: str) -> Optional[CodeRecord]:
        """Full-record variant of get(); None when absent or on error."""
        try:
            doc = self._codes.find_one({"userId": owner_id, "name": name})
        except PyMongoError:
            logger.exception("Failed to fetch code %r for user %s", name, owner_id)
            return None
        return CodeRecord.from_document(doc) if doc else None

    def list_codes(self, owner_id: str) -> list[CodeSummary]:
        """
        List every code saved by *owner_id*, oldest first (ties by name).

        Returns:
            CodeSummary objects; empty when the owner has none or on error.
        """
        try:
            cursor = self._codes.find(
                {"userId": owner_id},
                {"name": 1, "createdAt": 1, "_id": 0},
            ).sort([("createdAt", ASCENDING), ("name", ASCENDING)])
            return [
                CodeSummary(name=doc["name"], created_at=doc.get("createdAt"))
                for doc in cursor
            ]
        except PyMongoError:
            logger.exception("Failed to list codes for user %s", owner_id)
            return []
