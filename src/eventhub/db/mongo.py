from __future__ import annotations

import os
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError
from pymongo.server_api import ServerApi

# Always go through eventhub.config so python-dotenv is applied
from eventhub import config
from eventhub.errors import DatabaseConnectionError, StorageError
from eventhub.models.booking import BOOKING_INDEXES
from eventhub.models.event import EVENT_INDEXES
from eventhub.models.indexes import IndexSpec

logger = logging.getLogger(__name__)

_CLIENT: Optional[MongoClient] = None


def _mongo_uri() -> str:
    # Prefer config (loads .env), fallback to raw env
    uri = getattr(config, "MONGODB_URI", None) or os.getenv("MONGODB_URI")
    if not uri:
        raise DatabaseConnectionError("MONGODB_URI is not set")
    return uri


def _db_name() -> str:
    name = getattr(config, "MONGO_DB", None) or os.getenv("MONGO_DB") or "eventhub"
    return name


def get_client() -> MongoClient:
    global _CLIENT
    if _CLIENT is not None:
        return _CLIENT
    uri = _mongo_uri()
    _CLIENT = MongoClient(uri, serverSelectionTimeoutMS=5000, tz_aware=True, server_api=ServerApi("1"))
    logger.info("MongoDB client created for database %s", _db_name())
    return _CLIENT


def get_db():
    return get_client()[_db_name()]


def get_collection(name: str):
    return get_db()[name]


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """
    Translate pymongo failures raised inside the block into eventhub's
    StorageError / DatabaseConnectionError.
    """
    try:
        yield
    except ConnectionFailure as e:
        raise DatabaseConnectionError(f"{action}: {e}") from e
    except PyMongoError as e:
        raise StorageError(f"{action}: {e}") from e


def ping() -> bool:
    try:
        get_client().admin.command("ping")
        return True
    except Exception as e:
        logger.error("Mongo ping failed: %s", e)
        return False


INDEXES = {
    config.EVENTS_COLLECTION: EVENT_INDEXES,
    config.BOOKINGS_COLLECTION: BOOKING_INDEXES,
}


def _create_indexes(coll, specs: Iterable[IndexSpec], log: logging.Logger) -> int:
    created = 0
    for spec in specs:
        try:
            coll.create_index(spec.keys, **spec.options())
            created += 1
        except PyMongoError as e:
            log.warning("index %s create failed for %s: %s", spec.name, coll.name, e)
    return created


def ensure_indexes(log: Optional[logging.Logger] = None) -> int:
    """
    Safe to call on startup; creates the declared event and booking indexes
    if they don't exist. Returns how many index declarations were applied.
    """
    log = log or logger
    try:
        db = get_db()
    except DatabaseConnectionError as e:
        log.warning("[ensure_indexes] skipped: %s", e)
        return 0

    return sum(_create_indexes(db[name], specs, log) for name, specs in INDEXES.items())
