from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from eventhub import config
from eventhub.db.mongo import get_collection, storage_errors
from eventhub.errors import DuplicateSlugError, NotFound
from eventhub.models.event import prepare_event

logger = logging.getLogger(__name__)


def _events():
    return get_collection(config.EVENTS_COLLECTION)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def sanitize_slug(slug: str) -> str:
    return slug.strip().lower()


def get_event_by_slug(slug: str) -> Dict:
    """
    Fetch one event by slug. Raises NotFound when nothing matches and
    StorageError when MongoDB can't be reached.
    """
    slug = sanitize_slug(slug)
    with storage_errors("Event lookup failed"):
        doc = _events().find_one({"slug": slug})
    if doc is None:
        raise NotFound(f"Event '{slug}' not found")
    return doc


def get_similar_events_by_slug(slug: str) -> List[Dict]:
    """
    Events sharing at least one tag with the event at `slug`, excluding it.

    Best-effort: backs a non-critical "you might also like" list, so any
    failure (unknown slug, storage down) yields [] instead of raising.
    """
    try:
        event = get_event_by_slug(slug)
        cur = _events().find({"_id": {"$ne": event["_id"]}, "tags": {"$in": event.get("tags", [])}})
        if config.SIMILAR_EVENTS_LIMIT > 0:
            cur = cur.limit(config.SIMILAR_EVENTS_LIMIT)
        return list(cur)
    except Exception as e:
        logger.warning("similar events lookup for %r failed: %s", slug, e)
        return []


def list_events(limit: int = config.DEFAULT_LIST_LIMIT) -> List[Dict]:
    with storage_errors("Event listing failed"):
        cur = _events().find({}).sort("createdAt", DESCENDING).limit(int(limit))
        return list(cur)


def create_event(data: Mapping) -> Dict:
    doc = prepare_event(data)
    now = _utc_now()
    doc["createdAt"] = now
    doc["updatedAt"] = now
    with storage_errors("Event creation failed"):
        try:
            result = _events().insert_one(doc)
        except DuplicateKeyError as e:
            # no suffixing: a colliding slug is a rejected write
            raise DuplicateSlugError(doc["slug"]) from e
    doc["_id"] = result.inserted_id
    logger.info("created event %s (%s)", doc["slug"], doc["_id"])
    return doc


def update_event(slug: str, changes: Mapping) -> Dict:
    """
    Apply `changes` to the event at `slug`. Slug, date and time are only
    re-derived when title, date or time actually change.
    """
    previous = get_event_by_slug(slug)
    doc = prepare_event(changes, previous)
    doc["updatedAt"] = _utc_now()
    with storage_errors("Event update failed"):
        try:
            _events().update_one({"_id": previous["_id"]}, {"$set": doc})
        except DuplicateKeyError as e:
            raise DuplicateSlugError(doc["slug"]) from e
    logger.info("updated event %s", doc["slug"])
    return {**previous, **doc}


def delete_event(slug: str) -> Dict:
    """Delete an event. Bookings referencing it are left in place."""
    event = get_event_by_slug(slug)
    with storage_errors("Event deletion failed"):
        _events().delete_one({"_id": event["_id"]})
    logger.info("deleted event %s", event["slug"])
    return event
