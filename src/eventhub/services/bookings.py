from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from eventhub import config
from eventhub.db.mongo import get_collection, storage_errors
from eventhub.errors import NotFound, StorageError, ValidationError
from eventhub.models.booking import prepare_booking
from eventhub.services.events import get_event_by_slug

logger = logging.getLogger(__name__)


def _bookings():
    return get_collection(config.BOOKINGS_COLLECTION)


def check_event_reference(event_id: str) -> ObjectId:
    """
    Make sure `event_id` names an existing event and return it as an ObjectId.

    Both failure modes raise ValidationError; `code` separates a missing event
    ("event_not_found") from a malformed id or storage failure
    ("invalid_event_reference").
    """
    try:
        oid = ObjectId(event_id)
        found = get_collection(config.EVENTS_COLLECTION).find_one({"_id": oid}, {"_id": 1})
    except (InvalidId, TypeError, PyMongoError, StorageError) as e:
        logger.warning("event reference check for %r failed: %s", event_id, e)
        raise ValidationError(
            "Invalid event ID format or database error",
            errors=[{"field": "eventId", "message": "Invalid event ID format or database error"}],
            code="invalid_event_reference",
        ) from e

    if found is None:
        msg = f"Event with ID {event_id} does not exist"
        raise ValidationError(msg, errors=[{"field": "eventId", "message": msg}], code="event_not_found")
    return oid


def create_booking(data: Mapping) -> Dict:
    record, _ = prepare_booking(data)
    doc = {"eventId": check_event_reference(record["eventId"]), "email": record["email"]}
    now = datetime.now(timezone.utc)
    doc["createdAt"] = now
    doc["updatedAt"] = now
    with storage_errors("Booking creation failed"):
        result = _bookings().insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info("created booking %s for event %s", doc["_id"], doc["eventId"])
    return doc


def get_booking(booking_id: str) -> Dict:
    try:
        oid = ObjectId(booking_id)
    except (InvalidId, TypeError) as e:
        raise NotFound(f"Booking '{booking_id}' not found") from e
    with storage_errors("Booking lookup failed"):
        doc = _bookings().find_one({"_id": oid})
    if doc is None:
        raise NotFound(f"Booking '{booking_id}' not found")
    return doc


def update_booking(booking_id: str, changes: Mapping) -> Dict:
    """The event reference is only re-checked when eventId actually changes."""
    previous = get_booking(booking_id)
    record, changed = prepare_booking(changes, previous)

    update: Dict = {"email": record["email"], "updatedAt": datetime.now(timezone.utc)}
    if "eventId" in changed:
        update["eventId"] = check_event_reference(record["eventId"])

    with storage_errors("Booking update failed"):
        _bookings().update_one({"_id": previous["_id"]}, {"$set": update})
    return {**previous, **update}


def list_bookings_for_event(slug: str) -> List[Dict]:
    """Bookings for the event at `slug`, newest first. Raises NotFound for an unknown slug."""
    event = get_event_by_slug(slug)
    with storage_errors("Booking listing failed"):
        cur = _bookings().find({"eventId": event["_id"]}).sort("createdAt", DESCENDING)
        return list(cur)


def count_bookings_for_event(event_id: ObjectId) -> int:
    with storage_errors("Booking count failed"):
        return _bookings().count_documents({"eventId": event_id})
