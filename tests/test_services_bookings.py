from __future__ import annotations

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

import eventhub.services.bookings as booking_service
from eventhub.errors import NotFound, ValidationError


def test_booking_for_existing_event(make_event, db):
    event = make_event()

    booking = booking_service.create_booking({"eventId": str(event["_id"]), "email": "Ada@Example.com"})

    stored = db["bookings"].find_one({"_id": booking["_id"]})
    assert stored["eventId"] == event["_id"]
    assert stored["email"] == "ada@example.com"


def test_booking_for_unknown_event_names_the_id(db):
    missing = str(ObjectId())

    with pytest.raises(ValidationError) as exc:
        booking_service.create_booking({"eventId": missing, "email": "ada@example.com"})

    assert exc.value.code == "event_not_found"
    assert missing in exc.value.message
    assert db["bookings"].count_documents({}) == 0


def test_booking_with_malformed_event_id(db):
    with pytest.raises(ValidationError) as exc:
        booking_service.create_booking({"eventId": "not-an-object-id", "email": "ada@example.com"})
    assert exc.value.code == "invalid_event_reference"
    assert exc.value.message == "Invalid event ID format or database error"


def test_booking_reference_check_storage_failure(db, monkeypatch):
    class Broken:
        def find_one(self, *args, **kwargs):
            raise PyMongoError("down")

    monkeypatch.setattr(booking_service, "get_collection", lambda name: Broken())

    with pytest.raises(ValidationError) as exc:
        booking_service.check_event_reference(str(ObjectId()))
    assert exc.value.code == "invalid_event_reference"


def test_booking_with_bad_email_is_rejected(make_event):
    event = make_event()
    with pytest.raises(ValidationError) as exc:
        booking_service.create_booking({"eventId": str(event["_id"]), "email": "nope"})
    assert exc.value.errors[0]["field"] == "email"


def test_update_email_only_skips_reference_check(make_event, monkeypatch):
    event = make_event()
    booking = booking_service.create_booking({"eventId": str(event["_id"]), "email": "ada@example.com"})

    def boom(event_id):
        raise AssertionError("reference check should not run")

    monkeypatch.setattr(booking_service, "check_event_reference", boom)

    updated = booking_service.update_booking(str(booking["_id"]), {"email": "grace@example.com"})
    assert updated["email"] == "grace@example.com"
    assert updated["eventId"] == event["_id"]


def test_update_event_id_rechecks_reference(make_event):
    event = make_event()
    booking = booking_service.create_booking({"eventId": str(event["_id"]), "email": "ada@example.com"})

    with pytest.raises(ValidationError) as exc:
        booking_service.update_booking(str(booking["_id"]), {"eventId": str(ObjectId())})
    assert exc.value.code == "event_not_found"


def test_bookings_survive_event_deletion(make_event, db):
    from eventhub.services.events import delete_event

    event = make_event(title="Short Lived")
    booking_service.create_booking({"eventId": str(event["_id"]), "email": "ada@example.com"})

    delete_event("short-lived")

    assert db["bookings"].count_documents({"eventId": event["_id"]}) == 1


def test_list_and_count_bookings_for_event(make_event):
    event = make_event()
    other = make_event(title="Other Event")
    for email in ("a@example.com", "b@example.com"):
        booking_service.create_booking({"eventId": str(event["_id"]), "email": email})
    booking_service.create_booking({"eventId": str(other["_id"]), "email": "c@example.com"})

    bookings = booking_service.list_bookings_for_event(event["slug"])

    assert {b["email"] for b in bookings} == {"a@example.com", "b@example.com"}
    assert booking_service.count_bookings_for_event(event["_id"]) == 2


def test_get_booking_with_bad_id(db):
    with pytest.raises(NotFound):
        booking_service.get_booking("zzz")
