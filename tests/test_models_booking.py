from __future__ import annotations

import pytest
from bson import ObjectId

from eventhub.errors import ValidationError
from eventhub.models.booking import BOOKING_INDEXES, prepare_booking


def test_email_is_trimmed_and_lowercased():
    record, changes = prepare_booking({"eventId": str(ObjectId()), "email": "  Ada@Example.COM "})
    assert record["email"] == "ada@example.com"
    assert changes == {"eventId", "email"}


@pytest.mark.parametrize("email", ["plainaddress", "a@b", "@example.com", "ada@example.c", "ada lovelace@example.com"])
def test_malformed_email_is_rejected(email):
    with pytest.raises(ValidationError) as exc:
        prepare_booking({"eventId": str(ObjectId()), "email": email})
    assert exc.value.errors == [{"field": "email", "message": "Please provide a valid email address"}]


def test_missing_fields_are_all_reported():
    with pytest.raises(ValidationError) as exc:
        prepare_booking({})
    assert {e["message"] for e in exc.value.errors} == {"Event ID is required", "Email is required"}


def test_object_id_input_is_accepted():
    oid = ObjectId()
    record, _ = prepare_booking({"eventId": oid, "email": "ada@example.com"})
    assert record["eventId"] == str(oid)


def test_unchanged_event_id_is_not_in_change_set():
    oid = ObjectId()
    previous = {"_id": ObjectId(), "eventId": oid, "email": "ada@example.com"}

    _, changes = prepare_booking({"eventId": str(oid), "email": "grace@example.com"}, previous)

    assert changes == {"email"}


def test_index_declarations():
    assert [spec.keys for spec in BOOKING_INDEXES] == [
        [("eventId", 1)],
        [("eventId", 1), ("createdAt", -1)],
        [("email", 1)],
    ]
