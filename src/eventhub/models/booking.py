from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Set, Tuple

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventhub.models.changes import changed_fields
from eventhub.models.indexes import ASC, DESC, IndexSpec
from eventhub.models.validation import run_validation

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class BookingFields(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    event_id: str = Field(alias="eventId", min_length=1)
    email: str = Field(min_length=1)

    @field_validator("event_id", mode="before")
    @classmethod
    def _object_id_to_str(cls, v):
        if isinstance(v, ObjectId):
            return str(v)
        return v

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v: str) -> str:
        v = v.lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Please provide a valid email address")
        return v


BOOKING_FIELDS = ("eventId", "email")

BOOKING_INDEXES = [
    IndexSpec(keys=[("eventId", ASC)]),
    IndexSpec(keys=[("eventId", ASC), ("createdAt", DESC)]),
    IndexSpec(keys=[("email", ASC)]),
]

BOOKING_MESSAGES: Dict = {
    ("eventId", "missing"): "Event ID is required",
    ("eventId", "string_type"): "Event ID is required",
    ("eventId", "string_too_short"): "Event ID is required",
    ("email", "missing"): "Email is required",
    ("email", "string_type"): "Email is required",
    ("email", "string_too_short"): "Email is required",
}


def validate_booking(record: Mapping) -> Dict:
    fields = run_validation(BookingFields, record, BOOKING_MESSAGES, "Booking")
    return fields.model_dump(by_alias=True)


def prepare_booking(incoming: Mapping, previous: Optional[Mapping] = None) -> Tuple[Dict, Set[str]]:
    """
    Validate a booking write and report which fields it changes.

    The caller must run the event reference check when "eventId" is in the
    returned change-set, before persisting.
    """
    stored: Optional[Dict] = None
    if previous is not None:
        stored = {f: previous[f] for f in BOOKING_FIELDS if f in previous}
        if "eventId" in stored:
            stored["eventId"] = str(stored["eventId"])

    candidate = {f: incoming[f] for f in BOOKING_FIELDS if f in incoming}
    if isinstance(candidate.get("eventId"), ObjectId):
        candidate["eventId"] = str(candidate["eventId"])

    changes = changed_fields(candidate, stored, BOOKING_FIELDS)
    record = validate_booking({**(stored or {}), **candidate})
    return record, changes
