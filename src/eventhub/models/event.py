"""
Event entity: field rules, normalization and index declarations.

Writes go through an explicit pipeline instead of a persistence hook:

    changes  = changed_fields(incoming, previous)
    record   = validate_event(previous + incoming)
    record   = normalize_event(record, changes, is_new)
    -> persisted by eventhub.services.events

Normalizers only run for fields in the change-set, so an unrelated update
never re-parses the stored date or time.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Mapping, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventhub.errors import InvalidFormat, ValidationError
from eventhub.models.changes import changed_fields
from eventhub.models.indexes import ASC, IndexSpec
from eventhub.models.validation import run_validation
from eventhub.normalize import normalize_date, normalize_time, slugify


class EventMode(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


class EventFields(BaseModel):
    """User-supplied event fields. slug and timestamps are never accepted from input."""

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    overview: str = Field(min_length=1, max_length=500)
    image: str = Field(min_length=1)
    venue: str = Field(min_length=1)
    location: str = Field(min_length=1)
    date: str = Field(min_length=1)
    time: str = Field(min_length=1)
    mode: EventMode
    audience: str = Field(min_length=1)
    agenda: List[str] = Field(min_length=1)
    organizer: str = Field(min_length=1)
    tags: List[str] = Field(min_length=1)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, tags: List[str]) -> List[str]:
        # keep first occurrence order
        return list(dict.fromkeys(tags))


EVENT_FIELDS = tuple(EventFields.model_fields)

EVENT_INDEXES = [
    IndexSpec(keys=[("slug", ASC)], unique=True),
    IndexSpec(keys=[("date", ASC), ("mode", ASC)]),
]

_LABELS = {
    "title": "Title",
    "description": "Description",
    "overview": "Overview",
    "image": "Image URL",
    "venue": "Venue",
    "location": "Location",
    "date": "Date",
    "time": "Time",
    "mode": "Mode",
    "audience": "Audience",
    "agenda": "Agenda",
    "organizer": "Organizer",
    "tags": "At least one tag",
}

EVENT_MESSAGES: Dict = {
    (field, kind): f"{label} is required"
    for field, label in _LABELS.items()
    for kind in ("missing", "string_type", "string_too_short", "list_type")
}
EVENT_MESSAGES.update({
    ("title", "string_too_long"): "Title must be less than 100 characters",
    ("description", "string_too_long"): "Description must be less than 1000 characters",
    ("overview", "string_too_long"): "Overview must be less than 500 characters",
    ("mode", "enum"): "Mode must be either online, offline, or hybrid",
    ("agenda", "too_short"): "Agenda must have at least one item",
    ("tags", "too_short"): "There must be at least one tag",
})


def validate_event(record: Mapping) -> Dict:
    """Field rules only; every violation is reported in one ValidationError."""
    fields = run_validation(EventFields, record, EVENT_MESSAGES, "Event")
    return fields.model_dump()


def normalize_event(record: Mapping, changes: Set[str], is_new: bool) -> Dict:
    out = dict(record)
    errors: List[Dict[str, str]] = []

    if is_new or "title" in changes:
        slug = slugify(out["title"])
        if not slug:
            errors.append({"field": "title", "message": "Title must contain at least one letter or digit"})
        out["slug"] = slug

    if "date" in changes:
        try:
            out["date"] = normalize_date(out["date"])
        except InvalidFormat as e:
            errors.append({"field": "date", "message": str(e)})

    if "time" in changes:
        try:
            out["time"] = normalize_time(out["time"])
        except InvalidFormat as e:
            errors.append({"field": "time", "message": str(e)})

    if errors:
        raise ValidationError("Event validation failed", errors=errors)
    return out


def prepare_event(incoming: Mapping, previous: Optional[Mapping] = None) -> Dict:
    """
    Run validate -> normalize for an event write.

    `previous` is the stored document for updates (None on create). Returns
    the full record to persist, including the derived slug.
    """
    changes = changed_fields(incoming, previous, EVENT_FIELDS)

    merged: Dict = {}
    if previous is not None:
        merged.update({f: previous[f] for f in EVENT_FIELDS if f in previous})
    merged.update({f: incoming[f] for f in EVENT_FIELDS if f in incoming})

    record = validate_event(merged)
    if previous is not None and "slug" in previous:
        record["slug"] = previous["slug"]
    return normalize_event(record, changes, is_new=previous is None)
