from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from eventhub import config
from eventhub.api.responses import serialize, serialize_many, storage_error_response
from eventhub.errors import NotFound, StorageError
from eventhub.services import bookings as booking_service
from eventhub.services import events as event_service

bp = Blueprint("api_events", __name__)

logger = logging.getLogger(__name__)


def _parse_limit(default: int) -> int:
    try:
        n = int(request.args.get("limit", default))
        return max(1, min(n, 500))
    except (TypeError, ValueError):
        return default


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@bp.get("/events")
def list_events():
    """
    GET /api/events?limit=50
    Most recently created events first.
    """
    events = event_service.list_events(limit=_parse_limit(config.DEFAULT_LIST_LIMIT))
    return jsonify({"message": "Events fetched successfully", "events": serialize_many(events)})


@bp.post("/events")
def create_event():
    event = event_service.create_event(_json_body())
    return jsonify({"message": "Event created successfully", "event": serialize(event)}), 201


@bp.get("/events/<slug>")
def get_event(slug: str):
    """
    GET /api/events/<slug>
    400 on a blank slug, 404 if no event matches, 500 on database failures.
    """
    if not slug or not slug.strip():
        return jsonify({"message": "Invalid or missing slug parameter"}), 400

    try:
        event = event_service.get_event_by_slug(slug)
    except NotFound:
        return jsonify({"message": "Event not found"}), 404
    except StorageError as e:
        if config.FLASK_ENV == "development":
            logger.error("Error fetching event by slug: %s", e)
        return storage_error_response(e, "Event fetching failed")

    return jsonify({"message": "Event fetched successfully", "event": serialize(event)})


@bp.patch("/events/<slug>")
def update_event(slug: str):
    event = event_service.update_event(slug, _json_body())
    return jsonify({"message": "Event updated successfully", "event": serialize(event)})


@bp.delete("/events/<slug>")
def delete_event(slug: str):
    event = event_service.delete_event(slug)
    return jsonify({"message": "Event deleted successfully", "event": serialize(event)})


@bp.get("/events/<slug>/similar")
def similar_events(slug: str):
    """
    GET /api/events/<slug>/similar
    Never fails: unknown slugs and database errors give an empty list.
    """
    events = event_service.get_similar_events_by_slug(slug)
    return jsonify({"message": "Similar events fetched successfully", "events": serialize_many(events)})


@bp.get("/events/<slug>/bookings")
def event_bookings(slug: str):
    bookings = booking_service.list_bookings_for_event(slug)
    return jsonify({
        "message": "Bookings fetched successfully",
        "bookings": serialize_many(bookings),
        "count": len(bookings),
    })
