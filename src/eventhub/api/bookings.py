from __future__ import annotations

from flask import Blueprint, jsonify, request

from eventhub.api.responses import serialize
from eventhub.services import bookings as booking_service

bp = Blueprint("api_bookings", __name__)


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@bp.post("/bookings")
def create_booking():
    """
    POST /api/bookings {"eventId": "...", "email": "..."}
    400 if the event does not exist, the id is malformed or the email is invalid.
    """
    booking = booking_service.create_booking(_json_body())
    return jsonify({"message": "Booking created successfully", "booking": serialize(booking)}), 201


@bp.get("/bookings/<booking_id>")
def get_booking(booking_id: str):
    booking = booking_service.get_booking(booking_id)
    return jsonify({"message": "Booking fetched successfully", "booking": serialize(booking)})


@bp.patch("/bookings/<booking_id>")
def update_booking(booking_id: str):
    booking = booking_service.update_booking(booking_id, _json_body())
    return jsonify({"message": "Booking updated successfully", "booking": serialize(booking)})
