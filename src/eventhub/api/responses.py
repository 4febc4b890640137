from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from bson import ObjectId
from flask import jsonify

from eventhub.errors import DatabaseConnectionError, StorageError


def serialize(value: Any) -> Any:
    """Make Mongo documents JSON friendly: ObjectId -> hex, datetime -> ISO-8601."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


def serialize_many(docs: List[Dict]) -> List[Dict]:
    return [serialize(d) for d in docs]


def storage_error_response(e: StorageError, failure_message: str):
    if isinstance(e, DatabaseConnectionError):
        return jsonify({"message": "Database connection error"}), 500
    return jsonify({"message": failure_message, "error": str(e)}), 500
