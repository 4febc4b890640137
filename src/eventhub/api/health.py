from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, jsonify

from eventhub import config
from eventhub.db.mongo import ping

bp = Blueprint("api_health", __name__)


@bp.get("/health")
def health():
    db_ok = ping()
    now = datetime.now(timezone.utc).isoformat()

    return jsonify({
        "ok": True,
        "time_utc": now,
        "env": config.FLASK_ENV,
        "config": {
            "mongo_db": config.MONGO_DB,
            "cors_origins": config.CORS_ORIGINS,
        },
        "db": {
            "ping": db_ok,
        },
    })
