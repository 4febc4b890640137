from __future__ import annotations

import importlib

from flask import Blueprint, jsonify

from eventhub.api.responses import storage_error_response
from eventhub.errors import DuplicateSlugError, NotFound, StorageError, ValidationError

API_MODULES = [
    "health",
    "events",
    "bookings",
]


def register_error_handlers(app):
    @app.errorhandler(DuplicateSlugError)
    def _duplicate(e: DuplicateSlugError):
        return jsonify(e.to_dict()), 409

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(NotFound)
    def _not_found(e: NotFound):
        return jsonify({"message": str(e)}), 404

    @app.errorhandler(StorageError)
    def _storage(e: StorageError):
        app.logger.error("storage failure: %s", e)
        return storage_error_response(e, "Request failed")


def register_api(app):
    api_bp = Blueprint("api", __name__, url_prefix="/api")

    for name in API_MODULES:
        mod = importlib.import_module(f"{__name__}.{name}")
        api_bp.register_blueprint(mod.bp)

    app.register_blueprint(api_bp)
    register_error_handlers(app)
