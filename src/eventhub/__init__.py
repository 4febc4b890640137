from flask import Flask
from flask_cors import CORS

from eventhub import config


def create_app(testing: bool = False) -> Flask:
    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["TESTING"] = testing
    CORS(app, origins=config.CORS_ORIGINS)

    # Ensure DB indexes early (safe to run multiple times)
    from eventhub.db.mongo import ensure_indexes
    n = ensure_indexes(app.logger)
    app.logger.info("[create_app] %d indexes ensured", n)

    from eventhub.api import register_api
    register_api(app)

    return app
