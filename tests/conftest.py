import os
import pytest
import mongomock

# Keep the real DB out of tests; mongomock is swapped in below
os.environ.setdefault("MONGODB_URI", "")
os.environ.setdefault("MONGO_DB", "eventhub_test")
os.environ.setdefault("FLASK_ENV", "testing")

import eventhub.db.mongo as mongo_mod  # noqa: E402
from eventhub import create_app  # noqa: E402


@pytest.fixture()
def mock_client(monkeypatch):
    client = mongomock.MongoClient()
    monkeypatch.setattr(mongo_mod, "_CLIENT", client, raising=True)
    return client


@pytest.fixture()
def db(mock_client):
    mongo_mod.ensure_indexes()
    return mongo_mod.get_db()


@pytest.fixture()
def app(db):
    return create_app(testing=True)


@pytest.fixture()
def app_client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture()
def event_data():
    return {
        "title": "PyCon Lisbon 2025",
        "description": "Three days of talks and sprints.",
        "overview": "Community Python conference.",
        "image": "https://example.com/pycon.png",
        "venue": "Centro de Congressos",
        "location": "Lisbon, Portugal",
        "date": "2025-06-12",
        "time": "9:30 AM",
        "mode": "hybrid",
        "audience": "Developers",
        "agenda": ["Keynote", "Talks", "Sprints"],
        "organizer": "PSF Europe",
        "tags": ["python", "conference"],
    }


@pytest.fixture()
def make_event(db, event_data):
    from eventhub.services.events import create_event

    def _make(**overrides):
        return create_event({**event_data, **overrides})

    return _make
