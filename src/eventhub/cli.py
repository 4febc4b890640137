# src/eventhub/cli.py
from __future__ import annotations

import os
import json
import logging
import argparse
import traceback

from eventhub.api.responses import serialize, serialize_many

# ---------------------------
# Commands
# ---------------------------

def cmd_serve(port: int, host: str, debug: bool):
    from eventhub import config, create_app
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.run(host=host, port=port, debug=debug)


def cmd_db_ping() -> None:
    from eventhub.db.mongo import ping
    ok = ping()
    print("mongo ping:", "ok" if ok else "failed")
    if not ok:
        raise SystemExit(2)


def cmd_db_indexes() -> None:
    from eventhub.db.mongo import ensure_indexes
    n = ensure_indexes()
    print(f"Ensured {n} indexes")


def cmd_event_get(slug: str) -> None:
    from eventhub.services.bookings import count_bookings_for_event
    from eventhub.services.events import get_event_by_slug
    event = get_event_by_slug(slug)
    out = serialize(event)
    out["bookings"] = count_bookings_for_event(event["_id"])
    print(json.dumps(out, indent=2))


def cmd_event_similar(slug: str) -> None:
    from eventhub.services.events import get_similar_events_by_slug
    events = get_similar_events_by_slug(slug)
    print(json.dumps(serialize_many(events), indent=2))


def cmd_event_create(path: str) -> None:
    from eventhub.services.events import create_event
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    event = create_event(data)
    print(f"Created event {event['slug']} ({event['_id']})")


# ---------------------------
# Parser / main
# ---------------------------

def main():
    p = argparse.ArgumentParser(description="Event Hub CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    # serve
    sp = sub.add_parser("serve", help="Run Flask server")
    sp.add_argument("--port", type=int, default=int(os.getenv("PORT", "8080")))
    sp.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    sp.add_argument("--debug", action="store_true")
    sp.set_defaults(func=lambda a: cmd_serve(a.port, a.host, a.debug))

    # db
    sc = sub.add_parser("db", help="Database utilities")
    sc_sub = sc.add_subparsers(dest="dbcmd", required=True)
    scp = sc_sub.add_parser("ping", help="Ping MongoDB")
    scp.set_defaults(func=lambda a: cmd_db_ping())
    sci = sc_sub.add_parser("indexes", help="Create event/booking indexes")
    sci.set_defaults(func=lambda a: cmd_db_indexes())

    # events
    ev = sub.add_parser("events", help="Event utilities")
    ev_sub = ev.add_subparsers(dest="evcmd", required=True)
    evg = ev_sub.add_parser("get", help="Print one event by slug")
    evg.add_argument("slug")
    evg.set_defaults(func=lambda a: cmd_event_get(a.slug))
    evs = ev_sub.add_parser("similar", help="Print events sharing a tag with <slug>")
    evs.add_argument("slug")
    evs.set_defaults(func=lambda a: cmd_event_similar(a.slug))
    evc = ev_sub.add_parser("create", help="Create an event from a JSON file")
    evc.add_argument("path")
    evc.set_defaults(func=lambda a: cmd_event_create(a.path))

    args = p.parse_args()
    try:
        return args.func(args)
    except Exception as e:
        # Surface trace on CLI errors
        print("ERROR:", e)
        traceback.print_exc()
        raise SystemExit(1)


if __name__ == "__main__":
    main()
