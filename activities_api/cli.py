"""
Activities API command line

Commands:
  init        Create the activities table in the configured database
  seed        Insert the sample activities (foot, volley, racing)
  list        Print activities, optionally filtered by name and capped by --limit
  serve       Run the HTTP API with uvicorn

Notes:
- The database path comes from ACTIVITIES_DB_PATH / config.yaml unless --db is given.
- `list` goes through the same validation as GET /api/activities.
"""
from __future__ import annotations

import argparse
import json
import os
import sys

from .config import get_log_level
from .db import ensure_schema, get_db_path
from .errors import ActivityError
from .logs import setup_logging
from .services.activity_store import SqliteActivityStore
from .services.activity_svc import list_activities

SAMPLE_ACTIVITIES = [
    {"name": "foot", "start_date": "2025-04-06", "duration": "1h30"},
    {"name": "volley", "start_date": "2024-11-06", "duration": "4h"},
    {"name": "racing", "start_date": "2025-03-06", "duration": "3h"},
]


def cmd_init(args):
    path = args.db or get_db_path()
    ensure_schema(path)
    print(f"schema ready in {path}")


def cmd_seed(args):
    store = SqliteActivityStore(args.db)
    ensure_schema(args.db)
    for item in SAMPLE_ACTIVITIES:
        a = store.create(item["name"], item["start_date"], item["duration"])
        print(f"created #{a.id} {a.name}")


def cmd_list(args):
    store = SqliteActivityStore(args.db)
    items = list_activities(store, args.name, args.limit)
    print(json.dumps({"activities": items}, ensure_ascii=False, indent=2))


def cmd_serve(args):
    import uvicorn

    if args.db:
        os.environ["ACTIVITIES_DB_PATH"] = args.db
    print(f"Activities API listening at http://{args.host}:{args.port}")
    print(f"Swagger documentation at http://{args.host}:{args.port}/api-docs")
    uvicorn.run("activities_api.api:app", host=args.host, port=args.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="activities-api", description="Activities API (SQLite + FastAPI)")
    parser.add_argument("--db", default=None, help="SQLite file (overrides config)")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create the activities table")
    p_init.set_defaults(func=cmd_init)

    p_seed = sub.add_parser("seed", help="insert sample activities")
    p_seed.set_defaults(func=cmd_seed)

    p_list = sub.add_parser("list", help="print activities")
    p_list.add_argument("--name", required=False, help="name filter, at least 3 characters")
    p_list.add_argument("--limit", required=False)
    p_list.set_defaults(func=cmd_list)

    p_serve = sub.add_parser("serve", help="run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=int(os.environ.get("PORT") or 3000))
    p_serve.set_defaults(func=cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(get_log_level())
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        args.func(args)
    except ActivityError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
