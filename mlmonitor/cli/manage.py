# =============================================================================
# mlmonitor/cli/manage.py - Operator CLI
# =============================================================================
#
# Subcommands:
#
#   init-db - create the SQLite schema at the configured DB_PATH
#   demo    - record a sample inference, attach feedback, and print both
#             back (an end-to-end smoke check against the configured store)
#   serve   - run the HTTP API under uvicorn
#
# Usage examples:
#   python -m mlmonitor.cli init-db --db-path data/mlmonitor.db
#   python -m mlmonitor.cli demo
#   STORE_BACKEND=memory python -m mlmonitor.cli demo
#   python -m mlmonitor.cli serve --port 9000
#   python -m mlmonitor.cli --config config/staging.yaml serve
# =============================================================================

"""Standalone CLI for mlmonitor storage and server management."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from mlmonitor.config.loader import load_config, settings_from_config
from mlmonitor.config.settings import Settings
from mlmonitor.utils.errors import MLMonitorError
from mlmonitor.utils.logging import configure_logging


def _resolve_settings(args: argparse.Namespace) -> Settings:
    app_settings = settings_from_config(load_config(args.config))
    overrides = {}
    if getattr(args, "db_path", None):
        overrides["db_path"] = args.db_path
    if getattr(args, "backend", None):
        overrides["store_backend"] = args.backend
    if overrides:
        app_settings = app_settings.model_copy(update=overrides)
    return app_settings


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _cmd_init_db(app_settings: Settings) -> int:
    from mlmonitor.providers.sqlite import SQLiteDatabase

    database = SQLiteDatabase(db_path=app_settings.db_path)
    await database.initialize()
    print(f"Database ready at {database.db_path}")
    return 0


async def _cmd_demo(app_settings: Settings) -> int:
    # Deferred: importing main builds the module-level app and reconfigures
    # logging from the default config.
    from mlmonitor.main import build_components

    configure_logging(app_settings)
    components = build_components(app_settings)
    await components["database"].initialize()

    inference_service = components["inference_service"]
    feedback_service = components["feedback_service"]

    inference = await inference_service.record_inference(
        model_name="example_model",
        model_version="1.0.0",
        input_data={"input": "some input data"},
        output_data={"output": "some output data"},
    )
    print(f"Inserted inference with ID: {inference.id}")

    feedback = await feedback_service.submit_feedback(
        inference.id,
        {"corrected_output": "the correct output"},
    )
    print(f"Inserted feedback {feedback.id} for inference ID: {inference.id}")

    fetched = await inference_service.get_inference(inference.id)
    all_feedback = await feedback_service.list_feedback(inference.id)

    print("Fetched inference:")
    print(fetched.model_dump_json(indent=2))
    print(f"Feedback for inference {inference.id}:")
    print(json.dumps([fb.model_dump(mode="json") for fb in all_feedback], indent=2))
    return 0


def _cmd_serve(app_settings: Settings) -> int:
    import uvicorn

    from mlmonitor.main import create_app

    # Served app carries the settings resolved from --config and overrides.
    application = create_app(app_settings=app_settings)
    uvicorn.run(
        application,
        host=app_settings.app_host,
        port=app_settings.app_port,
    )
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mlmonitor",
        description="Manage the mlmonitor inference/feedback store and API server.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to the YAML config file (default: config/config.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init_db = sub.add_parser("init-db", help="Create the SQLite schema")
    init_db.add_argument("--db-path", help="Override DB_PATH")

    demo = sub.add_parser("demo", help="Record a sample inference and feedback")
    demo.add_argument("--db-path", help="Override DB_PATH")
    demo.add_argument("--backend", choices=["sqlite", "memory"], help="Override STORE_BACKEND")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Override APP_HOST")
    serve.add_argument("--port", type=int, help="Override APP_PORT")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    app_settings = _resolve_settings(args)
    configure_logging(app_settings)

    try:
        if args.command == "init-db":
            return asyncio.run(_cmd_init_db(app_settings))
        if args.command == "demo":
            return asyncio.run(_cmd_demo(app_settings))
        if args.command == "serve":
            if args.host:
                app_settings = app_settings.model_copy(update={"app_host": args.host})
            if args.port:
                app_settings = app_settings.model_copy(update={"app_port": args.port})
            return _cmd_serve(app_settings)
    except MLMonitorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command {args.command!r}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
