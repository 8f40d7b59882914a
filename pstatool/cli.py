"""CLI entrypoints for pstatool commands."""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from .card import render_card
from .config import ConfigError, Settings, check_interval, load_settings
from .logging import configure_logging, get_logger
from .models import ClocData, Project
from .orchestrator import Orchestrator
from .stores import ProjectStore


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pstatool",
        description="Render language statistics cards for tracked repositories.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to pstatool.yml (or the directory containing it).",
    )
    parser.add_argument("--db-path", type=Path, help="SQLite database file (or set DB_PATH).")
    parser.add_argument("--svg-folder", type=Path, help="Output folder for cards (or set SVG_FOLDER).")
    parser.add_argument(
        "--temp-folder", type=Path, help="Scratch folder for checkouts (or set TEMP_FOLDER)."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Update the cards of every tracked project.")
    _add_verbose_option(run_parser, suppress_default=True)
    run_parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Repeat every N hours instead of running once (or set INTERVAL).",
    )

    render_parser = subparsers.add_parser(
        "render", help="Render a card from a saved `cloc --json` report."
    )
    _add_verbose_option(render_parser, suppress_default=True)
    render_parser.add_argument("report", type=Path, help="Path to the cloc JSON report.")
    render_parser.add_argument("--title", required=True, help="Project title shown on the card.")
    render_parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Write the SVG here instead of stdout."
    )

    add_parser = subparsers.add_parser("add", help="Add or update a tracked project.")
    _add_verbose_option(add_parser, suppress_default=True)
    add_parser.add_argument("user", help="GitHub user or organisation.")
    add_parser.add_argument("project", help="Repository name.")
    add_parser.add_argument("--title", default=None, help="Card title (defaults to the repository name).")
    add_parser.add_argument("--ignored-dirs", default=None, help="Comma-separated extra directories to skip.")
    add_parser.add_argument("--ignored-langs", default=None, help="Comma-separated extra languages to skip.")

    serve_parser = subparsers.add_parser("serve", help="Serve written cards over HTTP.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    if args.db_path is not None:
        settings.db_path = args.db_path
    if args.svg_folder is not None:
        settings.svg_folder = args.svg_folder
    if args.temp_folder is not None:
        settings.temp_folder = args.temp_folder
    interval = getattr(args, "interval", None)
    if interval is not None:
        settings.interval_hours = check_interval(interval, "--interval")
    return settings


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for pstatool commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    try:
        settings = _resolve_settings(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "render":
        try:
            payload = json.loads(args.report.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            parser.exit(1, f"Unable to read cloc report {args.report}: {exc}\n")
        if not isinstance(payload, dict):
            parser.exit(1, f"{args.report} is not a cloc JSON report\n")
        svg = render_card(args.title, ClocData.from_dict(payload))
        if args.output is None:
            sys.stdout.write(svg)
        else:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(svg, encoding="utf-8")
            print(f"Card written to {args.output}")
    elif args.command == "add":
        store = ProjectStore(settings.db_path)
        store.init()
        project = Project(
            github_user=args.user,
            project_name=args.project,
            title=args.title or args.project,
            ignored_dirs=args.ignored_dirs,
            ignored_langs=args.ignored_langs,
        )
        existing = store.find_project(args.user, args.project)
        store.add_project(project)
        verb = "Updated" if existing is not None else "Tracking"
        print(f"{verb} {args.user}/{args.project}")
    elif args.command == "run":
        store = ProjectStore(settings.db_path)
        store.init()
        orchestrator = Orchestrator(settings, store=store)
        if settings.interval_hours is None:
            orchestrator.process_all_projects()
            return
        logger.info("Running every %s hour(s)...", settings.interval_hours)
        while True:
            orchestrator.process_all_projects()
            time.sleep(settings.interval_hours * 60 * 60)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port, settings=settings)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
