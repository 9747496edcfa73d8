"""Command-line entry point for Wayfinder."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Sequence

from wayfinder.exceptions import WayfinderError
from wayfinder.tools.tool_manager import ACTION_MODELS, FileSystemTools
from wayfinder.utils.settings import load_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
LOGGER = logging.getLogger(__name__)


def configure_logging(console_level: int | str = logging.WARNING, logs_root: Path | None = None) -> None:
    """Configure application-wide structured logging outputs."""
    if getattr(configure_logging, "_configured", False):
        return

    logs_root = logs_root or Path.home() / ".wayfinder" / "logs"
    logs_root.mkdir(parents=True, exist_ok=True)
    log_path = logs_root / "wayfinder.log"

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    root_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    configure_logging._configured = True  # type: ignore[attr-defined]


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wayfinder",
        description="Explore a directory tree while respecting .gitignore rules.",
    )
    parser.add_argument("action", nargs="?", help=f"One of: {', '.join(ACTION_MODELS)}.")
    parser.add_argument("path", nargs="?", default=None, help="Target path. Defaults to the current directory.")
    parser.add_argument("--pattern", default="", help="Glob for 'find'; separate alternatives with |.")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Extra exclusion glob for 'find' (repeatable).",
    )
    parser.add_argument("--max-depth", type=_positive_int, default=None, help="Depth limit for 'tree'.")
    parser.add_argument("--include-hidden", action="store_true", help="Include dotfiles and dot-directories.")
    parser.add_argument("--include-size", action="store_true", help="Show file sizes for 'list' and 'tree'.")
    parser.add_argument("--no-gitignore", action="store_true", help="Do not filter by .gitignore rules.")
    parser.add_argument("--json", action="store_true", help="Print the full structured result as JSON.")
    parser.add_argument("--schema", action="store_true", help="Print the tool schema and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log INFO messages to the console.")
    return parser


def _params_for(args: argparse.Namespace) -> dict[str, Any]:
    params: dict[str, Any] = {"path": args.path}
    if args.action in {"list", "tree", "stats", "find"}:
        params["includeHidden"] = args.include_hidden
        params["respectGitignore"] = not args.no_gitignore
    if args.action in {"list", "tree"}:
        params["includeSize"] = args.include_size
    if args.action == "tree" and args.max_depth is not None:
        params["maxDepth"] = args.max_depth
    if args.action == "find":
        params["pattern"] = args.pattern
        params["excludePatterns"] = args.exclude
    return params


def run(argv: Sequence[str] | None = None) -> int:
    """Run one action and print its result; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    configure_logging(logging.INFO if args.verbose else settings.get("log_level", logging.WARNING))

    tools = FileSystemTools.from_settings(settings=settings)
    if args.schema:
        print(json.dumps(tools.tool_schema(), indent=2))
        return 0
    if not args.action:
        parser.error("an action is required")

    try:
        result = tools.execute(args.action, **_params_for(args))
    except WayfinderError as exc:
        payload = exc.to_dict()
        if args.json:
            print(json.dumps(payload, indent=2))
        else:
            print(f"Error: {exc.message}", file=sys.stderr)
            if exc.suggestion:
                print(exc.suggestion, file=sys.stderr)
        return 2

    if args.json or result.get("error"):
        print(json.dumps(result, indent=2, default=str))
        return 2 if result.get("error") else 0
    print(result.get("formatted") or result.get("formattedInfo") or result.get("content") or "")
    if result.get("warning"):
        print(f"Warning: {result['warning']}", file=sys.stderr)
    return 0


def main() -> None:
    """Launch the Wayfinder command line."""
    try:
        exit_code = run()
    except Exception:  # noqa: BLE001
        logging.getLogger("wayfinder").exception("Wayfinder terminated unexpectedly")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
