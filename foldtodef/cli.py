"""Command-line front door for foldtodef.

``fold`` reads an LSP-shaped outline document and prints the lines that fold
down to definitions. ``config`` shows and updates the persisted settings.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from . import settings
from .folding.config import SETTING_FIELDS, FoldConfig, coerce_setting, config_to_mapping
from .folding.lines import FoldPlan
from .lsp import OutlineError, read_outline
from .session import FoldSession, RecordingFoldExecutor, StaticOutlineProvider

_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off"}


def _setting_assignment(value: str) -> tuple[str, object]:
    """argparse type for ``KEY=VALUE`` setting overrides."""
    key, sep, raw = value.partition("=")
    key = key.strip()
    if not sep:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    if key not in SETTING_FIELDS:
        raise argparse.ArgumentTypeError(
            f"unknown setting {key!r} (expected one of: {', '.join(SETTING_FIELDS)})"
        )
    raw = raw.strip()
    if key == "foldClassAndInterface":
        parsed: object = raw
    elif raw.casefold() in _TRUE_WORDS:
        parsed = True
    elif raw.casefold() in _FALSE_WORDS:
        parsed = False
    else:
        raise argparse.ArgumentTypeError(f"{key} expects true or false, got {raw!r}")
    try:
        return key, coerce_setting(key, parsed)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def apply_overrides(config: FoldConfig, overrides: list[tuple[str, object]]) -> FoldConfig:
    """Return ``config`` with validated ``(key, value)`` overrides applied."""
    for key, value in overrides:
        config = replace(config, **{SETTING_FIELDS[key]: value})
    return config


def format_plan(plan: FoldPlan, uri: str, output_format: str) -> str:
    """Render a fold plan as newline-separated lines or a JSON object."""
    if output_format == "json":
        payload = {
            "uri": uri,
            "lines": list(plan.lines),
            "symbols": [
                {"name": symbol.name, "kind": symbol.kind_label, "line": symbol.start_line}
                for symbol in plan.symbols
            ],
        }
        return json.dumps(payload, indent=2) + "\n"
    return "".join(f"{line}\n" for line in plan.lines)


def _run_fold(args: argparse.Namespace) -> int:
    try:
        outline = read_outline(args.outline)
    except FileNotFoundError:
        raise SystemExit(f"Path not found: {args.outline}")
    except OutlineError as exc:
        raise SystemExit(f"Invalid outline: {exc}")
    except OSError as exc:
        raise SystemExit(f"Failed to read outline: {exc}")

    def load_config() -> FoldConfig:
        return apply_overrides(settings.load_settings(args.config), args.overrides)

    executor = RecordingFoldExecutor()
    provider = StaticOutlineProvider([outline])
    session = FoldSession(provider, provider, executor, settings_loader=load_config)
    plan = session.fold_to_definitions(outline.uri)
    if plan.is_empty:
        sys.stderr.write("Nothing to fold.\n")
        return 0
    sys.stdout.write(format_plan(plan, outline.uri, args.format))
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = settings.load_settings(args.config)
    for key, value in args.overrides:
        config = settings.update_setting(key, getattr(value, "value", value), args.config)
    sys.stdout.write(json.dumps(config_to_mapping(config), indent=2) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foldtodef",
        description="Fold a document down to its top-level definitions.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log folding decisions to stderr.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Settings file (default: {settings.DEFAULT_CONFIG_PATH}).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fold_parser = subparsers.add_parser("fold", help="Print the lines to fold for an outline document.")
    fold_parser.add_argument("outline", help="Outline JSON file, or '-' for stdin.")
    fold_parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        type=_setting_assignment,
        action="append",
        default=[],
        help="Override a setting for this run only (repeatable).",
    )
    fold_parser.add_argument("--format", choices=("lines", "json"), default="lines", help="Output format.")
    fold_parser.set_defaults(handler=_run_fold)

    config_parser = subparsers.add_parser("config", help="Show or update persisted settings.")
    config_parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        type=_setting_assignment,
        action="append",
        default=[],
        help="Persist a setting (repeatable).",
    )
    config_parser.set_defaults(handler=_run_config)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and dispatch to the selected subcommand."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
