"""Command-line entry point.

Usage::

    scaffoldkit new ./dev-workspace-dashboard
    scaffoldkit new ./app --names pages=Dashboard,Tasks --names components=Navbar
    scaffoldkit new ./app --layout ./my-layout/layout.yaml --names Home,About --on-conflict skip
    scaffoldkit blueprints
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional

from pydantic import ValidationError
from rich.table import Table
from rich.text import Text

from .config import ScaffoldConfig
from .errors import LayoutError, ScaffoldError
from .layout import available_blueprints, load_blueprint
from .orchestrator import ScaffoldOrchestrator
from .planner import NamesInput
from .utils import console, print_error, print_plan, print_report, print_success
from .writer import ConflictPolicy


def _split_names(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def parse_names_args(values: Optional[list[str]]) -> NamesInput:
    """Turn repeated ``--names`` values into the orchestrator's names input.

    ``GROUP=A,B`` entries build a mapping; a bare ``A,B`` entry is a single
    name list for layouts with one name group.  The two forms cannot be mixed.
    """
    if not values:
        return None

    grouped: dict[str, list[str]] = {}
    bare: list[str] = []
    for value in values:
        group, sep, text = value.partition("=")
        if sep:
            grouped.setdefault(group.strip(), []).extend(_split_names(text))
        else:
            bare.extend(_split_names(value))

    if grouped and bare:
        raise ValueError("cannot mix GROUP=NAMES and bare NAMES in --names")
    return grouped if grouped else bare


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scaffoldkit",
        description="scaffoldkit -- materialize a project tree from a layout and a list of names",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  scaffoldkit new ./dev-workspace-dashboard\n"
            "  scaffoldkit new ./app --names pages=Dashboard,Tasks --on-conflict skip\n"
            "  scaffoldkit new ./app --layout ./layout.yaml --names Home,About --dry-run\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Scaffold a project tree")
    new.add_argument("root", nargs="?", default=None, help="Project root (default: $SCAFFOLD_ROOT_DIR or ./output)")
    source = new.add_mutually_exclusive_group()
    source.add_argument("--blueprint", "-b", default=None, help="Bundled blueprint name")
    source.add_argument("--layout", "-l", default=None, help="Path to a custom layout.yaml")
    new.add_argument(
        "--names", "-n",
        action="append",
        default=None,
        help="GROUP=A,B or A,B (repeatable); omitted groups use the layout defaults",
    )
    new.add_argument(
        "--on-conflict",
        choices=[p.value for p in ConflictPolicy],
        default=None,
        help="What to do with existing files (default: fail)",
    )
    new.add_argument("--install", action="store_true", default=None, help="Run the layout's install command")
    new.add_argument("--dry-run", action="store_true", help="Print the plan without writing anything")
    new.add_argument("--json", action="store_true", help="Print the machine-readable report")

    sub.add_parser("blueprints", help="List bundled blueprints")
    return parser


def _config_from_args(args: argparse.Namespace) -> ScaffoldConfig:
    """Environment settings, overridden by whatever was passed on the command line."""
    base = ScaffoldConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.root is not None:
        overrides["root_dir"] = args.root
    if args.blueprint is not None:
        overrides["blueprint"] = args.blueprint
        overrides["layout_path"] = None
    if args.layout is not None:
        overrides["layout_path"] = args.layout
    if args.on_conflict is not None:
        overrides["conflict_policy"] = args.on_conflict
    if args.install:
        overrides["install"] = True
    return ScaffoldConfig(**{**base.model_dump(), **overrides})


def _list_blueprints() -> bool:
    """Print the bundled blueprints.  Returns False if any of them failed to load."""
    table = Table(title="Blueprints", show_header=True, header_style="bold cyan")
    table.add_column("Name", no_wrap=True)
    table.add_column("Description")
    ok = True
    for name in available_blueprints():
        try:
            layout, _ = load_blueprint(name)
        except LayoutError as exc:
            ok = False
            table.add_row(name, Text(str(exc), style="bold red"))
            continue
        table.add_row(name, layout.description)
    console.print(table)
    return ok


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``scaffoldkit`` / ``python -m scaffoldkit``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "blueprints":
        if not _list_blueprints():
            sys.exit(2)
        return

    try:
        names = parse_names_args(args.names)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        config = _config_from_args(args)
        spec, registry = config.load_layout()
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(2)
    except LayoutError as exc:
        print_error(str(exc))
        sys.exit(2)

    orchestrator = ScaffoldOrchestrator(config.root_dir, registry, install_timeout=config.install_timeout)

    if args.dry_run:
        try:
            plan = orchestrator.plan(spec, names)
        except ScaffoldError as exc:
            print_error(f"{type(exc).__name__}: {exc}")
            sys.exit(1)
        if args.json:
            print(json.dumps(plan.to_dict(), indent=2))
        else:
            print_plan(plan)
        return

    report = orchestrator.run(spec, names, config.conflict_policy, install=config.install)

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print_report(report)

    if not report.success:
        sys.exit(1)
    if not args.json:
        print_success(f"Scaffold complete: {report.summary()}")


if __name__ == "__main__":
    main()
