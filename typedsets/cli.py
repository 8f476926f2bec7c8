import argparse
import json
import logging
import sys
from pathlib import Path

from typedsets.check import check_entries, check_environment
from typedsets.config import Settings
from typedsets.env import Environment
from typedsets.errors import KernelError
from typedsets.library import build_sections, load_library
from typedsets.reference import render_reference
from typedsets.report import format_audit, format_entry, format_report, report_json
from typedsets.result import Err, Ok
from typedsets.serialization import dumps, entries_from_json


def _library(settings: Settings) -> Environment | None:
    match load_library(settings):
        case Ok(env):
            return env
        case Err(e):
            print(f"Library rejected: {e}", file=sys.stderr)
            return None


def handle_check(settings: Settings, file: str | None, *, verbose: bool, as_json: bool) -> int:
    """Re-check the library, or the entries of an exported JSON file."""
    if file is None:
        env = _library(settings)
        if env is None:
            return 1
        result = check_environment(env)
    else:
        try:
            entries = entries_from_json(json.loads(Path(file).read_text()))
        except (OSError, ValueError, KeyError, TypeError) as e:
            print(f"Cannot read {file}: {e}", file=sys.stderr)
            return 1
        result = check_entries(entries, name=Path(file).stem)

    if as_json:
        print(json.dumps(report_json(result), indent=2))
    else:
        print(format_report(result, verbose=verbose))
    return 0 if result.is_consistent else 1


def handle_axioms(settings: Settings) -> int:
    env = _library(settings)
    if env is None:
        return 1
    print(format_audit(env))
    return 0


def handle_show(settings: Settings, names: list[str]) -> int:
    env = _library(settings)
    if env is None:
        return 1
    status = 0
    for name in names:
        try:
            print(format_entry(env.lookup(name)))
        except KernelError as e:
            print(str(e), file=sys.stderr)
            status = 1
    return status


def handle_reference(settings: Settings) -> int:
    try:
        env, sections = build_sections(settings)
    except KernelError as e:
        print(f"Library rejected: {e}", file=sys.stderr)
        return 1
    print(render_reference(env, sections))
    return 0


def handle_export(settings: Settings, output: str | None) -> int:
    env = _library(settings)
    if env is None:
        return 1
    text = dumps(env)
    if output is None:
        print(text)
    else:
        Path(output).write_text(text)
        print(f"Exported {len(env)} entries to {output}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="typedsets",
        description="Typed set theory on a small Calculus of Constructions kernel",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: check
    check_parser = subparsers.add_parser(
        "check",
        help="Re-check every entry of the library (or of an exported JSON file).",
    )
    check_parser.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="JSON export to re-check instead of the built-in library.",
    )
    check_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="List every axiom after the summary.",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print a machine-readable report.",
    )

    # Command: axioms
    subparsers.add_parser(
        "axioms", help="List the axioms and conjectures the library rests on."
    )

    # Command: show
    show_parser = subparsers.add_parser("show", help="Print entries by name.")
    show_parser.add_argument("names", nargs="+", metavar="NAME")

    # Command: reference
    subparsers.add_parser(
        "reference", help="Print the library reference (Markdown)."
    )

    # Command: export
    export_parser = subparsers.add_parser(
        "export", help="Export the library entries as JSON."
    )
    export_parser.add_argument(
        "--output", "-o", type=str, metavar="FILE", help="Write to FILE instead of stdout."
    )

    args = parser.parse_args(argv)

    match Settings.from_env():
        case Ok(settings):
            pass
        case Err(e):
            print(f"Invalid configuration: {e}", file=sys.stderr)
            return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    match args.command:
        case "check":
            return handle_check(settings, args.file, verbose=args.verbose, as_json=args.json)
        case "axioms":
            return handle_axioms(settings)
        case "show":
            return handle_show(settings, args.names)
        case "reference":
            return handle_reference(settings)
        case "export":
            return handle_export(settings, args.output)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
