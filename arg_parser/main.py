#!/usr/bin/env python3
"""arg_parser/main.py - decode an argument vector from the command line.

A debugging aid for option tables: load a table from a JSON file, parse the
argument vector given after ``--`` and print the decoded records.

Usage examples
--------------
    # Decode an invocation, options first then operands
    python -m arg_parser --table flowgrind.json -- flowgrind -q --flows 2 host

    # Keep operands where they appear
    python -m arg_parser --table flowgrind.json --in-order -- flowgrind a -q b

    # Machine readable output
    python -m arg_parser --table flowgrind.json --format json -- flowgrind -qm

The first element after ``--`` is the program name and is not decoded.

Option table file
-----------------
A JSON list of objects::

    [
        {"code": "n", "name": "flows", "has_arg": "yes"},
        {"code": "q", "name": "quiet"},
        {"code": 256, "name": "test", "has_arg": "maybe"}
    ]

``code`` is a single character or an integer, ``name`` is optional and
``has_arg`` is one of ``no`` (default), ``yes`` or ``maybe``.

Exit codes
----------
    0   The argument vector was decoded.
    1   The argument vector did not match the table (diagnostic printed).
    2   Infrastructure failure (missing or malformed table file, etc.).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

from . import __version__
from .errors import AllocationFailure, OptionSpecError
from .options import HasArg, Option, OptionTable
from .parser import ArgParser, parse

_log = logging.getLogger("arg_parser")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``arg_parser`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("arg_parser")
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)


def _open_output(dest: Optional[str]) -> TextIO:
    """Return a writable text stream.

    *dest* ``None`` or ``"-"`` → ``sys.stdout``; otherwise open the path
    for writing (creating parent directories as needed).
    """
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


def _option_from_entry(entry: Any, position: int) -> Option:
    if not isinstance(entry, dict):
        raise OptionSpecError(f"table entry {position} is not an object")
    if "code" not in entry:
        raise OptionSpecError(f"table entry {position} has no code")
    has_arg = entry.get("has_arg", HasArg.NO.value)
    if not isinstance(has_arg, str):
        raise OptionSpecError(f"table entry {position}: has_arg must be a string")
    return Option(
        code=entry["code"],
        name=entry.get("name") or None,
        has_arg=HasArg.from_str(has_arg),
    )


def load_table(path: Path) -> OptionTable:
    """Read an option table from the JSON file at *path*."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise OptionSpecError("option table must be a JSON list")
    return OptionTable(_option_from_entry(e, i) for i, e in enumerate(data))


def _write_text(ap: ArgParser, stream: TextIO) -> None:
    for i, record in enumerate(ap):
        label = "(operand)" if record.is_operand else record.rendered_form
        if record.argument or record.is_operand:
            stream.write(f"{i:>3}  {label:<20} {record.argument}\n")
        else:
            stream.write(f"{i:>3}  {label}\n")
    stream.write(f"\n--- {ap.record_count()} record(s) ---\n")


def _write_json(ap: ArgParser, stream: TextIO) -> None:
    payload: Dict[str, Any] = {
        "records": [record.to_dict() for record in ap],
        "error": ap.diagnostic.to_dict() if ap.diagnostic else None,
    }
    stream.write(json.dumps(payload, indent=2) + "\n")


# ===========================================================================
# Command implementation
# ===========================================================================

def cmd_decode(args: argparse.Namespace) -> int:
    """Decode ``args.argv`` against the table in ``args.table``."""
    table_path = Path(args.table).expanduser()
    try:
        table = load_table(table_path)
    except OSError as exc:
        _log.error("cannot read option table %s: %s", table_path, exc)
        return EXIT_INFRA
    except json.JSONDecodeError as exc:
        _log.error("option table %s is not valid JSON: %s", table_path, exc)
        return EXIT_INFRA
    except UnicodeDecodeError as exc:
        _log.error("option table %s is not valid UTF-8: %s", table_path, exc)
        return EXIT_INFRA
    except OptionSpecError as exc:
        _log.error("invalid option table %s: %s", table_path, exc)
        return EXIT_INFRA

    _log.info("Loaded %d option(s) from %s", len(table), table_path)

    argv: List[str] = list(args.argv)
    try:
        ap = parse(argv, table, reorder=not args.in_order)
    except AllocationFailure as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    if args.format == "json" or ap.error() is None:
        out = _open_output(args.output)
        try:
            if args.format == "json":
                _write_json(ap, out)
            else:
                _write_text(ap, out)
        finally:
            if out is not sys.stdout:
                out.close()

    if ap.error() is not None:
        program = argv[0] if argv else "arg_parser"
        sys.stderr.write(f"{program}: {ap.error()}\n")
        return EXIT_ERROR
    return EXIT_OK


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arg_parser",
        description="Decode a command line against a JSON option table.",
        epilog="Everything after -- is the argument vector, program name first.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v INFO, -vv DEBUG).",
    )
    parser.add_argument(
        "-t", "--table",
        required=True,
        metavar="FILE",
        help="JSON option table.",
    )
    parser.add_argument(
        "-f", "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--in-order",
        action="store_true",
        help="Record operands where they appear instead of after all options.",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help='Output file ("-" or omit for stdout).',
    )
    parser.add_argument(
        "argv",
        nargs="*",
        help="Argument vector to decode (program name first).",
    )
    parser.set_defaults(func=cmd_decode)
    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
