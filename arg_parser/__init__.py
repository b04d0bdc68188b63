"""arg_parser - POSIX/GNU command line argument parsing.

Decodes an argument vector (short options, clustered short options, long
options and their unambiguous abbreviations, the ``--`` terminator and
interleaved operands) against a caller supplied option table.  The result
is an ordered list of decoded records plus at most one diagnostic.

Submodules
----------
options
    ``Option`` descriptors, the ``HasArg`` argument requirement and the
    read-only ``OptionTable``.

grammar
    Parsimonious grammar classifying a single argv element.

records
    ``Record``: one decoded option occurrence or operand.

errors
    ``ErrorKind``/``Diagnostic`` and the ``ArgParserError`` hierarchy.

parser
    Long and short option resolvers and the ``ArgParser`` driver.

main
    ``python -m arg_parser``: decode an argv against a JSON option table.

Usage
-----
Programmatic::

    from arg_parser import HasArg, Option, parse

    ap = parse(sys.argv, [Option("v", "verbose"), Option("p", "port", HasArg.YES)])
    ap.raise_for_error()
    for record in ap:
        print(record.rendered_form, record.argument)

Command-line::

    python -m arg_parser --table options.json -- prog -v --port 5999 host
"""

from __future__ import annotations

from .errors import (
    AllocationFailure,
    AmbiguousOptionError,
    ArgParserError,
    Diagnostic,
    ErrorKind,
    InvalidShortOptionError,
    MissingArgumentError,
    OptionSpecError,
    UnexpectedArgumentError,
    UnrecognizedOptionError,
    UsageError,
)
from .options import OPERAND, HasArg, Option, OptionTable
from .parser import ArgParser, ParserState, Resolution, parse, resolve_long, resolve_short
from .records import Record

__version__: str = "0.1.0"
__all__: list[str] = [
    "__version__",
    "AllocationFailure",
    "AmbiguousOptionError",
    "ArgParser",
    "ArgParserError",
    "Diagnostic",
    "ErrorKind",
    "HasArg",
    "InvalidShortOptionError",
    "MissingArgumentError",
    "OPERAND",
    "Option",
    "OptionSpecError",
    "OptionTable",
    "ParserState",
    "Record",
    "Resolution",
    "UnexpectedArgumentError",
    "UnrecognizedOptionError",
    "UsageError",
    "parse",
    "resolve_long",
    "resolve_short",
]
