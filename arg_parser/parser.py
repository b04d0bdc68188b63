# arg_parser/parser.py
"""
POSIX/GNU style command line parser.

Decodes an argument vector against an :class:`~arg_parser.options.OptionTable`
into an ordered list of :class:`~arg_parser.records.Record` values plus at
most one :class:`~arg_parser.errors.Diagnostic`.

Supported syntax
----------------
* ``-a -b``, clustered ``-ab``; arguments attached (``-oVALUE``) or in the
  following element (``-o VALUE``).
* ``--name``, ``--name=VALUE``, ``--name VALUE``; any unambiguous prefix of
  a long name is accepted, and an exact name always wins.
* ``--`` ends option processing; everything after it is an operand.
* Operands may be interleaved with options.  By default they are collected
  and placed after all options (``reorder=True``); with ``reorder=False``
  they are recorded in place.

Public API
----------
``parse(argv, options, reorder=True, argc=None) -> ArgParser``
    Parse ``argv`` (whose element 0 is the program name).

``resolve_long(token, next_arg, table) -> Resolution``
``resolve_short(token, next_arg, table) -> Resolution``
    The two option resolvers, usable on their own.

Usage::

    from arg_parser import HasArg, Option, parse

    table = [
        Option("v", "verbose"),
        Option("o", "output", HasArg.YES),
    ]
    ap = parse(["prog", "-v", "--out=log.txt", "host"], table)
    if ap.error():
        raise SystemExit(ap.error())
    for record in ap:
        ...
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import AllocationFailure, Diagnostic, ErrorKind, UsageError
from .grammar import Token, TokenKind, classify
from .options import Code, HasArg, Option, OptionTable
from .records import Record

logger = logging.getLogger(__name__)

Options = Union[OptionTable, Iterable[Option]]


# ═══════════════════════════════════════════════════════════════════════
#  Resolvers
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one option token.

    ``consumed`` is the number of argv elements used: 1 for the option
    token alone, 2 when the following element was taken as its argument.
    """

    records: Tuple[Record, ...] = ()
    consumed: int = 1
    diagnostic: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


def _fail(kind: ErrorKind, message: str, token: Token) -> Resolution:
    return Resolution(consumed=0, diagnostic=Diagnostic(kind, message, token.text))


def match_long(name: str, table: OptionTable) -> Tuple[Optional[Option], bool, bool]:
    """
    Find the descriptor selected by the long-name slice *name*.

    Returns ``(option, exact, ambiguous)``.  An exact match stops the scan
    and wins over any abbreviation seen before it.  Later abbreviation
    candidates only make the result ambiguous when they differ from the
    first one in ``code`` or ``has_arg``.
    """
    selected: Optional[Option] = None
    ambiguous = False
    for opt in table.named():
        if not opt.name.startswith(name):
            continue
        if len(opt.name) == len(name):
            return opt, True, False
        if selected is None:
            selected = opt
        elif opt.code != selected.code or opt.has_arg is not selected.has_arg:
            ambiguous = True
    return selected, False, ambiguous


def resolve_long(token: Token, next_arg: Optional[str], table: OptionTable) -> Resolution:
    """Resolve a ``--name[=value]`` token."""
    opt, exact, ambiguous = match_long(token.name, table)

    if ambiguous and not exact:
        return _fail(ErrorKind.AMBIGUOUS_OPTION,
                     f"option '{token.text}' is ambiguous", token)
    if opt is None:
        return _fail(ErrorKind.UNRECOGNIZED_OPTION,
                     f"unrecognized option '{token.text}'", token)

    if token.value is not None:
        if opt.has_arg is HasArg.NO:
            return _fail(ErrorKind.UNEXPECTED_ARGUMENT,
                         f"option '--{opt.name}' doesn't allow an argument", token)
        if opt.has_arg is HasArg.YES and not token.value:
            return _fail(ErrorKind.MISSING_ARGUMENT,
                         f"option '--{opt.name}' requires an argument", token)
        return Resolution((Record.long(opt, token.value),))

    if opt.has_arg is HasArg.YES:
        if not next_arg:
            return _fail(ErrorKind.MISSING_ARGUMENT,
                         f"option '--{opt.name}' requires an argument", token)
        return Resolution((Record.long(opt, next_arg),), consumed=2)

    return Resolution((Record.long(opt),))


def resolve_short(token: Token, next_arg: Optional[str], table: OptionTable) -> Resolution:
    """Resolve a ``-xyz`` cluster, left to right."""
    cluster = token.cluster
    records: List[Record] = []
    consumed = 1
    cursor = 0

    while cursor < len(cluster):
        char = cluster[cursor]
        opt = table.find_short(char)
        if opt is None:
            return _fail(ErrorKind.INVALID_SHORT_OPTION,
                         f"invalid option -- {char}", token)

        cursor += 1
        remainder = cluster[cursor:]

        if opt.takes_argument and remainder:
            records.append(Record.short(opt, char, remainder))
            break
        if opt.has_arg is HasArg.YES:
            if not next_arg:
                return _fail(ErrorKind.MISSING_ARGUMENT,
                             f"option requires an argument -- {char}", token)
            records.append(Record.short(opt, char, next_arg))
            consumed = 2
            break
        records.append(Record.short(opt, char))

    return Resolution(tuple(records), consumed=consumed)


# ═══════════════════════════════════════════════════════════════════════
#  Driver
# ═══════════════════════════════════════════════════════════════════════

class ParserState(enum.Enum):
    SCANNING = "scanning"
    DONE_OK = "done-ok"
    DONE_ERROR = "done-error"


class ArgParser:
    """
    The result of parsing one argument vector.

    The parse runs in the constructor.  Afterwards the instance holds
    either the decoded records and no error, or no records and exactly
    one diagnostic.
    """

    def __init__(
        self,
        argv: Sequence[str],
        options: Options,
        reorder: bool = True,
        argc: Optional[int] = None,
    ) -> None:
        self._records: List[Record] = []
        self._diagnostic: Optional[Diagnostic] = None
        self.state = ParserState.SCANNING
        self.table = OptionTable.coerce(options)
        self.reorder = reorder

        argc = len(argv) if argc is None else max(0, min(argc, len(argv)))
        try:
            self._run(argv, argc)
        except MemoryError as exc:
            self.release()
            raise AllocationFailure("out of memory while parsing arguments") from exc

    # ── parsing ──────────────────────────────────────────────────────

    def _run(self, argv: Sequence[str], argc: int) -> None:
        deferred: List[str] = []
        index = 1

        while index < argc:
            token = classify(argv[index])

            if token.kind is TokenKind.TERMINATOR:
                logger.debug("argv[%d]: end of options", index)
                index += 1
                break

            if not token.is_option:
                if self.reorder:
                    deferred.append(token.text)
                else:
                    self._records.append(Record.operand(token.text))
                index += 1
                continue

            next_arg = argv[index + 1] if index + 1 < argc else None
            if token.kind is TokenKind.LONG:
                resolution = resolve_long(token, next_arg, self.table)
            else:
                resolution = resolve_short(token, next_arg, self.table)

            if not resolution.ok:
                self._diagnostic = replace(resolution.diagnostic, index=index)
                logger.debug("argv[%d]: %s", index, self._diagnostic.message)
                break

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("argv[%d]: %s -> %s", index, token.text,
                             [r.rendered_form for r in resolution.records])
            self._records.extend(resolution.records)
            index += resolution.consumed

        if self._diagnostic is not None:
            self._records.clear()
            self.state = ParserState.DONE_ERROR
            return

        self._records.extend(Record.operand(text) for text in deferred)
        self._records.extend(Record.operand(text) for text in argv[index:argc])
        self.state = ParserState.DONE_OK

    # ── inspection ───────────────────────────────────────────────────

    @property
    def diagnostic(self) -> Optional[Diagnostic]:
        return self._diagnostic

    @property
    def records(self) -> Tuple[Record, ...]:
        return tuple(self._records)

    def error(self) -> Optional[str]:
        """The diagnostic message, or ``None`` if the parse succeeded."""
        if self._diagnostic is None:
            return None
        return self._diagnostic.message

    def raise_for_error(self) -> None:
        """Raise the :class:`UsageError` subclass for the stored diagnostic."""
        if self._diagnostic is not None:
            raise UsageError.for_diagnostic(self._diagnostic)

    def record_count(self) -> int:
        return len(self._records)

    def _record(self, i: int) -> Optional[Record]:
        if 0 <= i < len(self._records):
            return self._records[i]
        return None

    def code_at(self, i: int) -> Code:
        record = self._record(i)
        return record.code if record is not None else 0

    def argument_at(self, i: int) -> str:
        record = self._record(i)
        return record.argument if record is not None else ""

    def rendered_form_at(self, i: int) -> str:
        record = self._record(i)
        return record.rendered_form if record is not None else ""

    def descriptor_at(self, i: int) -> Optional[Option]:
        record = self._record(i)
        return record.option if record is not None else None

    def is_code_used(self, code: Code) -> bool:
        return any(record.code == code for record in self._records)

    # ── teardown ─────────────────────────────────────────────────────

    def release(self) -> None:
        """Drop all records and the diagnostic.  Safe to call repeatedly."""
        self._records = []
        self._diagnostic = None

    def __enter__(self) -> "ArgParser":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    # ── container protocol ───────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(tuple(self._records))

    def __repr__(self) -> str:
        return (f"ArgParser(state={self.state.value}, "
                f"records={len(self._records)}, error={self.error()!r})")


def parse(
    argv: Sequence[str],
    options: Options,
    reorder: bool = True,
    argc: Optional[int] = None,
) -> ArgParser:
    """Parse *argv* against *options*; see :class:`ArgParser`."""
    return ArgParser(argv, options, reorder=reorder, argc=argc)
