# arg_parser/errors.py
"""
Error kinds, diagnostics and exceptions for the argument parser.

A parse never raises on bad input.  The first problem found is recorded as
a single :class:`Diagnostic` on the parser instance and scanning stops.
Callers that prefer exceptions call ``ArgParser.raise_for_error()``, which
raises the :class:`UsageError` subclass matching the diagnostic's kind.

Error Hierarchy:
────────────────
  ArgParserError (base)
  ├── OptionSpecError          - malformed option descriptor or table
  ├── AllocationFailure        - memory exhausted while parsing (fatal)
  └── UsageError               - command line does not match the table
      ├── AmbiguousOptionError
      ├── UnrecognizedOptionError
      ├── UnexpectedArgumentError
      ├── MissingArgumentError
      └── InvalidShortOptionError

Error Codes:
────────────
Each usage error kind has a stable code ``AP-NNNN`` so that callers can
switch on it without matching message text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Dict, Optional, Type


# ═══════════════════════════════════════════════════════════════════
# ERROR KINDS
# ═══════════════════════════════════════════════════════════════════

@unique
class ErrorKind(Enum):
    """Mutually exclusive reasons a parse can fail."""

    AMBIGUOUS_OPTION = 1
    UNRECOGNIZED_OPTION = 2
    UNEXPECTED_ARGUMENT = 3
    MISSING_ARGUMENT = 4
    INVALID_SHORT_OPTION = 5

    @property
    def code(self) -> str:
        return f"AP-{self.value:04d}"


@dataclass(frozen=True)
class Diagnostic:
    """
    The single first error of a parse.

    ``token`` is the argv element being processed when the error was found
    and ``index`` its position in the argument vector.
    """

    kind: ErrorKind
    message: str
    token: str = ""
    index: int = -1

    @property
    def code(self) -> str:
        return self.kind.code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "kind": self.kind.name,
            "message": self.message,
            "token": self.token,
            "index": self.index,
        }

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════

class ArgParserError(Exception):
    """Base exception for everything raised by :mod:`arg_parser`."""


class OptionSpecError(ArgParserError):
    """An option descriptor or table is malformed."""


class AllocationFailure(ArgParserError):
    """
    Memory was exhausted while building a parse result.

    This is not a usage diagnostic: the call failed and its partial
    result has already been released.
    """


class UsageError(ArgParserError):
    """A command line did not match the option table."""

    kind: Optional[ErrorKind] = None

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @property
    def code(self) -> str:
        return self.diagnostic.code

    @staticmethod
    def for_diagnostic(diagnostic: Diagnostic) -> "UsageError":
        """Build the exception subclass registered for the diagnostic's kind."""
        cls = _KIND_EXCEPTIONS.get(diagnostic.kind, UsageError)
        return cls(diagnostic)


class AmbiguousOptionError(UsageError):
    kind = ErrorKind.AMBIGUOUS_OPTION


class UnrecognizedOptionError(UsageError):
    kind = ErrorKind.UNRECOGNIZED_OPTION


class UnexpectedArgumentError(UsageError):
    kind = ErrorKind.UNEXPECTED_ARGUMENT


class MissingArgumentError(UsageError):
    kind = ErrorKind.MISSING_ARGUMENT


class InvalidShortOptionError(UsageError):
    kind = ErrorKind.INVALID_SHORT_OPTION


_KIND_EXCEPTIONS: Dict[ErrorKind, Type[UsageError]] = {
    cls.kind: cls
    for cls in (
        AmbiguousOptionError,
        UnrecognizedOptionError,
        UnexpectedArgumentError,
        MissingArgumentError,
        InvalidShortOptionError,
    )
}
