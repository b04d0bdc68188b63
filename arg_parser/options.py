# arg_parser/options.py
"""
Option descriptors and option tables.

A descriptor names one recognisable option: its ``code`` (the identifier a
caller switches on, conventionally the short-option character), an optional
long ``name`` and whether it takes an argument.  An :class:`OptionTable` is
the ordered, read-only sequence of descriptors a parse matches against.

Tables written in the C style, terminated by an entry whose code is ``0``,
are accepted as-is: the terminator and anything after it are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from .errors import OptionSpecError

Code = Union[int, str]


# ── Enums ────────────────────────────────────────────────────────

class HasArg(Enum):
    """Argument requirement of an option."""

    NO = "no"          # no_argument
    YES = "yes"        # required_argument
    MAYBE = "maybe"    # optional argument, only ever attached

    @classmethod
    def from_str(cls, text: str) -> "HasArg":
        try:
            return cls(text.lower())
        except ValueError:
            raise OptionSpecError(
                f"has_arg must be one of {[m.value for m in cls]}, got {text!r}"
            ) from None


# ── Descriptors ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Option:
    """A single option descriptor."""

    code: Code
    name: Optional[str] = None
    has_arg: HasArg = HasArg.NO

    def __post_init__(self) -> None:
        if isinstance(self.code, bool) or not isinstance(self.code, (int, str)):
            raise OptionSpecError(f"option code must be int or str, got {self.code!r}")
        if isinstance(self.code, str) and len(self.code) != 1:
            raise OptionSpecError(
                f"string option codes must be a single character, got {self.code!r}"
            )
        if self.name is not None and not isinstance(self.name, str):
            raise OptionSpecError(f"option name must be a string, got {self.name!r}")
        if not isinstance(self.has_arg, HasArg):
            raise OptionSpecError(f"has_arg must be a HasArg, got {self.has_arg!r}")

    @property
    def is_sentinel(self) -> bool:
        return self.code == 0

    @property
    def short(self) -> Optional[str]:
        """The character that selects this option in a ``-x`` cluster."""
        if isinstance(self.code, str):
            return self.code
        if 0 < self.code < 256:
            return chr(self.code)
        return None

    @property
    def takes_argument(self) -> bool:
        return self.has_arg is not HasArg.NO


#: Descriptor shared by every operand record.
OPERAND = Option(code=0)


# ── Tables ───────────────────────────────────────────────────────

class OptionTable(Sequence[Option]):
    """Ordered, immutable sequence of :class:`Option` descriptors."""

    __slots__ = ("_options",)

    def __init__(self, options: Iterable[Option] = ()) -> None:
        entries = []
        for opt in options:
            if not isinstance(opt, Option):
                raise OptionSpecError(f"expected an Option, got {opt!r}")
            if opt.is_sentinel:
                break
            entries.append(opt)
        self._options: Tuple[Option, ...] = tuple(entries)

    @classmethod
    def coerce(cls, options: Union["OptionTable", Iterable[Option]]) -> "OptionTable":
        if isinstance(options, cls):
            return options
        return cls(options)

    def __getitem__(self, index):  # type: ignore[override]
        return self._options[index]

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[Option]:
        return iter(self._options)

    def __repr__(self) -> str:
        return f"OptionTable({list(self._options)!r})"

    def find_short(self, char: str) -> Optional[Option]:
        """First descriptor whose short character is *char*."""
        for opt in self._options:
            if opt.short == char:
                return opt
        return None

    def named(self) -> Iterator[Option]:
        """Descriptors that carry a long name, in table order."""
        return (opt for opt in self._options if opt.name)
