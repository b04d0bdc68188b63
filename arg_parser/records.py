# arg_parser/records.py
"""Decoded records produced by a parse."""

from __future__ import annotations

from dataclasses import dataclass

from .options import OPERAND, Option


@dataclass(frozen=True)
class Record:
    """One recognised option occurrence or operand, in final output order."""

    option: Option
    argument: str = ""
    rendered_form: str = ""

    @classmethod
    def long(cls, option: Option, argument: str = "") -> "Record":
        return cls(option, argument, f"--{option.name}")

    @classmethod
    def short(cls, option: Option, char: str, argument: str = "") -> "Record":
        return cls(option, argument, f"-{char}")

    @classmethod
    def operand(cls, text: str) -> "Record":
        # Operands have no meaningful spelling of their own.
        return cls(OPERAND, text, "")

    @property
    def code(self):
        return self.option.code

    @property
    def is_operand(self) -> bool:
        return self.option.is_sentinel

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "option": self.rendered_form or None,
            "argument": self.argument,
            "operand": self.is_operand,
        }
