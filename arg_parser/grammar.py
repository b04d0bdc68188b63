# arg_parser/grammar.py
"""
Classification of single argument-vector tokens.

Every argv element is one of four shapes:

    --              terminator; everything after it is an operand
    --name[=value]  long option (``name`` may be an abbreviation)
    -xyz            cluster of short options
    anything else   operand (this includes ``-`` and the empty string)

The shapes are described by a small Parsimonious PEG grammar and turned
into :class:`Token` values by :class:`TokenVisitor`.  The grammar ends in
a catch-all operand rule, so every string classifies.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor


TOKEN_GRAMMAR = Grammar(r'''
    token           = terminator / long_option / short_cluster / operand

    terminator      = "--" end
    long_option     = "--" long_name long_value
    long_name       = ~r"[^=]*"
    long_value      = assignment / nothing
    assignment      = "=" ~r".*"s
    nothing         = ""

    short_cluster   = "-" ~r".+"s
    operand         = ~r".*"s

    end             = !~r"."s
''')


class TokenKind(enum.Enum):
    TERMINATOR = "terminator"
    LONG = "long"
    SHORT = "short"
    OPERAND = "operand"


@dataclass(frozen=True)
class Token:
    """A classified argv element."""

    kind: TokenKind
    text: str
    name: str = ""                  # LONG: characters between "--" and "="
    value: Optional[str] = None     # LONG: text after the first "=", if any
    cluster: str = ""               # SHORT: characters after the leading "-"

    @property
    def is_option(self) -> bool:
        return self.kind in (TokenKind.LONG, TokenKind.SHORT)


class TokenVisitor(NodeVisitor):
    """Transforms a :data:`TOKEN_GRAMMAR` parse tree into a :class:`Token`."""

    grammar = TOKEN_GRAMMAR
    unwrapped_exceptions = (MemoryError,)

    def generic_visit(self, node, visited_children):
        return visited_children or node

    def visit_token(self, node, visited_children):
        return visited_children[0]

    def visit_terminator(self, node, visited_children):
        return Token(TokenKind.TERMINATOR, node.text)

    def visit_long_option(self, node, visited_children):
        _, name, value = visited_children
        return Token(TokenKind.LONG, node.text, name=name, value=value)

    def visit_long_name(self, node, visited_children):
        return node.text

    def visit_long_value(self, node, visited_children):
        return visited_children[0]

    def visit_assignment(self, node, visited_children):
        _, value = visited_children
        return value.text

    def visit_nothing(self, node, visited_children):
        return None

    def visit_short_cluster(self, node, visited_children):
        _, cluster = visited_children
        return Token(TokenKind.SHORT, node.text, cluster=cluster.text)

    def visit_operand(self, node, visited_children):
        return Token(TokenKind.OPERAND, node.text)


_VISITOR = TokenVisitor()


def classify(text: str) -> Token:
    """Classify one argv element."""
    return _VISITOR.parse(text)
