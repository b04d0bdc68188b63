# tests/conftest.py
"""
Shared option tables for the arg_parser test-suite.
"""

import pytest

from arg_parser import HasArg, Option, OptionTable


@pytest.fixture
def abc_table():
    """Two flags and one option with a required argument."""
    return OptionTable([
        Option("a"),
        Option("b"),
        Option("c", has_arg=HasArg.YES),
    ])


@pytest.fixture
def verbose_table():
    """Two long names sharing the prefix ``ver``."""
    return OptionTable([
        Option("v", "verbose"),
        Option("V", "version"),
    ])


@pytest.fixture
def foo_table():
    """``foobar`` is listed before its own prefix ``foo``."""
    return OptionTable([
        Option(257, "foobar"),
        Option(256, "foo"),
    ])


@pytest.fixture
def controller_table():
    """A table shaped like a measurement controller's."""
    return OptionTable([
        Option("h", "help"),
        Option("v", "version"),
        Option("c", "show-colon", HasArg.YES),
        Option("d", "debug"),
        Option("e", "dump-prefix", HasArg.YES),
        Option("i", "report-interval", HasArg.YES),
        Option(256, "log-file", HasArg.MAYBE),
        Option("l", None, HasArg.MAYBE),
        Option("m"),
        Option("n", "flows", HasArg.YES),
        Option("o", "output", HasArg.YES),
        Option("q", "quiet"),
        Option("s", "tcp-stack", HasArg.YES),
        Option("T", None, HasArg.YES),
    ])
