# tests/test_short_options.py
"""
Tests for short options and short option clusters.
"""

from arg_parser import ErrorKind, HasArg, Option, OptionTable, parse, resolve_short
from arg_parser.grammar import Token, TokenKind, classify


def _pairs(ap):
    return [(r.code, r.argument) for r in ap]


class TestSingleShort:

    def test_flag(self, abc_table):
        ap = parse(["prog", "-a"], abc_table)
        assert _pairs(ap) == [("a", "")]
        assert ap.rendered_form_at(0) == "-a"

    def test_separate_argument(self, abc_table):
        ap = parse(["prog", "-c", "VALUE"], abc_table)
        assert _pairs(ap) == [("c", "VALUE")]

    def test_attached_argument(self, abc_table):
        ap = parse(["prog", "-cVALUE"], abc_table)
        assert _pairs(ap) == [("c", "VALUE")]

    def test_attached_argument_may_contain_option_letters(self, abc_table):
        ap = parse(["prog", "-cab"], abc_table)
        assert _pairs(ap) == [("c", "ab")]

    def test_missing_argument_at_end(self, abc_table):
        ap = parse(["prog", "-c"], abc_table)
        assert ap.diagnostic.kind is ErrorKind.MISSING_ARGUMENT
        assert ap.error() == "option requires an argument -- c"
        assert ap.record_count() == 0

    def test_empty_following_argument(self, abc_table):
        ap = parse(["prog", "-c", ""], abc_table)
        assert ap.diagnostic.kind is ErrorKind.MISSING_ARGUMENT

    def test_invalid(self, abc_table):
        ap = parse(["prog", "-x"], abc_table)
        assert ap.diagnostic.kind is ErrorKind.INVALID_SHORT_OPTION
        assert ap.error() == "invalid option -- x"


class TestClusters:

    def test_flags_cluster(self, abc_table):
        ap = parse(["prog", "-ab"], abc_table)
        assert _pairs(ap) == [("a", ""), ("b", "")]
        assert [r.rendered_form for r in ap] == ["-a", "-b"]

    def test_cluster_with_attached_argument(self, abc_table):
        ap = parse(["prog", "-abcVALUE"], abc_table)
        assert _pairs(ap) == [("a", ""), ("b", ""), ("c", "VALUE")]

    def test_cluster_ending_in_argument_option(self, abc_table):
        ap = parse(["prog", "-abc", "VALUE", "file"], abc_table)
        assert _pairs(ap) == [("a", ""), ("b", ""), ("c", "VALUE"), (0, "file")]

    def test_invalid_character_aborts_token(self, abc_table):
        ap = parse(["prog", "-axb"], abc_table)
        assert ap.error() == "invalid option -- x"
        assert ap.record_count() == 0

    def test_repeated_flag(self, abc_table):
        ap = parse(["prog", "-aa"], abc_table)
        assert _pairs(ap) == [("a", ""), ("a", "")]


class TestShortCodes:

    def test_integer_code_below_256_is_a_short_character(self):
        table = OptionTable([Option(ord("n"), "flows", HasArg.YES)])
        ap = parse(["prog", "-n2"], table)
        assert ap.code_at(0) == ord("n")
        assert ap.argument_at(0) == "2"
        assert ap.rendered_form_at(0) == "-n"

    def test_large_integer_code_is_long_only(self):
        table = OptionTable([Option(300, "long-only")])
        ap = parse(["prog", "-" + chr(300)], table)
        assert ap.diagnostic.kind is ErrorKind.INVALID_SHORT_OPTION

    def test_first_matching_descriptor_wins(self):
        table = OptionTable([
            Option("x", "first"),
            Option("x", "second", HasArg.YES),
        ])
        ap = parse(["prog", "-x"], table)
        assert ap.descriptor_at(0).name == "first"


class TestShortOptionalArguments:

    def test_attached(self, controller_table):
        ap = parse(["prog", "-lrun.log"], controller_table)
        assert _pairs(ap) == [("l", "run.log")]

    def test_bare_does_not_consume_next(self, controller_table):
        ap = parse(["prog", "-l", "run.log"], controller_table)
        assert _pairs(ap) == [("l", ""), (0, "run.log")]

    def test_in_cluster(self, controller_table):
        ap = parse(["prog", "-qlx"], controller_table)
        assert _pairs(ap) == [("q", ""), ("l", "x")]


class TestResolveShort:

    def test_consumes_token_only(self, abc_table):
        res = resolve_short(classify("-ab"), "next", abc_table)
        assert res.consumed == 1
        assert len(res.records) == 2

    def test_consumes_following_element(self, abc_table):
        res = resolve_short(classify("-ac"), "VALUE", abc_table)
        assert res.consumed == 2
        assert res.records[-1].argument == "VALUE"

    def test_attached_argument_consumes_token_only(self, abc_table):
        res = resolve_short(classify("-cVALUE"), "next", abc_table)
        assert res.consumed == 1

    def test_failure(self, abc_table):
        res = resolve_short(classify("-z"), None, abc_table)
        assert not res.ok
        assert res.diagnostic.kind is ErrorKind.INVALID_SHORT_OPTION

    def test_reads_cluster_characters(self, abc_table):
        token = Token(TokenKind.SHORT, "-bcX", cluster="bcX")
        res = resolve_short(token, None, abc_table)
        assert [(r.code, r.argument) for r in res.records] == [("b", ""), ("c", "X")]
        assert [r.rendered_form for r in res.records] == ["-b", "-c"]
