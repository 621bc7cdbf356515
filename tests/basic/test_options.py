"""
Tests for sak/commands/utils/options.py
"""

import pytest

from sak.commands.utils.context import ExitStatus
from sak.commands.utils.helpers import OptionParseError, UnrecognizedOptionError
from sak.commands.utils.options import OptionAdapter, OptionParser, help_requested


class TestOptionParser:
    def test_error_raises_instead_of_exiting(self):
        parser = OptionParser(prog="sak thing")
        parser.add_argument("--value", required=True)
        with pytest.raises(OptionParseError, match="sak thing"):
            parser.parse_known_args([])

    def test_records_positional_dests(self):
        parser = OptionParser()
        parser.add_argument("--flag", action="store_true")
        parser.add_argument("source")
        parser.add_argument("rest", nargs="*")
        assert parser.positional_dests == ["source", "rest"]

    def test_abbreviations_are_not_accepted(self):
        parser = OptionParser()
        parser.add_argument("--verbose", action="store_true")
        namespace, extras = parser.parse_known_args(["--verb"])
        assert not namespace.verbose
        assert extras == ["--verb"]


class TestHelpRequested:
    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_detects_flag(self, flag):
        assert help_requested(["--whatever", "x", flag])

    def test_absent(self):
        assert not help_requested(["--query", "x"])


class TestOptionAdapterParse:
    def test_parses_declared_options(self, commands):
        options = OptionAdapter(commands["query"]).parse(["--query", "select 1", "--limit", "5"])
        assert options["query"] == "select 1"
        assert options["limit"] == 5
        assert not options.help_requested
        assert "help" not in options

    def test_defaults_apply(self, commands):
        options = OptionAdapter(commands["query"]).parse(["--query=q"])
        assert options["limit"] == 10

    def test_help_wins_over_missing_required_option(self, commands):
        options = OptionAdapter(commands["query"]).parse(["--help"])
        assert options.help_requested

    def test_help_wins_over_malformed_input(self, commands):
        options = OptionAdapter(commands["query"]).parse(["--limit", "many", "-h"])
        assert options.help_requested

    def test_help_wins_over_unrecognized_tokens(self, commands):
        options = OptionAdapter(commands["query"]).parse(["--query", "q", "--bogus", "--help"])
        assert options.help_requested

    def test_missing_required_option_is_parse_error(self, commands):
        with pytest.raises(OptionParseError, match="--query"):
            OptionAdapter(commands["query"]).parse([])

    def test_missing_value_is_parse_error(self, commands):
        with pytest.raises(OptionParseError, match="expected one argument"):
            OptionAdapter(commands["query"]).parse(["--query"])

    def test_invalid_value_is_parse_error(self, commands):
        with pytest.raises(OptionParseError, match="invalid int value"):
            OptionAdapter(commands["query"]).parse(["--query", "q", "--limit", "many"])

    def test_every_unrecognized_token_is_reported(self, commands):
        with pytest.raises(UnrecognizedOptionError) as excinfo:
            OptionAdapter(commands["query"]).parse(
                ["--query", "q", "--bogus", "value", "-x", "stray"]
            )
        assert excinfo.value.tokens == ["--bogus", "value", "-x", "stray"]
        assert str(excinfo.value) == "Unrecognized options: --bogus value -x stray"

    def test_positionals(self, commands):
        options = OptionAdapter(commands["copy"]).parse(["a.txt", "-f", "b.txt"])
        assert options.positionals == ("a.txt", "b.txt")
        assert options["source"] == "a.txt"
        assert options["dest"] == "b.txt"
        assert options["force"] is True

    def test_extra_positional_is_unrecognized(self, commands):
        with pytest.raises(UnrecognizedOptionError) as excinfo:
            OptionAdapter(commands["copy"]).parse(["a", "b", "c"])
        assert excinfo.value.tokens == ["c"]

    def test_command_without_options_rejects_any_token(self):
        from sak.commands.utils.base_command import ParameterizedCommand

        class BareCommand(ParameterizedCommand):
            NORM_NAME = "bare"
            DESCRIPTION = "No options"

            @classmethod
            def do(cls, io, ctx, options):
                return ExitStatus.SUCCESS

        assert OptionAdapter(BareCommand).parse([]).values == {}
        with pytest.raises(UnrecognizedOptionError):
            OptionAdapter(BareCommand).parse(["--anything"])


class TestCompositeParse:
    def test_selector_and_remainder(self, commands):
        options = OptionAdapter(commands["foo"]).parse(["-n", "x", "bar", "--flag", "value"])
        assert options["name"] == "x"
        assert options["command"] == "bar"
        assert options["arguments"] == ["--flag", "value"]

    def test_help_after_selector_belongs_to_the_child(self, commands):
        options = OptionAdapter(commands["foo"]).parse(["bar", "--help"])
        assert not options.help_requested
        assert options["arguments"] == ["--help"]

    def test_no_selector(self, commands):
        options = OptionAdapter(commands["foo"]).parse([])
        assert options["command"] is None
        assert options["arguments"] == []


class TestOptionAdapterRun:
    def test_help_prints_usage_without_running(self, io, make_ctx, commands, mocker, capsys):
        do = mocker.patch.object(commands["query"], "do")

        status = OptionAdapter(commands["query"], prog="sak query").run(io, make_ctx("--help"))

        assert status == ExitStatus.SUCCESS
        do.assert_not_called()
        out = capsys.readouterr().out
        assert "usage: sak query" in out
        assert "--query" in out
        assert "--help" in out

    def test_composite_usage_lists_children_only(self, io, make_ctx, commands, capsys):
        status = OptionAdapter(commands["foo"], prog="sak foo").run(io, make_ctx("--help"))

        assert status == ExitStatus.SUCCESS
        out = capsys.readouterr().out
        assert "Commands:" in out
        assert "bar  Bar option" in out
        assert "baz  Baz option" in out

    def test_unrecognized_is_reported_and_not_run(self, io, make_ctx, commands, mocker, capsys):
        do = mocker.patch.object(commands["query"], "do")

        status = OptionAdapter(commands["query"]).run(io, make_ctx("--query", "q", "--x", "--y"))

        assert status == ExitStatus.FAILURE
        do.assert_not_called()
        assert "Unrecognized options: --x --y" in capsys.readouterr().err

    def test_parse_error_is_reported_and_not_run(self, io, make_ctx, commands, mocker, capsys):
        do = mocker.patch.object(commands["query"], "do")

        status = OptionAdapter(commands["query"]).run(io, make_ctx())

        assert status == ExitStatus.FAILURE
        do.assert_not_called()
        assert "required" in capsys.readouterr().err

    def test_runs_body_with_parsed_options(self, io, make_ctx, commands, mocker):
        do = mocker.patch.object(commands["query"], "do", return_value=ExitStatus.FAILURE)
        ctx = make_ctx("--query", "q")

        status = OptionAdapter(commands["query"]).run(io, ctx)

        assert status == ExitStatus.FAILURE
        do.assert_called_once()
        called_io, called_ctx, options = do.call_args.args
        assert called_io is io
        assert called_ctx is ctx
        assert options["query"] == "q"
