"""
Option adapter: parses the argument slice belonging to one parameterized command.

Every command gets an implicit -h/--help flag. Help wins over any other
outcome; tokens the schema does not consume are reported all at once and
stop the command from running.
"""

import argparse
import logging
from typing import List

from sak.commands.utils.context import ExitStatus, ParsedOptions
from sak.commands.utils.helpers import OptionParseError, UnrecognizedOptionError

logger = logging.getLogger(__name__)

HELP_DEST = "help"
HELP_FLAGS = ("-h", "--help")


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting and remembers its positionals."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("add_help", False)
        kwargs.setdefault("allow_abbrev", False)
        self.positional_dests: List[str] = []
        super().__init__(*args, **kwargs)

    def add_argument(self, *args, **kwargs):
        action = super().add_argument(*args, **kwargs)
        if not action.option_strings:
            self.positional_dests.append(action.dest)
        return action

    def error(self, message):
        raise OptionParseError(f"{self.prog}: {message}")


def add_help_flag(parser):
    parser.add_argument(*HELP_FLAGS, dest=HELP_DEST, action="store_true", help="Show help")


def help_requested(arguments) -> bool:
    """Check for a help flag in input that may not parse against the full schema."""
    probe = OptionParser()
    add_help_flag(probe)
    try:
        namespace, _ = probe.parse_known_args(list(arguments))
    except OptionParseError:
        return False
    return bool(getattr(namespace, HELP_DEST, False))


class OptionAdapter:
    """Wraps a parameterized command's option schema."""

    def __init__(self, command_class, prog=None):
        self.command_class = command_class
        self.prog = prog or command_class.NORM_NAME

    def build_parser(self) -> OptionParser:
        parser = OptionParser(prog=self.prog, description=self.command_class.DESCRIPTION)
        add_help_flag(parser)
        self.command_class.add_options(parser)

        if self.command_class.COMPOSITE:
            parser.add_argument(
                self.command_class.SELECTOR_DEST,
                nargs="?",
                metavar="command",
                help="Subcommand to run",
            )
            parser.add_argument(
                self.command_class.REMAINDER_DEST,
                nargs=argparse.REMAINDER,
                help=argparse.SUPPRESS,
            )
        return parser

    def usage(self) -> str:
        """Usage text: the parser's help plus, for composites, the nested commands."""
        text = self.build_parser().format_help()
        if self.command_class.COMPOSITE:
            from sak.commands.utils.help_renderer import render_help

            text += "\nCommands:\n" + render_help(self.command_class.SUBCOMMANDS)
        return text.rstrip("\n")

    def own_arguments(self, arguments) -> List[str]:
        """Tokens before a composite's selector; all of them for any other command."""
        if self.command_class.COMPOSITE:
            names = set(self.command_class.SUBCOMMANDS.list_commands())
            for index, token in enumerate(arguments):
                if token in names:
                    return arguments[:index]
        return arguments

    def parse(self, arguments) -> ParsedOptions:
        """
        Parse arguments against the command's schema.

        Raises:
            OptionParseError: malformed syntax or a missing (required) value
            UnrecognizedOptionError: tokens left over after parsing
        """
        arguments = list(arguments)
        parser = self.build_parser()

        try:
            namespace, extras = parser.parse_known_args(arguments)
        except OptionParseError:
            own = self.own_arguments(arguments)
            if help_requested(own):
                return ParsedOptions(help_requested=True)
            if len(own) == len(arguments) or not help_requested(arguments[len(own) :]):
                raise

            # help for a nested command still wins over this command's required options
            parser = self.build_parser()
            for action in parser._actions:
                action.required = False
            namespace, extras = parser.parse_known_args(arguments)

        values = vars(namespace)
        requested = bool(values.pop(HELP_DEST, False))

        positionals = []
        for dest in parser.positional_dests:
            value = values.get(dest)
            if isinstance(value, list):
                positionals.extend(value)
            elif value is not None:
                positionals.append(value)

        parsed = ParsedOptions(
            values=values, positionals=tuple(positionals), help_requested=requested
        )
        if requested:
            return parsed

        if extras:
            raise UnrecognizedOptionError(extras)

        return parsed

    def run(self, io, ctx) -> ExitStatus:
        """Parse ``ctx.arguments`` and invoke the command body unless help was requested."""
        try:
            options = self.parse(ctx.arguments)
        except (OptionParseError, UnrecognizedOptionError) as err:
            io.tool_error(str(err))
            return ExitStatus.FAILURE

        if options.help_requested:
            io.tool_output(self.usage())
            return ExitStatus.SUCCESS

        logger.debug("Running %s with %s", self.prog, options.as_dict())
        return self.command_class.do(io, ctx, options)

