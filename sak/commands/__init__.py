"""
Command system for sak.

This package contains the command implementations and the registry that
ties them into the top-level `sak` program.
"""

from .complete import CompleteCommand
from .db import DbCommand, DbQueryCommand, DbTablesCommand
from .dj_test_names import DjTestNamesCommand
from .help import HelpCommand
from .payload import PayloadCommand
from .update_aws import UpdateAwsCommand
from .utils.base_command import (
    BaseCommand,
    CompositeCommand,
    ParameterizedCommand,
    SimpleCommand,
)
from .utils.context import CommandKind, ExitStatus, InvocationContext, ParsedOptions
from .utils.dispatcher import dispatch
from .utils.helpers import (
    CommandError,
    DuplicateCommandError,
    OptionParseError,
    UnknownCommandError,
    UnrecognizedOptionError,
)
from .utils.registry import CommandDescriptor, CommandRegistry

# Top-level commands, in the order help and completion list them
COMMANDS = CommandRegistry(
    DjTestNamesCommand,
    UpdateAwsCommand,
    DbCommand,
    PayloadCommand,
    HelpCommand,
    CompleteCommand,
)


__all__ = [
    "COMMANDS",
    "BaseCommand",
    "SimpleCommand",
    "ParameterizedCommand",
    "CompositeCommand",
    "CommandKind",
    "CommandDescriptor",
    "CommandRegistry",
    "ExitStatus",
    "InvocationContext",
    "ParsedOptions",
    "dispatch",
    "CommandError",
    "DuplicateCommandError",
    "OptionParseError",
    "UnknownCommandError",
    "UnrecognizedOptionError",
    "CompleteCommand",
    "DbCommand",
    "DbQueryCommand",
    "DbTablesCommand",
    "DjTestNamesCommand",
    "HelpCommand",
    "PayloadCommand",
    "UpdateAwsCommand",
]
