from abc import ABC, ABCMeta

from sak.commands.utils.context import CommandKind, ExitStatus

# Abstract bases that concrete commands derive from; they skip validation.
_BASE_CLASSES = {"BaseCommand", "SimpleCommand", "ParameterizedCommand", "CompositeCommand"}


class CommandMeta(ABCMeta):
    """Metaclass for validating command classes at definition time."""

    def __new__(mcs, name, bases, namespace):
        # Create the class first
        cls = super().__new__(mcs, name, bases, namespace)

        if name in _BASE_CLASSES:
            return cls

        if not name.endswith("Command"):
            raise TypeError(f"Command class must end with 'Command', got '{name}'")

        if getattr(cls, "NORM_NAME", None) is None:
            raise TypeError("Command class must define NORM_NAME")

        if getattr(cls, "DESCRIPTION", None) is None:
            raise TypeError("Command class must define DESCRIPTION")

        if cls.KIND is None:
            raise TypeError("Command class must derive from SimpleCommand or ParameterizedCommand")

        if cls.COMPOSITE:
            if getattr(cls, "SUBCOMMANDS", None) is None:
                raise TypeError("Composite command class must define SUBCOMMANDS")
            # composites inherit their entry point
            return cls

        if cls.ENTRY_POINT not in namespace:
            raise TypeError(f"Command class must implement {cls.ENTRY_POINT} method")

        return cls


class BaseCommand(ABC, metaclass=CommandMeta):
    """Abstract base class for all commands."""

    NORM_NAME = None  # Name matched against the selector (e.g., "update-aws")
    DESCRIPTION = None  # One-line description for help and completion
    KIND = None  # CommandKind the dispatcher branches on
    ENTRY_POINT = None
    COMPOSITE = False


class SimpleCommand(BaseCommand):
    """A command with no option schema; the dispatcher calls ``run`` directly."""

    KIND = CommandKind.SIMPLE
    ENTRY_POINT = "run"

    @classmethod
    def run(cls, io, ctx) -> ExitStatus:
        """
        Execute the command.

        Args:
            io: InputOutput instance
            ctx: InvocationContext with the tokens following the command name

        Returns:
            ExitStatus
        """
        raise NotImplementedError


class ParameterizedCommand(BaseCommand):
    """A command whose arguments are parsed against a declared schema before ``do`` runs."""

    KIND = CommandKind.PARAMETERIZED
    ENTRY_POINT = "do"

    @classmethod
    def add_options(cls, parser):
        """
        Declare options and positionals on an argparse parser.

        The implicit -h/--help flag is added by the option adapter and must
        not be declared here.
        """

    @classmethod
    def do(cls, io, ctx, options) -> ExitStatus:
        """
        Execute the command with parsed options.

        Args:
            io: InputOutput instance
            ctx: InvocationContext with the tokens following the command name
            options: ParsedOptions produced by the option adapter

        Returns:
            ExitStatus
        """
        raise NotImplementedError


class CompositeCommand(ParameterizedCommand):
    """
    A parameterized command that owns a nested registry.

    The option adapter gives it a positional ``command`` slot and collects
    every later token into ``arguments``; ``do`` then dispatches into
    ``SUBCOMMANDS`` the same way the top level does.
    """

    COMPOSITE = True
    SUBCOMMANDS = None  # CommandRegistry of nested commands

    SELECTOR_DEST = "command"
    REMAINDER_DEST = "arguments"

    @classmethod
    def do(cls, io, ctx, options) -> ExitStatus:
        from sak.commands.utils.dispatcher import dispatch
        from sak.commands.utils.help_renderer import render_usage

        selector = options.get(cls.SELECTOR_DEST)
        if selector is None:
            io.tool_error(f"No command specified for {ctx.prog}")
            io.tool_output(render_usage(ctx, cls.SUBCOMMANDS))
            return ExitStatus.FAILURE

        remainder = options.get(cls.REMAINDER_DEST, [])
        return dispatch(cls.SUBCOMMANDS, ctx.with_arguments([selector, *remainder]), io)
