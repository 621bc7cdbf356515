from typing import Iterable


class CommandError(Exception):
    """Base class for errors reported to the user with a nonzero exit status."""


class UnknownCommandError(CommandError):
    """The selector matches no registry entry."""

    def __init__(self, selector):
        self.selector = selector
        super().__init__(f"Unknown option: {selector}")


class OptionParseError(CommandError):
    """Malformed option syntax or a missing value for a declared option."""


class UnrecognizedOptionError(CommandError):
    """One or more tokens were consumed by neither the options nor the positionals."""

    def __init__(self, tokens: Iterable[str]):
        self.tokens = list(tokens)
        super().__init__(f"Unrecognized options: {' '.join(self.tokens)}")


class DuplicateCommandError(ValueError):
    """Two commands in one registry share a name."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Duplicate command name: {name}")
