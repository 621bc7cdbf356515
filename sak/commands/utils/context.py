"""Values threaded through a single dispatch chain."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping, Optional, Tuple


class ExitStatus(IntEnum):
    SUCCESS = 0
    FAILURE = 1


class CommandKind(Enum):
    """How the dispatcher hands control to a command."""

    SIMPLE = "simple"  # run(io, ctx), no option parsing
    PARAMETERIZED = "parameterized"  # routed through the option adapter first


@dataclass(frozen=True)
class InvocationContext:
    """
    The token stream available to a command at the point it is dispatched.

    At top level ``arguments`` is ``argv[1:]``. Nested dispatch never mutates
    a context; it derives a new one with the consumed selector moved from
    ``arguments`` onto ``command_path``.
    """

    program_name: str
    arguments: Tuple[str, ...] = ()
    command_path: Tuple[str, ...] = ()
    root: Optional[Any] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(self, "command_path", tuple(self.command_path))

    @property
    def selector(self) -> Optional[str]:
        return self.arguments[0] if self.arguments else None

    @property
    def prog(self) -> str:
        """Program name followed by the commands consumed so far."""
        return " ".join((self.program_name,) + self.command_path)

    def derive(self) -> "InvocationContext":
        """Context for the command named by the selector."""
        if not self.arguments:
            raise ValueError("Cannot derive a context without a selector")
        return InvocationContext(
            program_name=self.program_name,
            arguments=self.arguments[1:],
            command_path=self.command_path + (self.arguments[0],),
            root=self.root,
        )

    def top(self) -> "InvocationContext":
        """Context of the program itself, before any command was consumed."""
        return InvocationContext(program_name=self.program_name, root=self.root)

    def with_arguments(self, arguments) -> "InvocationContext":
        return InvocationContext(
            program_name=self.program_name,
            arguments=tuple(arguments),
            command_path=self.command_path,
            root=self.root,
        )


@dataclass(frozen=True)
class ParsedOptions:
    """Result of running the option adapter over a command's arguments."""

    values: Mapping[str, Any] = field(default_factory=dict)
    positionals: Tuple[Any, ...] = ()
    help_requested: bool = False

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str, default: Any = None) -> Any:
        value = self.values.get(name)
        return default if value is None else value

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.values)
