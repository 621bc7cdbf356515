from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Type

from sak.commands.utils.helpers import DuplicateCommandError


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    description: str
    executable: Type


class CommandRegistry:
    """
    Ordered, immutable set of commands known at build time.

    Declaration order is kept for help and completion rendering. Names are
    unique and case-sensitive; a duplicate name fails at construction.
    """

    __slots__ = ("_descriptors",)

    def __init__(self, *command_classes):
        descriptors = [
            CommandDescriptor(
                name=command_class.NORM_NAME,
                description=command_class.DESCRIPTION,
                executable=command_class,
            )
            for command_class in command_classes
        ]
        self._descriptors: Tuple[CommandDescriptor, ...] = self._validate(descriptors)

    @staticmethod
    def _validate(descriptors) -> Tuple[CommandDescriptor, ...]:
        seen = set()
        for descriptor in descriptors:
            if descriptor.name in seen:
                raise DuplicateCommandError(descriptor.name)
            seen.add(descriptor.name)
        return tuple(descriptors)

    def lookup(self, name: str) -> Optional[CommandDescriptor]:
        """Find the descriptor whose name equals ``name`` exactly."""
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def get_command(self, name: str) -> Optional[Type]:
        """Get command class by name."""
        descriptor = self.lookup(name)
        return descriptor.executable if descriptor else None

    def list_commands(self) -> List[str]:
        """List all registered command names in declaration order."""
        return [descriptor.name for descriptor in self._descriptors]

    @property
    def descriptors(self) -> Tuple[CommandDescriptor, ...]:
        return self._descriptors

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name) -> bool:
        return self.lookup(name) is not None

    def __repr__(self):
        return f"CommandRegistry({', '.join(self.list_commands())})"
