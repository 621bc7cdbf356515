"""
Shell completion scripts derived from a command registry.

Unlike help, completion walks the whole command tree: a shell has to offer
every level of subcommands up front.
"""

import argparse
from collections import deque

import shtab

from sak.commands.utils.context import CommandKind

FISH = "fish"
SUPPORTED_SHELLS = (FISH,) + tuple(shtab.SUPPORTED_SHELLS)


def fish_quote(value) -> str:
    value = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{value}'"


def iter_registry(registry):
    """
    Yield ``(parents, registry, descriptor)`` for every reachable command.

    Entries are produced breadth first, so a composite's own entry always
    precedes its children's.
    """
    queue = deque([((), registry)])
    while queue:
        parents, current = queue.popleft()
        for descriptor in current:
            yield parents, current, descriptor
        for descriptor in current:
            if descriptor.executable.COMPOSITE:
                queue.append((parents + (descriptor.name,), descriptor.executable.SUBCOMMANDS))


def fish_condition(parents, registry) -> str:
    if not parents:
        return "__fish_use_subcommand"
    siblings = " ".join(registry.list_commands())
    return (
        f"__fish_seen_subcommand_from {parents[-1]};"
        f" and not __fish_seen_subcommand_from {siblings}"
    )


def render_fish_completion(program_name, registry) -> str:
    prog = fish_quote(program_name)
    lines = [
        f"complete -c {prog} -e -n '__fish_use_subcommand'",
        f"complete -c {prog} -f",
    ]
    for parents, current, descriptor in iter_registry(registry):
        lines.append(
            f"complete -c {prog} -n {fish_quote(fish_condition(parents, current))}"
            f" -a {fish_quote(descriptor.name)} -d {fish_quote(descriptor.description)}"
        )
    return "\n".join(lines) + "\n"


def _add_command_parsers(parser, registry):
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    for descriptor in registry:
        command_class = descriptor.executable
        subparser = subparsers.add_parser(
            descriptor.name,
            help=descriptor.description,
            description=descriptor.description,
        )
        if command_class.KIND is CommandKind.PARAMETERIZED:
            command_class.add_options(subparser)
        if command_class.COMPOSITE:
            _add_command_parsers(subparser, command_class.SUBCOMMANDS)


def build_completion_parser(program_name, registry) -> argparse.ArgumentParser:
    """Project the registry tree onto nested argparse parsers for shtab."""
    parser = argparse.ArgumentParser(prog=program_name)
    _add_command_parsers(parser, registry)
    return parser


def render_completion(program_name, registry, shell=FISH) -> str:
    if shell == FISH:
        return render_fish_completion(program_name, registry)
    if shell not in SUPPORTED_SHELLS:
        raise ValueError(f"Unsupported shell: {shell}")
    return shtab.complete(build_completion_parser(program_name, registry), shell=shell)
