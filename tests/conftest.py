import os

import pytest

from sak.commands.utils.base_command import (
    CompositeCommand,
    ParameterizedCommand,
    SimpleCommand,
)
from sak.commands.utils.context import ExitStatus, InvocationContext
from sak.commands.utils.registry import CommandRegistry
from sak.io import InputOutput


class BarCommand(SimpleCommand):
    NORM_NAME = "bar"
    DESCRIPTION = "Bar option"

    @classmethod
    def run(cls, io, ctx):
        io.tool_output("Bar option")
        return ExitStatus.SUCCESS


class BazCommand(SimpleCommand):
    NORM_NAME = "baz"
    DESCRIPTION = "Baz option"

    @classmethod
    def run(cls, io, ctx):
        io.tool_output("Baz option")
        return ExitStatus.SUCCESS


class FooCommand(CompositeCommand):
    NORM_NAME = "foo"
    DESCRIPTION = "Foo option"
    SUBCOMMANDS = CommandRegistry(BarCommand, BazCommand)

    @classmethod
    def add_options(cls, parser):
        parser.add_argument("-n", "--name", help="Raw")


class QueryCommand(ParameterizedCommand):
    NORM_NAME = "query"
    DESCRIPTION = "Run a query"

    @classmethod
    def add_options(cls, parser):
        parser.add_argument("--query", required=True, help="query to run")
        parser.add_argument("--limit", type=int, default=10, help="row limit")

    @classmethod
    def do(cls, io, ctx, options):
        io.tool_output(f"query={options['query']} limit={options['limit']}")
        return ExitStatus.SUCCESS


class CopyCommand(ParameterizedCommand):
    NORM_NAME = "copy"
    DESCRIPTION = "Copy files"

    @classmethod
    def add_options(cls, parser):
        parser.add_argument("source")
        parser.add_argument("dest")
        parser.add_argument("-f", "--force", action="store_true")

    @classmethod
    def do(cls, io, ctx, options):
        return ExitStatus.SUCCESS


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch, mocker):
    """Isolated test environment with a fake HOME and no inherited variables."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    clean_env = {
        "HOME": str(fake_home),
    }

    mocker.patch.dict(os.environ, clean_env, clear=True)
    monkeypatch.chdir(tmp_path)

    yield tmp_path


@pytest.fixture
def io():
    return InputOutput(pretty=False)


@pytest.fixture
def commands():
    """The sample command classes, keyed by name."""
    return {
        "bar": BarCommand,
        "baz": BazCommand,
        "foo": FooCommand,
        "query": QueryCommand,
        "copy": CopyCommand,
    }


@pytest.fixture
def bar_baz_registry():
    return CommandRegistry(BarCommand, BazCommand)


@pytest.fixture
def root_registry():
    return CommandRegistry(FooCommand, QueryCommand, CopyCommand)


@pytest.fixture
def make_ctx(root_registry):
    def _make_ctx(*arguments, registry=None):
        return InvocationContext(
            program_name="sak",
            arguments=arguments,
            root=registry or root_registry,
        )

    return _make_ctx
