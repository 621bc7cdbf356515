import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.logging import RichHandler

from sak.commands import COMMANDS
from sak.commands.utils.context import ExitStatus, InvocationContext
from sak.commands.utils.dispatcher import dispatch
from sak.commands.utils.help_renderer import render_usage
from sak.commands.utils.helpers import CommandError
from sak.helpers.file_searcher import generate_search_path_list
from sak.io import InputOutput

DEFAULT_PROGRAM_NAME = "sak"
ENV_FILE_VAR = "SAK_ENV_FILE"
LOG_LEVEL_VAR = "SAK_LOG_LEVEL"

logger = logging.getLogger("sak")


def load_dotenv_files(dotenv_fname=None, encoding="utf-8"):
    dotenv_files = generate_search_path_list(".env", dotenv_fname)
    loaded = []
    for fname in dotenv_files:
        try:
            if Path(fname).exists():
                load_dotenv(fname, override=True, encoding=encoding)
                loaded.append(fname)
        except OSError as e:
            print(f"OSError loading {fname}: {e}", file=sys.stderr)
    return loaded


def configure_logging(io, level=None):
    level = (level or os.environ.get(LOG_LEVEL_VAR) or "WARNING").upper()

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=io.error_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    try:
        logger.setLevel(level)
    except ValueError:
        logger.setLevel(logging.WARNING)
        logger.warning("Unknown %s %r, using WARNING", LOG_LEVEL_VAR, level)


def get_program_name(argv0=None):
    argv0 = argv0 if argv0 is not None else (sys.argv[0] if sys.argv else "")
    name = Path(argv0).name
    if not name or name in ("__main__.py", "-c"):
        return DEFAULT_PROGRAM_NAME
    return name


def main(argv=None, input=None, output=None, error=None, prog=None, registry=None):
    """
    Run one command and return the process exit status.

    Args:
        argv: Arguments after the program name (defaults to sys.argv[1:])
        input, output, error: Streams for the InputOutput (default: stdio)
        prog: Program name used in usage and completion output
        registry: Top-level CommandRegistry (defaults to COMMANDS)
    """
    if argv is None:
        argv = sys.argv[1:]
    if registry is None:
        registry = COMMANDS

    io = InputOutput(input=input, output=output, error=error)

    loaded_dotenvs = load_dotenv_files(os.environ.get(ENV_FILE_VAR))
    configure_logging(io)
    for fname in loaded_dotenvs:
        logger.debug("Loaded %s", fname)

    ctx = InvocationContext(
        program_name=prog or get_program_name(),
        arguments=tuple(argv),
        root=registry,
    )

    if not ctx.arguments:
        io.tool_error(f"No command specified: {ctx.program_name} <command>")
        io.tool_output(render_usage(ctx, registry))
        return int(ExitStatus.FAILURE)

    try:
        status = dispatch(registry, ctx, io)
    except CommandError as err:
        io.tool_error(str(err))
        return int(ExitStatus.FAILURE)

    return int(status)


if __name__ == "__main__":
    status = main()
    sys.exit(status)
