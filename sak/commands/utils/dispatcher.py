import logging

from sak.commands.utils.context import CommandKind, ExitStatus
from sak.commands.utils.helpers import UnknownCommandError
from sak.commands.utils.options import OptionAdapter

logger = logging.getLogger(__name__)


def dispatch(registry, ctx, io) -> ExitStatus:
    """
    Route ``ctx`` to the registry entry named by its first argument.

    The matched command receives a derived context without the selector.
    Its exit status, and anything it raises, is passed through unchanged.
    An unmatched selector is reported and returns failure without running
    anything.

    Args:
        registry: CommandRegistry to match against
        ctx: InvocationContext whose first argument is the selector
        io: InputOutput instance

    Returns:
        ExitStatus of the invoked command, or FAILURE for an unknown selector
    """
    if not ctx.arguments:
        raise ValueError("dispatch requires at least one argument")

    selector = ctx.selector
    descriptor = registry.lookup(selector)
    if descriptor is None:
        io.tool_error(str(UnknownCommandError(selector)))
        return ExitStatus.FAILURE

    child_ctx = ctx.derive()
    command_class = descriptor.executable
    logger.debug("Dispatching %s with %s", child_ctx.prog, list(child_ctx.arguments))

    if command_class.KIND is CommandKind.SIMPLE:
        return command_class.run(io, child_ctx)

    return OptionAdapter(command_class, prog=child_ctx.prog).run(io, child_ctx)
