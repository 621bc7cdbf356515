from sak.commands.utils.base_command import SimpleCommand
from sak.commands.utils.context import ExitStatus
from sak.commands.utils.help_renderer import render_usage


class HelpCommand(SimpleCommand):
    NORM_NAME = "help"
    DESCRIPTION = "Show help"

    @classmethod
    def run(cls, io, ctx):
        """List the top-level commands."""
        io.tool_output(render_usage(ctx.top(), ctx.root))
        return ExitStatus.SUCCESS
