from sak.commands.utils.base_command import ParameterizedCommand
from sak.commands.utils.completion import FISH, SUPPORTED_SHELLS, render_completion
from sak.commands.utils.context import ExitStatus


class CompleteCommand(ParameterizedCommand):
    NORM_NAME = "complete"
    DESCRIPTION = "Show completion script"

    @classmethod
    def add_options(cls, parser):
        parser.add_argument(
            "-s",
            "--shell",
            choices=SUPPORTED_SHELLS,
            default=FISH,
            help=f"Shell to generate the script for (default: {FISH})",
        )

    @classmethod
    def do(cls, io, ctx, options):
        """Print a completion script covering every command reachable from the top level."""
        script = render_completion(ctx.program_name, ctx.root, shell=options["shell"])
        io.write(script)
        return ExitStatus.SUCCESS
