"""InputOutput - console adapter shared by every command."""

import json
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text


class InputOutput:
    """Writes command output to stdout and diagnostics to stderr via rich consoles."""

    def __init__(self, input=None, output=None, error=None, pretty=True):
        """Initialize InputOutput.

        Args:
            input: Stream commands read from (defaults to sys.stdin at read time)
            output: Stream for regular output (defaults to sys.stdout)
            error: Stream for diagnostics (defaults to sys.stderr)
            pretty: Allow colors when the stream is a terminal
        """
        self._input = input
        self.pretty = pretty

        # file=None lets rich resolve sys.stdout / sys.stderr at print time
        self.console = Console(file=output, no_color=not pretty, highlight=False)
        self.error_console = Console(file=error, stderr=True, no_color=not pretty, highlight=False)

    @property
    def input(self):
        return self._input if self._input is not None else sys.stdin

    def input_is_tty(self):
        isatty = getattr(self.input, "isatty", None)
        return bool(isatty and isatty())

    def read_input(self):
        return self.input.read()

    def _print(self, console, message, style=None, end="\n"):
        console.print(Text(message, style=style or ""), soft_wrap=True, end=end)

    def tool_output(self, message="", style=None, end="\n"):
        self._print(self.console, message, style=style, end=end)

    def tool_warning(self, message=""):
        self._print(self.error_console, message, style="yellow")

    def tool_error(self, message=""):
        self._print(self.error_console, message, style="red")

    def write(self, text):
        """Write text verbatim (no styling, wrapping or tab expansion)."""
        stream = self.console.file
        stream.write(text)
        stream.flush()

    def print_json(self, data):
        if self.pretty:
            self.console.print_json(data=data)
        else:
            self.tool_output(json.dumps(data, indent=2))

    def print_table(self, columns, rows, title=None):
        table = Table(title=Text(title) if title is not None else None)
        for column in columns:
            table.add_column(Text(str(column)))
        for row in rows:
            table.add_row(*[Text("NULL" if value is None else str(value)) for value in row])
        self.console.print(table)
