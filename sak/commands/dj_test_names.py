import re
from typing import List

import shtab

from sak.commands.utils.base_command import ParameterizedCommand
from sak.commands.utils.context import ExitStatus

# "test_create (accounts.tests.test_views.SignupTests)"
LINE_PATTERN = re.compile(r"(test_\w+) \((\w+(?:\.\w+)+)\)")
WORD_PATTERN = re.compile(r"\w+")

STDIO = "-"
COMPLETE_PREFIX = "complete -c manage.py -n '__fish_complete_suboption test' -a "


def extract_test_names(text: str) -> List[str]:
    """Dotted test names (``module.Class.test_method``) in order of appearance."""
    names = []
    for match in LINE_PATTERN.finditer(text):
        words = WORD_PATTERN.findall(match.group(2))
        words.append(match.group(1))
        names.append(".".join(words))
    return names


def format_completion(names: List[str]) -> str:
    return COMPLETE_PREFIX + "'" + " ".join(names) + "'\n"


class DjTestNamesCommand(ParameterizedCommand):
    NORM_NAME = "dj-test-names"
    DESCRIPTION = "Dj test names complete script"

    @classmethod
    def add_options(cls, parser):
        parser.add_argument(
            "-i", "--input", metavar="FILE", help="input file ('-' for stdin)"
        ).complete = shtab.FILE
        parser.add_argument(
            "-o", "--output", metavar="FILE", help="output file ('-' for stdout)"
        ).complete = shtab.FILE

    @classmethod
    def read(cls, io, filename):
        if filename is None:
            if io.input_is_tty():
                io.tool_error("No input file specified")
                return None
            return io.read_input()

        if filename == STDIO:
            return io.read_input()

        try:
            with open(filename, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError:
            io.tool_error(f"Failed to open input file: {filename}")
            return None

    @classmethod
    def write(cls, io, filename, content):
        if filename is None or filename == STDIO:
            io.write(content)
            return ExitStatus.SUCCESS

        try:
            with open(filename, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError:
            io.tool_error(f"Failed to open output file: {filename}")
            return ExitStatus.FAILURE
        return ExitStatus.SUCCESS

    @classmethod
    def do(cls, io, ctx, options):
        """Turn Django test runner output into a fish completion line for `manage.py test`."""
        text = cls.read(io, options.get("input"))
        if text is None:
            return ExitStatus.FAILURE

        names = extract_test_names(text)
        if not names:
            io.tool_warning("No test names found")
            return ExitStatus.SUCCESS

        return cls.write(io, options.get("output"), format_completion(names))
