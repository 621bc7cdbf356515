import logging

import requests

from sak.commands.utils.base_command import ParameterizedCommand
from sak.commands.utils.context import ExitStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class PayloadCommand(ParameterizedCommand):
    NORM_NAME = "payload"
    DESCRIPTION = "Fetch a payload over HTTP and pretty-print it"

    @classmethod
    def add_options(cls, parser):
        parser.add_argument("url", help="URL to fetch")
        parser.add_argument(
            "-t",
            "--timeout",
            type=float,
            default=DEFAULT_TIMEOUT,
            help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
        )
        parser.add_argument(
            "-H",
            "--header",
            action="append",
            default=[],
            metavar="NAME:VALUE",
            help="Extra request header, may be repeated",
        )
        parser.add_argument("--raw", action="store_true", help="Print the body without formatting")

    @classmethod
    def parse_headers(cls, io, pairs):
        headers = {}
        for pair in pairs:
            name, sep, value = pair.partition(":")
            if not sep or not name.strip():
                io.tool_error(f"Expected NAME:VALUE header, got: {pair}")
                return None
            headers[name.strip()] = value.strip()
        return headers

    @classmethod
    def do(cls, io, ctx, options):
        """GET the URL; JSON bodies are pretty-printed unless --raw is given."""
        headers = cls.parse_headers(io, options["header"])
        if headers is None:
            return ExitStatus.FAILURE

        url = options["url"]
        logger.debug("GET %s", url)
        try:
            response = requests.get(url, headers=headers, timeout=options["timeout"])
            response.raise_for_status()
        except requests.RequestException as err:
            io.tool_error(f"Error fetching {url}: {err}")
            return ExitStatus.FAILURE

        if options["raw"]:
            io.write(response.text)
            return ExitStatus.SUCCESS

        try:
            data = response.json()
        except ValueError:
            io.tool_output(response.text)
            return ExitStatus.SUCCESS

        io.print_json(data)
        return ExitStatus.SUCCESS
