import configparser
import logging
import os
from pathlib import Path

import shtab

from sak.commands.utils.base_command import ParameterizedCommand
from sak.commands.utils.context import ExitStatus

logger = logging.getLogger(__name__)

ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
SESSION_TOKEN = "AWS_SESSION_TOKEN"

# (environment variable, credentials key, characters shown when echoing)
CREDENTIAL_FIELDS = (
    (ACCESS_KEY_ID, "aws_access_key_id", 10),
    (SECRET_ACCESS_KEY, "aws_secret_access_key", 20),
    (SESSION_TOKEN, "aws_session_token", 45),
)


def env(key):
    value = os.environ.get(key)
    if value is None:
        return None
    return value.strip()


class UpdateAwsCommand(ParameterizedCommand):
    NORM_NAME = "update-aws"
    DESCRIPTION = "Update AWS credentials"

    @classmethod
    def add_options(cls, parser):
        parser.add_argument(
            "-p",
            "--profile",
            default="default",
            help="Credentials profile to rewrite (default: default)",
        )
        parser.add_argument(
            "--credentials",
            metavar="FILE",
            help=(
                "Credentials file (default: ~/.aws/credentials). "
                "The file is rewritten and comments in it are dropped"
            ),
        ).complete = shtab.FILE

    @classmethod
    def credentials_path(cls, io, options):
        if options.get("credentials"):
            return Path(options["credentials"]).expanduser()

        home = env("HOME")
        if not home:
            io.tool_error("No HOME environment variable found")
            return None
        return Path(home) / ".aws" / "credentials"

    @classmethod
    def do(cls, io, ctx, options):
        """
        Rewrite one credentials profile from the AWS_* environment variables.

        Other profiles are kept, but the file is regenerated by configparser so
        comments do not survive.
        """
        cred_path = cls.credentials_path(io, options)
        if cred_path is None:
            return ExitStatus.FAILURE

        if not cred_path.exists():
            io.tool_error(f"No AWS credentials file found: {cred_path}")
            return ExitStatus.FAILURE

        values = {var: env(var) for var, _, _ in CREDENTIAL_FIELDS}
        missing = [var for var, value in values.items() if not value]
        if missing:
            io.tool_error(f"Missing environment variables: {', '.join(missing)}")
            return ExitStatus.FAILURE

        config = configparser.ConfigParser(interpolation=None)
        try:
            config.read(cred_path, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as err:
            io.tool_error(f"Failed to parse AWS credentials file {cred_path}: {err}")
            return ExitStatus.FAILURE

        profile = options["profile"]
        config[profile] = {key: values[var] for var, key, _ in CREDENTIAL_FIELDS}

        try:
            with open(cred_path, "w", encoding="utf-8") as f:
                config.write(f)
        except OSError as err:
            io.tool_error(f"Failed to open AWS credentials file: {cred_path} ({err})")
            return ExitStatus.FAILURE

        logger.debug("Wrote profile %s to %s", profile, cred_path)

        for var, key, shown in CREDENTIAL_FIELDS:
            io.tool_output(f"{key} = {values[var][:shown]}…")
        io.tool_output("AWS credentials updated", style="green")
        return ExitStatus.SUCCESS
