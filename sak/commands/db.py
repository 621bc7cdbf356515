import logging
import os
import sqlite3
from contextlib import closing
from pathlib import Path

import shtab

from sak.commands.utils.base_command import CompositeCommand, ParameterizedCommand
from sak.commands.utils.context import ExitStatus
from sak.commands.utils.helpers import CommandError
from sak.commands.utils.registry import CommandRegistry

logger = logging.getLogger(__name__)

DATABASE_ENV = "SAK_DATABASE"
TABLES_QUERY = "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"


class DatabaseError(CommandError):
    pass


def add_database_option(parser):
    parser.add_argument(
        "-d",
        "--database",
        metavar="PATH",
        help=f"SQLite database file (default: ${DATABASE_ENV})",
    ).complete = shtab.FILE


def connect(options, writable=False):
    database = options.get("database") or os.environ.get(DATABASE_ENV)
    if not database:
        raise DatabaseError(f"No database given: use --database or set {DATABASE_ENV}")

    path = Path(database).expanduser()
    if not path.is_file():
        raise DatabaseError(f"Database not found: {path}")

    logger.debug("Connecting to %s", path)
    mode = "rw" if writable else "ro"
    try:
        return sqlite3.connect(f"{path.resolve().as_uri()}?mode={mode}", uri=True)
    except sqlite3.Error as err:
        raise DatabaseError(f"Failed to open database {path}: {err}") from err


def execute(conn, query, commit=False):
    """Run one statement and return ``(columns, rows)``; columns is empty without a result set."""
    try:
        cursor = conn.execute(query)
        rows = cursor.fetchall()
        if commit:
            conn.commit()
    except sqlite3.Error as err:
        raise DatabaseError(f"Query failed: {err}") from err

    columns = [column[0] for column in cursor.description or ()]
    return columns, rows


class DbQueryCommand(ParameterizedCommand):
    NORM_NAME = "query"
    DESCRIPTION = "Run a SQL query and print the result set"

    @classmethod
    def add_options(cls, parser):
        parser.add_argument("-q", "--query", required=True, help="SQL statement to execute")
        parser.add_argument(
            "-w", "--write", action="store_true", help="Open the database read-write and commit"
        )
        add_database_option(parser)

    @classmethod
    def do(cls, io, ctx, options):
        with closing(connect(options, writable=options["write"])) as conn:
            columns, rows = execute(conn, options["query"], commit=options["write"])

        if not columns:
            io.tool_output("Query returned no result set")
            return ExitStatus.SUCCESS

        io.print_table(columns, rows)
        io.tool_output(f"{len(rows)} row(s)")
        return ExitStatus.SUCCESS


class DbTablesCommand(ParameterizedCommand):
    NORM_NAME = "tables"
    DESCRIPTION = "List the tables in the database"

    @classmethod
    def add_options(cls, parser):
        add_database_option(parser)

    @classmethod
    def do(cls, io, ctx, options):
        with closing(connect(options)) as conn:
            _, rows = execute(conn, TABLES_QUERY)

        for (name,) in rows:
            io.tool_output(name)
        return ExitStatus.SUCCESS


class DbCommand(CompositeCommand):
    NORM_NAME = "db"
    DESCRIPTION = "Query a relational database"
    SUBCOMMANDS = CommandRegistry(DbQueryCommand, DbTablesCommand)
