#!/usr/bin/env python3
"""
hosdb
-----

Administrative command line for the station database, for work that
happens outside the web app: creating the file, moving between schema
revisions, managing member accounts and reading back the schedule.

    hosdb init | reset
    hosdb migration upgrade | downgrade | status | history
    hosdb member add | list | show | remove
    hosdb query shows | show | playlist | favorites

Global options (--db-path, --alembic-dir, --log-dir) come before the
subcommand:

    hosdb --db-path /srv/hos/hos.db member add aliya --admin --dj
"""
import logging
from pathlib import Path

import click

from hos.core.exceptions import (
    BadRequestError,
    DatabaseError,
    NotFoundError,
    UnauthorizedError,
)
from hos.core.paths import ALEMBIC_DIR, DB_PATH, LOG_DIR
from hos.database import HosDB

# Failures a command reports and exits on; anything else is a bug
CLI_ERRORS = (DatabaseError, BadRequestError, NotFoundError, UnauthorizedError)

_PATH_OPTIONS = (
    ("--db-path", DB_PATH, "SQLite database file"),
    ("--alembic-dir", ALEMBIC_DIR, "Folder with the migration scripts"),
    ("--log-dir", LOG_DIR, "Folder for database.log and errors.log"),
)


def _path_options(command):
    for flag, default, help_text in reversed(_PATH_OPTIONS):
        command = click.option(
            flag,
            type=click.Path(path_type=Path),
            default=default,
            show_default=True,
            help=help_text,
        )(command)
    return command


@click.group()
@_path_options
@click.option("--verbose", is_flag=True, help="Print tracebacks on failure")
@click.pass_context
def cli(ctx, db_path, alembic_dir, log_dir, verbose):
    """Manage the hos station database."""
    # Alembic reports every step at INFO; keep command output readable
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj.update(
        db_path=Path(db_path),
        alembic_dir=Path(alembic_dir),
        log_dir=Path(log_dir),
        verbose=verbose,
    )


def get_db(ctx: click.Context) -> HosDB:
    """Open the database once per invocation and cache it on ctx.obj."""
    obj = ctx.find_root().obj
    if "db" not in obj:
        db = HosDB(obj["db_path"], obj["alembic_dir"], log_dir=obj["log_dir"])
        obj["db"] = db
        obj["logger"] = db.logger
    return obj["db"]


# Subcommands import get_db from here
from .setup import init, reset  # noqa: E402
from .migration import migration  # noqa: E402
from .members import member  # noqa: E402
from .query import query  # noqa: E402

for _command in (init, reset, migration, member, query):
    cli.add_command(_command)


if __name__ == "__main__":
    cli(obj={})
