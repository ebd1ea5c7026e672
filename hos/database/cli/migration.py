"""
Schema migrations
-----------------

Thin wrappers over HosDB's Alembic helpers.

    hosdb migration upgrade [--revision REV]   # default: newest
    hosdb migration downgrade REV              # "base" empties the schema
    hosdb migration status                     # file revision vs newest script
    hosdb migration history                    # every known revision
"""
import click

from hos.core.exceptions import DatabaseError
from hos.core.logging_manager import handle_cli_error
from . import get_db


@click.group()
def migration() -> None:
    """Inspect and move the schema between Alembic revisions."""


def _migrate(ctx: click.Context, direction: str, revision: str) -> None:
    """Run an upgrade or downgrade and report the outcome."""
    arrow = "⬆️ " if direction == "upgrade" else "⬇️ "
    click.echo(f"{arrow} {direction.capitalize()} to revision {revision}")
    try:
        db = get_db(ctx)
        if direction == "upgrade":
            db.upgrade_database(revision)
        else:
            db.downgrade_database(revision)
    except DatabaseError as e:
        handle_cli_error(ctx, e, f"migration_{direction}", {"revision": revision})
    click.echo(f"✅ Database {direction}d successfully")


@migration.command("upgrade")
@click.option("--revision", default="head", show_default=True, help="Target revision")
@click.pass_context
def migration_upgrade(ctx: click.Context, revision: str) -> None:
    """Apply migrations up to REVISION."""
    _migrate(ctx, "upgrade", revision)


@migration.command("downgrade")
@click.argument("revision")
@click.pass_context
def migration_downgrade(ctx: click.Context, revision: str) -> None:
    """Revert migrations down to REVISION."""
    _migrate(ctx, "downgrade", revision)


@migration.command("status")
@click.pass_context
def migration_status(ctx: click.Context) -> None:
    """Compare the database revision with the newest migration."""
    try:
        report = get_db(ctx).get_migration_history()
    except DatabaseError as e:
        handle_cli_error(ctx, e, "migration_status")

    if "error" in report:
        click.echo(f"⚠️  Could not read migration state: {report['error']}", err=True)
        ctx.exit(1)

    click.echo(f"Current Revision: {report['current_revision'] or '(none)'}")
    click.echo(f"Head Revision:    {report['head_revision'] or '(none)'}")
    click.echo(f"Status: {report['status']}")


@migration.command("history")
@click.pass_context
def migration_history(ctx: click.Context) -> None:
    """List migration scripts, newest first; '*' marks the applied one."""
    try:
        report = get_db(ctx).get_migration_history()
    except DatabaseError as e:
        handle_cli_error(ctx, e, "migration_history")

    if "error" in report:
        click.echo(f"⚠️  Could not read migration state: {report['error']}", err=True)
        ctx.exit(1)

    for entry in report["revisions"]:
        marker = "*" if entry["revision"] == report["current_revision"] else " "
        parent = entry["down_revision"] or "base"
        click.echo(f"{marker} {entry['revision']} <- {parent}  {entry['doc'] or ''}".rstrip())
