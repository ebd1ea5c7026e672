"""
Database lifecycle
------------------

    hosdb init    # create the file, or migrate an existing one
    hosdb reset   # delete the file and build an empty one (asks first)
"""
import click

from hos.core.exceptions import DatabaseError
from hos.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create or migrate the database at --db-path."""
    click.echo("🗄️  Initializing database schema")
    try:
        db = get_db(ctx)
        # Opening a new file already builds it; this migrates older files
        db.initialize_schema()
    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
    click.echo(f"✅ Database ready: {db.db_path}")


@click.command()
@click.confirmation_option(
    prompt="⚠️  Every member, show and playlist will be deleted. Continue?"
)
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Delete all data and start from an empty schema."""
    db_path = ctx.obj["db_path"]
    click.echo(f"🗑️  Resetting database {db_path}")

    # A cached handle would keep the old file's connections alive
    stale = ctx.obj.pop("db", None)
    if stale is not None:
        stale.engine.dispose()
    db_path.unlink(missing_ok=True)

    try:
        get_db(ctx)
    except DatabaseError as e:
        handle_cli_error(ctx, e, "reset", {"db_path": str(db_path)})
    click.echo("✅ Database reset complete")
