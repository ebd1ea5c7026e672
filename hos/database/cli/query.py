"""
Query & Browse Commands
------------------------

Read-only views of the schedule and playlists.

Commands:
    - shows: List shows, optionally for one day
    - show: Display a show with its playlists
    - playlist: Display a playlist with its songs in order
    - favorites: List a member's favorite shows
"""
import click

from hos.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_db

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@click.group()
@click.pass_context
def query(ctx: click.Context) -> None:
    """Browse and query database content."""
    pass


@query.command("shows")
@click.option("--day", type=int, default=None, help="Day of week, 0 = Sunday")
@click.pass_context
def shows(ctx, day):
    """List the weekly schedule."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            schedule = db.shows.get_all(day_of_week=day)

        click.echo(f"\n📻 Shows ({len(schedule)}):\n")
        for row in schedule:
            click.echo(
                f"  {DAY_NAMES[row['day_of_week']]} {row['show_time']:>8}  "
                f"{row['show_name']} (ID: {row['id']})"
            )

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "shows", additional_context={"day": day})


@query.command("show")
@click.argument("show_id", type=int)
@click.pass_context
def show(ctx, show_id):
    """Display a show with its playlists."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            row = db.shows.get(show_id)

        click.echo(f"\n📻 {row['show_name']}")
        click.echo(f"  {DAY_NAMES[row['day_of_week']]} at {row['show_time']}")
        if row["dj_name"]:
            click.echo(f"  DJ: {row['dj_name']}")

        click.echo(f"\n📜 Playlists ({len(row['playlists'])}):")
        for playlist in row["playlists"]:
            click.echo(f"  • {playlist['date'].isoformat()} (ID: {playlist['id']})")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "show", additional_context={"show_id": show_id})


@query.command("playlist")
@click.argument("playlist_id", type=int)
@click.pass_context
def playlist(ctx, playlist_id):
    """Display a playlist with its songs in order."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            row = db.playlists.get(playlist_id)

        click.echo(f"\n📅 {row['date'].isoformat()}")
        if row["description"]:
            click.echo(f"  {row['description']}")

        click.echo(f"\n🎵 Songs ({len(row['songs'])}):")
        for song in row["songs"]:
            album = f" ({song['album']})" if song["album"] else ""
            click.echo(f"  {song['song_order']:3d}. {song['artist']} - {song['title']}{album}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "playlist", additional_context={"playlist_id": playlist_id})


@query.command("favorites")
@click.argument("member_id", type=int)
@click.pass_context
def favorites(ctx, member_id):
    """List the shows a member has favorited."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            rows = db.favorites.get(member_id)

        click.echo(f"\n⭐ Favorites ({len(rows)}):")
        for row in rows:
            click.echo(f"  • Show ID: {row['show_id']}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "favorites", additional_context={"member_id": member_id})
