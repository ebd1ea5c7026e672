"""
Member Administration Commands
-------------------------------

Admin-side member management, the same operations the web app's admin
routes perform.

Commands:
    - add: Register a member with explicit role flags
    - list: List all members
    - show: Display one member and the show they host
    - remove: Delete a member

Usage:
    hosdb member add aliya --first-name Aliya --dj --admin
    hosdb member list
    hosdb member remove aliya --yes
"""
import click

from hos.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_db


def _flag(value: bool) -> str:
    return "yes" if value else "no"


@click.group()
@click.pass_context
def member(ctx: click.Context) -> None:
    """Manage station members."""
    pass


@member.command("add")
@click.argument("username")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (prompted if omitted)",
)
@click.option("--first-name", default=None, help="First name")
@click.option("--last-name", default=None, help="Last name")
@click.option("--email", default=None, help="Email address")
@click.option("--dj", "is_dj", is_flag=True, help="Member hosts a show")
@click.option("--admin", "is_admin", is_flag=True, help="Member can manage members")
@click.option("--donated", is_flag=True, help="Member has donated")
@click.pass_context
def member_add(ctx, username, password, first_name, last_name, email, is_dj, is_admin, donated):
    """Register a new member."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            created = db.members.register(
                {
                    "username": username,
                    "password": password,
                    "first_name": first_name,
                    "last_name": last_name,
                    "email": email,
                    "is_dj": is_dj,
                    "is_admin": is_admin,
                    "donated": donated,
                }
            )
        click.echo(f"✅ Member created: {created['username']} (ID: {created['id']})")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "member_add", additional_context={"username": username})


@member.command("list")
@click.pass_context
def member_list(ctx):
    """List all members."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            members = db.members.get_all()

        click.echo(f"\n👥 Members ({len(members)}):\n")
        for row in members:
            roles = [
                label
                for label, enabled in (("dj", row["is_dj"]), ("admin", row["is_admin"]))
                if enabled
            ]
            suffix = f" [{', '.join(roles)}]" if roles else ""
            click.echo(f"  • {row['username']} (ID: {row['id']}){suffix}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "member_list")


@member.command("show")
@click.argument("username")
@click.pass_context
def member_show(ctx, username):
    """Display a member's profile."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            row = db.members.get(username)

        name = " ".join(part for part in (row["first_name"], row["last_name"]) if part)
        click.echo(f"\n👤 {row['username']} (ID: {row['id']})")
        if name:
            click.echo(f"  Name: {name}")
        if row["email"]:
            click.echo(f"  Email: {row['email']}")
        click.echo(
            f"  DJ: {_flag(row['is_dj'])}  Admin: {_flag(row['is_admin'])}  "
            f"Donated: {_flag(row['donated'])}"
        )
        click.echo(f"  Show ID: {row['show_id'] if row['show_id'] is not None else '-'}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "member_show", additional_context={"username": username})


@member.command("remove")
@click.argument("username")
@click.confirmation_option(prompt="⚠️  Delete this member and their favorites?")
@click.pass_context
def member_remove(ctx, username):
    """Delete a member (their shows stay)."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.members.remove(username)
        click.echo(f"🗑️  Member removed: {username}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "member_remove", additional_context={"username": username})
