"""initial schema

Revision ID: 3f9c1a7b52de
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f9c1a7b52de"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("firstname", sa.String(length=100), nullable=True),
        sa.Column("lastname", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("is_dj", sa.Boolean(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("donated", sa.Boolean(), nullable=False),
        sa.CheckConstraint("username != ''", name="ck_member_non_empty_username"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_members_username", "members", ["username"], unique=True)

    op.create_table(
        "shows",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("dj_id", sa.Integer(), nullable=True),
        sa.Column("dj_name", sa.String(length=100), nullable=True),
        sa.Column("show_name", sa.String(length=255), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("show_time", sa.String(length=20), nullable=False),
        sa.Column("img_url", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.CheckConstraint("show_name != ''", name="ck_show_non_empty_name"),
        sa.CheckConstraint(
            "day_of_week BETWEEN 0 AND 6", name="ck_show_day_of_week_range"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("show_name"),
        sa.UniqueConstraint("day_of_week", "show_time", name="uq_show_slot"),
    )
    op.create_index("ix_shows_dj_id", "shows", ["dj_id"])

    op.create_table(
        "playlists",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_playlists_date", "playlists", ["date"])

    op.create_table(
        "songs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("artist", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("album", sa.String(length=255), nullable=True),
        sa.Column("album_link", sa.Text(), nullable=True),
        sa.Column("album_image", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("artist", "title", "album", name="uq_song_identity"),
    )
    op.create_index("ix_songs_artist", "songs", ["artist"])

    op.create_table(
        "show_playlists",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("show_id", sa.Integer(), nullable=False),
        sa.Column("playlist_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["show_id"], ["shows.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["playlist_id"], ["playlists.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("playlist_id"),
    )
    op.create_index("ix_show_playlists_show_id", "show_playlists", ["show_id"])

    op.create_table(
        "playlist_songs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("playlist_id", sa.Integer(), nullable=False),
        sa.Column("song_id", sa.Integer(), nullable=False),
        sa.Column("song_order", sa.Integer(), nullable=False),
        sa.CheckConstraint("song_order >= 1", name="ck_playlist_song_positive_order"),
        sa.ForeignKeyConstraint(["playlist_id"], ["playlists.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["song_id"], ["songs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("playlist_id", "song_order", name="uq_playlist_song_order"),
    )
    op.create_index("ix_playlist_songs_playlist_id", "playlist_songs", ["playlist_id"])
    op.create_index("ix_playlist_songs_song_id", "playlist_songs", ["song_id"])

    op.create_table(
        "member_favorites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.Column("show_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["show_id"], ["shows.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("member_id", "show_id", name="uq_member_favorite"),
    )
    op.create_index("ix_member_favorites_member_id", "member_favorites", ["member_id"])
    op.create_index("ix_member_favorites_show_id", "member_favorites", ["show_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_member_favorites_show_id", table_name="member_favorites")
    op.drop_index("ix_member_favorites_member_id", table_name="member_favorites")
    op.drop_table("member_favorites")

    op.drop_index("ix_playlist_songs_song_id", table_name="playlist_songs")
    op.drop_index("ix_playlist_songs_playlist_id", table_name="playlist_songs")
    op.drop_table("playlist_songs")

    op.drop_index("ix_show_playlists_show_id", table_name="show_playlists")
    op.drop_table("show_playlists")

    op.drop_index("ix_songs_artist", table_name="songs")
    op.drop_table("songs")

    op.drop_index("ix_playlists_date", table_name="playlists")
    op.drop_table("playlists")

    op.drop_index("ix_shows_dj_id", table_name="shows")
    op.drop_table("shows")

    op.drop_index("ix_members_username", table_name="members")
    op.drop_table("members")
