"""
Association Models
-------------------

Linking rows between the core entities.

Models:
    - ShowPlaylist: playlist → owning show
    - PlaylistSong: song placed in a playlist at a position (``song_order``)
    - MemberFavorite: member → favorited show

Each link has its own surrogate id so a delete can report what it removed.
Links cascade away with either side of the association.
"""
from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ShowPlaylist(Base):
    """Links a playlist to the show it was created for."""

    __tablename__ = "show_playlists"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    show_id: Mapped[int] = mapped_column(
        ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True
    )
    playlist_id: Mapped[int] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, unique=True
    )


class PlaylistSong(Base):
    """
    A song's position within one playlist.

    ``song_order`` is 1-based and assigned at insertion as one more than
    the playlist's current maximum. Removing a song leaves a gap; positions
    are never renumbered.
    """

    __tablename__ = "playlist_songs"
    __table_args__ = (
        CheckConstraint("song_order >= 1", name="ck_playlist_song_positive_order"),
        UniqueConstraint("playlist_id", "song_order", name="uq_playlist_song_order"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    playlist_id: Mapped[int] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    song_id: Mapped[int] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    song_order: Mapped[int] = mapped_column(Integer, nullable=False)


class MemberFavorite(Base):
    """A member's favorite show; at most one row per (member, show)."""

    __tablename__ = "member_favorites"
    __table_args__ = (
        UniqueConstraint("member_id", "show_id", name="uq_member_favorite"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True
    )
    show_id: Mapped[int] = mapped_column(
        ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True
    )
