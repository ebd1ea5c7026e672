"""
Core Models
------------

Primary entities of the hos database.

Models:
    - Member: DJs, admins and listeners who log in
    - Show: A weekly timeslot hosted by a member
    - Playlist: One dated broadcast of a show
    - Song: A song identity shared by every playlist that plays it

Relationships between these rows live in the association models
(``show_playlists``, ``playlist_songs``, ``member_favorites``) and are
maintained by the entity managers.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


# ----- Member -----
class Member(Base):
    """
    A registered member of the station.

    Attributes:
        id: Primary key
        username: Login name (unique)
        password: Password hash, never returned by the managers
        first_name: Stored in column ``firstname``
        last_name: Stored in column ``lastname``
        email: Contact address
        is_dj: Member hosts (or may host) a show
        is_admin: Member may manage other members
        donated: Member has made a donation
    """

    __tablename__ = "members"
    __table_args__ = (
        CheckConstraint("username != ''", name="ck_member_non_empty_username"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column("firstname", String(100))
    last_name: Mapped[Optional[str]] = mapped_column("lastname", String(100))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    is_dj: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    donated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, username='{self.username}')>"


# ----- Show -----
class Show(Base):
    """
    A recurring weekly show.

    ``dj_id`` points at the hosting member but carries no foreign key:
    ownership is resolved by the managers, and deleting a member leaves
    the show in place.

    Attributes:
        id: Primary key
        dj_id: Hosting member's id
        dj_name: On-air name of the DJ
        show_name: Title of the show (unique)
        day_of_week: 0-6, 0 = Sunday
        show_time: Start time, e.g. "10:00"
        img_url: Artwork URL
        description: Free-text blurb
    """

    __tablename__ = "shows"
    __table_args__ = (
        CheckConstraint("show_name != ''", name="ck_show_non_empty_name"),
        CheckConstraint(
            "day_of_week BETWEEN 0 AND 6", name="ck_show_day_of_week_range"
        ),
        UniqueConstraint("day_of_week", "show_time", name="uq_show_slot"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    dj_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    dj_name: Mapped[Optional[str]] = mapped_column(String(100))
    show_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    show_time: Mapped[str] = mapped_column(String(20), nullable=False)
    img_url: Mapped[Optional[str]] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return (
            f"<Show(id={self.id}, show_name='{self.show_name}', "
            f"slot={self.day_of_week}/{self.show_time})>"
        )


# ----- Playlist -----
class Playlist(Base):
    """A dated playlist; linked to its show through ``show_playlists``."""

    __tablename__ = "playlists"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Playlist(id={self.id}, date={self.date})>"


# ----- Song -----
class Song(Base):
    """
    A song identity, deduplicated on (artist, title, album).

    The same row is shared by every playlist containing the song, so
    editing it changes the song everywhere it appears.

    Attributes:
        album_link: Link to the album page (filled in by enrichment)
        album_image: Album artwork URL (filled in by enrichment)
    """

    __tablename__ = "songs"
    __table_args__ = (
        UniqueConstraint("artist", "title", "album", name="uq_song_identity"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    artist: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    album: Mapped[Optional[str]] = mapped_column(String(255))
    album_link: Mapped[Optional[str]] = mapped_column(Text)
    album_image: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Song(id={self.id}, artist='{self.artist}', title='{self.title}')>"
