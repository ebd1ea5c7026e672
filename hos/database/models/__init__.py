"""
Database Models Package
------------------------

SQLAlchemy ORM models for the hos database.

This package provides a modular organization of database models:
- base: Declarative base
- core: Member, Show, Playlist, Song
- associations: ShowPlaylist, PlaylistSong, MemberFavorite

Usage:
    from hos.database.models import Member, Show, PlaylistSong
"""
from .base import Base
from .core import Member, Playlist, Show, Song
from .associations import MemberFavorite, PlaylistSong, ShowPlaylist

__all__ = [
    "Base",
    "Member",
    "Show",
    "Playlist",
    "Song",
    "ShowPlaylist",
    "PlaylistSong",
    "MemberFavorite",
]
