#!/usr/bin/env python3
"""
managers package
--------------------
Entity managers for the hos database.

Each manager handles the operations for one entity type and inherits the
shared check, fetch and write helpers from BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    MemberManager: Registration, authentication and member profiles
    ShowManager: Weekly shows and their name/slot uniqueness
    PlaylistManager: Dated playlists linked to a show
    SongManager: Deduplicated songs and their order within playlists
    FavoriteManager: Members' favorite shows

Usage:
    from hos.database.managers import ShowManager, SongManager

    show_mgr = ShowManager(session, logger)
    song_mgr = SongManager(session, logger)
"""
from .base_manager import BaseManager
from .member_manager import MemberManager
from .show_manager import ShowManager
from .playlist_manager import PlaylistManager
from .song_manager import SongManager
from .favorite_manager import FavoriteManager

__all__ = [
    "BaseManager",
    "MemberManager",
    "ShowManager",
    "PlaylistManager",
    "SongManager",
    "FavoriteManager",
]
