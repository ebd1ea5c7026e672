#!/usr/bin/env python3
"""
song_manager.py
--------------------
Manages Song entities and their placement in playlists.

Songs are deduplicated on (artist, title, album): adding a song that
already exists reuses its row, so one song row can sit in many playlists.
Editing a song therefore edits it everywhere; ``update`` reports the ids
of every playlist the change reaches.

Song order:
    Each playlist numbers its songs from 1. A new song goes at the end,
    one past the playlist's current highest position. Removing a song
    leaves a gap; positions are never renumbered. If two writers pick the
    same position, the storage constraint on (playlist_id, song_order)
    rejects the second insert and the position is recomputed.

Usage:
    song_mgr = SongManager(session, logger)

    song = song_mgr.create({
        "playlist_id": 12,
        "artist": "Alice Coltrane",
        "title": "Journey in Satchidananda",
        "album": "Journey in Satchidananda",
    })
    song["playlist_inserted_into"]["song_order"]   # 1 for an empty playlist
    song_mgr.remove(12, song["id"], 1)
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from hos.core.exceptions import (
    BadRequestError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from hos.core.logging_manager import safe_logger
from hos.core.validators import DataValidator
from hos.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from hos.database.models import Playlist, PlaylistSong, Song
from hos.database.sql import sql_for_partial_update
from .base_manager import BaseManager

SONG_COLUMNS = (
    Song.id.label("id"),
    Song.artist.label("artist"),
    Song.title.label("title"),
    Song.album.label("album"),
    Song.album_link.label("album_link"),
    Song.album_image.label("album_image"),
)

SONG_UPDATE_FIELDS = {
    "artist": "artist",
    "title": "title",
    "album": "album",
    "album_link": "album_link",
    "album_image": "album_image",
}

IDENTITY_FIELDS = ("artist", "title", "album")

MAX_ORDER_ATTEMPTS = 3


class SongManager(BaseManager):
    """Manages the songs table and playlist_songs positions."""

    @handle_db_errors
    @log_database_operation("create_song")
    @validate_metadata(["playlist_id", "artist", "title"])
    def create(self, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add a song to the end of a playlist.

        An existing song with the same artist, title and album is reused
        instead of inserting a duplicate row.

        Args:
            metadata: Dictionary with keys:
                - playlist_id, artist, title (required)
                - album (optional)

        Returns:
            Song fields plus ``playlist_inserted_into``:
            {playlist_id, song_id, song_order}

        Raises:
            ValidationError: If a required field is missing
            BadRequestError: If the playlist does not exist
            DatabaseError: If no free position could be claimed
        """
        playlist_id = DataValidator.normalize_int(metadata["playlist_id"])
        artist = DataValidator.normalize_string(metadata["artist"])
        title = DataValidator.normalize_string(metadata["title"])
        album = DataValidator.normalize_string(metadata.get("album"))

        if not self._exists(Playlist, Playlist.id == playlist_id):
            raise BadRequestError(f"No playlist exists w/ ID: {playlist_id}")

        song_id = self._find_song_id(artist, title, album)
        if song_id is None:
            song = self._insert(
                Song(artist=artist, title=title, album=album),
                f"Duplicate song: {artist} - {title}",
            )
            song_id = song.id
        else:
            safe_logger(self.logger).log_debug(
                "Reusing existing song", {"song_id": song_id, "playlist_id": playlist_id}
            )

        link = self._append_to_playlist(playlist_id, song_id)

        result = self._get_row(song_id)
        result["playlist_inserted_into"] = {
            "playlist_id": link.playlist_id,
            "song_id": link.song_id,
            "song_order": link.song_order,
        }
        return result

    @handle_db_errors
    @log_database_operation("get_song")
    def get(self, song_id: int) -> Dict[str, Any]:
        """
        Return a song with the ids of the playlists containing it.

        Raises:
            NotFoundError: If the song does not exist
        """
        song = self._get_row(song_id)
        if song is None:
            raise NotFoundError(f"No song with ID: {song_id}")
        song["playlist_ids"] = self._playlist_ids(song_id)
        return song

    @handle_db_errors
    @log_database_operation("update_song")
    def update(self, song_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update a song on every playlist it appears in.

        Args:
            song_id: Song to update
            data: Any of artist, title, album, album_link, album_image

        Returns:
            The song after the update plus ``playlist_ids``, every playlist
            that shows the change

        Raises:
            BadRequestError: If data is empty or has unknown fields, or the
                new identity matches another song
            ValidationError: If artist or title is blank
            NotFoundError: If the song does not exist
        """
        data = dict(data)
        for required in ("artist", "title"):
            if required in data:
                data[required] = DataValidator.normalize_string(data[required])
                if data[required] is None:
                    raise ValidationError(f"Field '{required}' cannot be empty")
        if "album" in data:
            data["album"] = DataValidator.normalize_string(data["album"])

        patch = sql_for_partial_update(data, SONG_UPDATE_FIELDS)

        current = self._get_row(song_id)
        if current is None:
            raise NotFoundError(f"No song with ID: {song_id}")

        if any(field in data for field in IDENTITY_FIELDS):
            identity = {field: data.get(field, current[field]) for field in IDENTITY_FIELDS}
            existing = self._find_song_id(**identity)
            if existing is not None and existing != song_id:
                raise BadRequestError(
                    f"Duplicate song: {identity['artist']} - {identity['title']} "
                    f"(ID: {existing})"
                )

        self._apply_patch("songs", patch, "id", song_id, f"Duplicate song w/ ID: {song_id}")

        song = self._get_row(song_id)
        song["playlist_ids"] = self._playlist_ids(song_id)
        safe_logger(self.logger).log_info(
            "Updated shared song",
            {"song_id": song_id, "fields": list(data), "playlist_ids": song["playlist_ids"]},
        )
        return song

    @handle_db_errors
    @log_database_operation("remove_song")
    def remove(self, playlist_id: int, song_id: int, song_order: int) -> Dict[str, Any]:
        """
        Remove a song from one position in a playlist.

        Only the playlist position is deleted; the song row stays for the
        other playlists that use it. The position is not reused.

        Raises:
            NotFoundError: If the playlist has no such song at that position
        """
        deleted = self._delete_returning(
            PlaylistSong,
            PlaylistSong.playlist_id == playlist_id,
            PlaylistSong.song_id == song_id,
            PlaylistSong.song_order == song_order,
            returning=[
                PlaylistSong.playlist_id,
                PlaylistSong.song_id,
                PlaylistSong.song_order,
            ],
        )
        if deleted is None:
            raise NotFoundError(f"No song/playlist combo w/ IDs: {song_id}/{playlist_id}")
        return deleted

    # -------------------------------------------------------------------------
    # Song Order
    # -------------------------------------------------------------------------

    def _next_song_order(self, playlist_id: int) -> int:
        """Return one past the playlist's highest position, or 1 if empty."""
        highest = self.session.execute(
            select(func.max(PlaylistSong.song_order)).where(
                PlaylistSong.playlist_id == playlist_id
            )
        ).scalar()
        return 1 if highest is None else highest + 1

    def _append_to_playlist(self, playlist_id: int, song_id: int) -> PlaylistSong:
        """
        Insert the playlist position, retrying on a position conflict.

        Raises:
            DatabaseError: If every attempt lost the race
        """
        logger = safe_logger(self.logger)
        conflict: Optional[IntegrityError] = None

        for attempt in range(1, MAX_ORDER_ATTEMPTS + 1):
            link = PlaylistSong(
                playlist_id=playlist_id,
                song_id=song_id,
                song_order=self._next_song_order(playlist_id),
            )
            try:
                with self.session.begin_nested():
                    self.session.add(link)
                    self.session.flush()
                return link
            except IntegrityError as e:
                conflict = e
                logger.log_warning(
                    "Song order taken, recomputing",
                    {
                        "playlist_id": playlist_id,
                        "song_order": link.song_order,
                        "attempt": attempt,
                    },
                )

        raise DatabaseError(
            f"Could not place song {song_id} in playlist {playlist_id} "
            f"after {MAX_ORDER_ATTEMPTS} attempts"
        ) from conflict

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _find_song_id(
        self, artist: str, title: str, album: Optional[str]
    ) -> Optional[int]:
        # Column == None renders as IS NULL, so album-less songs dedup too
        return self.session.execute(
            select(Song.id)
            .where(Song.artist == artist, Song.title == title, Song.album == album)
            .order_by(Song.id)
            .limit(1)
        ).scalar()

    def _playlist_ids(self, song_id: int) -> List[int]:
        return list(
            self.session.execute(
                select(PlaylistSong.playlist_id)
                .where(PlaylistSong.song_id == song_id)
                .distinct()
                .order_by(PlaylistSong.playlist_id)
            ).scalars()
        )

    def _get_row(self, song_id: int) -> Optional[Dict[str, Any]]:
        return self._fetch_one(select(*SONG_COLUMNS).where(Song.id == song_id))
