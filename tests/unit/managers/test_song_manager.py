"""
test_song_manager.py
--------------------
Unit tests for SongManager: deduplication, per-playlist song order,
shared-row updates and join-row removal.
"""
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from hos.core.exceptions import BadRequestError, DatabaseError, NotFoundError, ValidationError
from hos.database.managers.song_manager import MAX_ORDER_ATTEMPTS, SongManager
from hos.database.models import PlaylistSong, Song


@pytest.fixture
def second_playlist(playlist_manager, make_member, make_show):
    """A playlist on another DJ's show."""
    dj = make_member("dj_two")
    make_show("Sunrise", day_of_week=1, show_time="06:00", dj_id=dj["id"])
    return playlist_manager.create({"member_id": dj["id"], "date": "2026-10-17"})


def _add(song_manager, playlist_id, title, artist="A", album="Alb"):
    return song_manager.create(
        {"playlist_id": playlist_id, "artist": artist, "title": title, "album": album}
    )


class TestSongManagerCreate:
    """Test SongManager.create()."""

    def test_create_first_song(self, song_manager, playlist):
        song = _add(song_manager, playlist["id"], "T")

        assert song["artist"] == "A"
        assert song["title"] == "T"
        assert song["album"] == "Alb"
        assert song["playlist_inserted_into"] == {
            "playlist_id": playlist["id"],
            "song_id": song["id"],
            "song_order": 1,
        }

    def test_orders_are_sequential(self, song_manager, playlist):
        orders = [
            _add(song_manager, playlist["id"], title)["playlist_inserted_into"]["song_order"]
            for title in ("One", "Two", "Three")
        ]

        assert orders == [1, 2, 3]

    def test_same_song_in_two_playlists_shares_row(
        self, song_manager, playlist, second_playlist, db_session
    ):
        first = _add(song_manager, playlist["id"], "T")
        second = _add(song_manager, second_playlist["id"], "T")

        assert first["id"] == second["id"]
        assert first["playlist_inserted_into"]["song_order"] == 1
        assert second["playlist_inserted_into"]["song_order"] == 1
        assert db_session.execute(select(func.count(Song.id))).scalar() == 1
        assert db_session.execute(select(func.count(PlaylistSong.id))).scalar() == 2

    def test_different_album_is_a_different_song(self, song_manager, playlist):
        first = _add(song_manager, playlist["id"], "T", album="Alb")
        second = _add(song_manager, playlist["id"], "T", album="Live")

        assert first["id"] != second["id"]

    def test_dedup_without_album(self, song_manager, playlist, second_playlist):
        first = _add(song_manager, playlist["id"], "T", album=None)
        second = _add(song_manager, second_playlist["id"], "T", album=None)

        assert first["id"] == second["id"]

    def test_same_song_twice_in_one_playlist(self, song_manager, playlist):
        first = _add(song_manager, playlist["id"], "T")
        again = _add(song_manager, playlist["id"], "T")

        assert again["id"] == first["id"]
        assert again["playlist_inserted_into"]["song_order"] == 2

    def test_missing_playlist(self, song_manager):
        with pytest.raises(BadRequestError, match="No playlist exists w/ ID: 42"):
            _add(song_manager, 42, "T")

    def test_missing_title(self, song_manager, playlist):
        with pytest.raises(ValidationError, match="title"):
            song_manager.create({"playlist_id": playlist["id"], "artist": "A"})

    def test_order_conflict_is_retried(self, song_manager, playlist):
        """A stale maximum is recomputed after the position constraint fires."""
        _add(song_manager, playlist["id"], "One")
        real_next = SongManager._next_song_order
        calls = []

        def stale_then_real(self, playlist_id):
            calls.append(playlist_id)
            if len(calls) == 1:
                return 1
            return real_next(self, playlist_id)

        with patch.object(SongManager, "_next_song_order", stale_then_real):
            song = _add(song_manager, playlist["id"], "Two")

        assert len(calls) == 2
        assert song["playlist_inserted_into"]["song_order"] == 2

    def test_order_conflict_gives_up(self, song_manager, playlist):
        _add(song_manager, playlist["id"], "One")

        with patch.object(SongManager, "_next_song_order", return_value=1):
            with pytest.raises(DatabaseError, match=f"after {MAX_ORDER_ATTEMPTS} attempts"):
                _add(song_manager, playlist["id"], "Two")


class TestSongOrdering:
    """Song order is assigned at insertion and never renumbered."""

    def test_next_song_order_empty_playlist(self, song_manager, playlist):
        assert song_manager._next_song_order(playlist["id"]) == 1

    def test_removal_leaves_gap(self, song_manager, playlist_manager, playlist):
        songs = [_add(song_manager, playlist["id"], title) for title in ("One", "Two", "Three")]

        song_manager.remove(playlist["id"], songs[1]["id"], 2)

        orders = [s["song_order"] for s in playlist_manager.get(playlist["id"])["songs"]]
        assert orders == [1, 3]

    def test_gap_not_reused(self, song_manager, playlist):
        songs = [_add(song_manager, playlist["id"], title) for title in ("One", "Two", "Three")]
        song_manager.remove(playlist["id"], songs[1]["id"], 2)

        added = _add(song_manager, playlist["id"], "Four")

        assert added["playlist_inserted_into"]["song_order"] == 4

    def test_orders_are_per_playlist(self, song_manager, playlist, second_playlist):
        _add(song_manager, playlist["id"], "One")
        _add(song_manager, playlist["id"], "Two")

        other = _add(song_manager, second_playlist["id"], "Three")

        assert other["playlist_inserted_into"]["song_order"] == 1


class TestSongManagerGet:
    """Test SongManager.get()."""

    def test_get_lists_playlists(self, song_manager, playlist, second_playlist):
        song = _add(song_manager, playlist["id"], "T")
        _add(song_manager, second_playlist["id"], "T")

        result = song_manager.get(song["id"])

        assert result["title"] == "T"
        assert result["playlist_ids"] == sorted([playlist["id"], second_playlist["id"]])

    def test_get_missing(self, song_manager):
        with pytest.raises(NotFoundError, match="No song with ID: 42"):
            song_manager.get(42)


class TestSongManagerUpdate:
    """Test SongManager.update()."""

    def test_update_reaches_every_playlist(
        self, song_manager, playlist_manager, playlist, second_playlist
    ):
        song = _add(song_manager, playlist["id"], "Teh Song")
        _add(song_manager, second_playlist["id"], "Teh Song")

        updated = song_manager.update(song["id"], {"title": "The Song"})

        assert updated["title"] == "The Song"
        assert updated["playlist_ids"] == sorted([playlist["id"], second_playlist["id"]])
        for playlist_id in updated["playlist_ids"]:
            titles = [s["title"] for s in playlist_manager.get(playlist_id)["songs"]]
            assert titles == ["The Song"]

    def test_update_enrichment_fields(self, song_manager, playlist):
        song = _add(song_manager, playlist["id"], "T")

        updated = song_manager.update(
            song["id"],
            {"album_link": "https://music.example/alb", "album_image": "https://img.example/alb.jpg"},
        )

        assert updated["album_link"] == "https://music.example/alb"
        assert updated["album_image"] == "https://img.example/alb.jpg"

    def test_update_into_existing_identity(self, song_manager, playlist):
        _add(song_manager, playlist["id"], "One")
        two = _add(song_manager, playlist["id"], "Two")

        with pytest.raises(BadRequestError, match="Duplicate song"):
            song_manager.update(two["id"], {"title": "One"})

    def test_update_blank_artist(self, song_manager, playlist):
        song = _add(song_manager, playlist["id"], "T")

        with pytest.raises(ValidationError):
            song_manager.update(song["id"], {"artist": ""})

    def test_update_no_data(self, song_manager, playlist):
        song = _add(song_manager, playlist["id"], "T")

        with pytest.raises(BadRequestError, match="No data"):
            song_manager.update(song["id"], {})

    def test_update_missing(self, song_manager):
        with pytest.raises(NotFoundError):
            song_manager.update(42, {"title": "x"})


class TestSongManagerRemove:
    """Test SongManager.remove()."""

    def test_remove_only_unlinks(self, song_manager, playlist, db_session):
        song = _add(song_manager, playlist["id"], "T")

        removed = song_manager.remove(playlist["id"], song["id"], 1)

        assert removed == {"playlist_id": playlist["id"], "song_id": song["id"], "song_order": 1}
        assert db_session.execute(select(func.count(Song.id))).scalar() == 1

    def test_remove_wrong_order(self, song_manager, playlist):
        song = _add(song_manager, playlist["id"], "T")

        with pytest.raises(NotFoundError, match="No song/playlist combo"):
            song_manager.remove(playlist["id"], song["id"], 2)

    def test_remove_twice(self, song_manager, playlist):
        song = _add(song_manager, playlist["id"], "T")
        song_manager.remove(playlist["id"], song["id"], 1)

        with pytest.raises(NotFoundError):
            song_manager.remove(playlist["id"], song["id"], 1)
