# tests/test_session.py

import pytest
from unittest.mock import MagicMock

from lyricclip.application.clip_search_service import ClipSearchService
from lyricclip.application.session import ClipSession
from lyricclip.domain.exceptions import SearchProviderError
from lyricclip.domain.models import LyricsDocument, Track, Video


LYRICS = "\n".join([
    "Intro hum",
    "Walking down the road",
    "Counting every star",
    "Holding on to you",
    "Never letting go",
    "Sunrise on the bay",
    "Singing all the way",
    "Goodbye to the night",
])


@pytest.fixture
def session() -> ClipSession:
    lyrics = MagicMock()
    lyrics.search_tracks.return_value = [
        Track("1", "Road Song", "The Walkers", lyrics=LyricsDocument.from_text(LYRICS)),
        Track("2", "Empty", "Nobody"),
    ]
    video = MagicMock()
    video.search_videos.return_value = [Video("vid1", "Road Song (Official)")]
    return ClipSession(ClipSearchService(lyrics, video))


def test_select_requires_search(session):
    with pytest.raises(RuntimeError, match="run_search"):
        session.select(0)


def test_run_search_stores_outcome(session):
    session.update_query("every star")
    outcome = session.run_search()

    assert session.outcome is outcome
    assert session.is_loading is False
    assert len(outcome.tracks) == 2


def test_select_and_back_to_search(session):
    session.update_query("every star")
    session.run_search()

    selection = session.select(0)
    assert session.selection is selection
    assert selection.video_id == "vid1"
    assert selection.snippet.matched_index == 2

    session.back_to_search()
    assert session.selection is None
    assert session.outcome is not None


def test_query_change_recomputes_open_selection(session):
    session.update_query("every star")
    session.run_search()
    session.select(0)

    session.update_query("SUNRISE")

    assert session.selection.snippet.matched_index == 5
    assert session.selection.snippet.start_index == 3


def test_new_search_clears_selection(session):
    session.update_query("every star")
    session.run_search()
    session.select(0)

    session.run_search()
    assert session.selection is None


def test_track_without_lyrics_gives_empty_preview(session):
    session.update_query("every star")
    session.run_search()

    snippet = session.preview_for(1)
    assert snippet.lines == ()
    assert snippet.start_index == 0


def test_failed_search_keeps_previous_outcome():
    lyrics = MagicMock()
    lyrics.search_tracks.return_value = []
    session = ClipSession(ClipSearchService(lyrics, MagicMock()))
    session.update_query("anything")
    previous = session.run_search()

    lyrics.search_tracks.side_effect = SearchProviderError("LRCLIB", "timeout")
    with pytest.raises(SearchProviderError):
        session.run_search()

    assert session.outcome is previous
    assert session.is_loading is False


def test_preview_for_rejects_out_of_range_index(session):
    session.update_query("every star")
    session.run_search()

    with pytest.raises(IndexError, match="track"):
        session.preview_for(-1)
    with pytest.raises(IndexError, match="track"):
        session.preview_for(2)
