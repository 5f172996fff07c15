# tests/test_clip_search_service.py

import pytest
from unittest.mock import MagicMock

from lyricclip.application.clip_search_service import ClipSearchService
from lyricclip.domain.exceptions import SearchProviderError
from lyricclip.domain.models import LyricsDocument, SearchOutcome, Track, Video


LYRICS = "\n".join(f"verse line {i}" for i in range(10)) + "\nwe found love\nin a hopeless place"


def _make_track(name: str, artist: str, lyrics: str = LYRICS) -> Track:
    return Track(
        track_id=name.lower(),
        track_name=name,
        artist_name=artist,
        lyrics=LyricsDocument.from_text(lyrics),
    )


def _make_video(video_id: str) -> Video:
    return Video(video_id=video_id, title=f"Video {video_id}", channel_title="Channel")


def _make_service(tracks, videos, **kwargs):
    lyrics = MagicMock()
    lyrics.search_tracks.return_value = tracks
    video = MagicMock()
    video.search_videos.return_value = videos
    return ClipSearchService(lyrics, video, **kwargs), lyrics, video


def test_search_raises_on_empty_query():
    service, lyrics, _ = _make_service([], [])
    with pytest.raises(ValueError, match="empty"):
        service.search("   ")
    lyrics.search_tracks.assert_not_called()


def test_search_queries_videos_with_first_track():
    tracks = [_make_track("We Found Love", "Rihanna"), _make_track("Love Story", "Taylor Swift")]
    service, lyrics, video = _make_service(tracks, [_make_video("v1")], top_k=5)

    outcome = service.search("  found love ")

    lyrics.search_tracks.assert_called_once_with("found love", 5)
    video.search_videos.assert_called_once_with("We Found Love Rihanna", 5)
    assert outcome.query == "  found love "
    assert outcome.video_query == "We Found Love Rihanna"
    assert [v.video_id for v in outcome.videos] == ["v1"]


def test_search_skips_video_call_without_tracks():
    service, _, video = _make_service([], [_make_video("v1")])

    outcome = service.search("nothing matches")

    video.search_videos.assert_not_called()
    assert outcome.tracks == []
    assert outcome.videos == []
    assert outcome.video_query is None


def test_search_top_k_override():
    service, lyrics, _ = _make_service([], [], top_k=10)
    service.search("love", top_k=3)
    lyrics.search_tracks.assert_called_once_with("love", 3)


def test_lyrics_failure_propagates():
    service, lyrics, video = _make_service([], [])
    lyrics.search_tracks.side_effect = SearchProviderError("LRCLIB", "down")

    with pytest.raises(SearchProviderError, match="LRCLIB"):
        service.search("love")
    video.search_videos.assert_not_called()


def test_video_failure_keeps_lyrics():
    tracks = [_make_track("We Found Love", "Rihanna")]
    service, _, video = _make_service(tracks, [])
    video.search_videos.side_effect = SearchProviderError("YouTube", "quota exceeded")

    outcome = service.search("found love")

    assert outcome.tracks == tracks
    assert outcome.videos == []


def test_preview_centers_on_matching_line():
    service, _, _ = _make_service([], [])
    track = _make_track("We Found Love", "Rihanna")

    snippet = service.preview(track, "FOUND LOVE")

    assert snippet.matched_index == 10
    assert snippet.lines == (
        "verse line 8",
        "verse line 9",
        "we found love",
        "in a hopeless place",
    )


def test_select_pairs_video_by_rank():
    tracks = [_make_track("A", "X"), _make_track("B", "Y")]
    videos = [_make_video("v0"), _make_video("v1")]
    service, _, _ = _make_service(tracks, videos)
    outcome = SearchOutcome(query="found love", tracks=tracks, videos=videos)

    selection = service.select(outcome, 1)

    assert selection.song_title == "B"
    assert selection.video_id == "v1"
    assert selection.snippet.matched_index == 10


def test_select_explicit_video():
    tracks = [_make_track("A", "X")]
    videos = [_make_video("v0"), _make_video("v1")]
    service, _, _ = _make_service(tracks, videos)
    outcome = SearchOutcome(query="love", tracks=tracks, videos=videos)

    assert service.select(outcome, 0, video_index=1).video_id == "v1"


def test_select_without_matching_video_rank():
    tracks = [_make_track("A", "X"), _make_track("B", "Y")]
    service, _, _ = _make_service(tracks, [])
    outcome = SearchOutcome(query="love", tracks=tracks, videos=[_make_video("v0")])

    assert service.select(outcome, 1).video is None


def test_select_out_of_range_raises():
    service, _, _ = _make_service([], [])
    outcome = SearchOutcome(query="love", tracks=[_make_track("A", "X")], videos=[])

    with pytest.raises(IndexError, match="track"):
        service.select(outcome, 3)
    with pytest.raises(IndexError, match="video"):
        service.select(outcome, 0, video_index=2)


def test_negative_context_radius_rejected():
    with pytest.raises(ValueError):
        ClipSearchService(MagicMock(), MagicMock(), context_radius=-2)


@pytest.mark.parametrize("top_k", [0, -1])
def test_search_rejects_top_k_below_one(top_k):
    service, lyrics, video = _make_service([_make_track("A", "X")], [])

    with pytest.raises(ValueError, match="top_k"):
        service.search("love", top_k=top_k)
    lyrics.search_tracks.assert_not_called()
    video.search_videos.assert_not_called()


def test_constructor_rejects_top_k_below_one():
    with pytest.raises(ValueError, match="top_k"):
        ClipSearchService(MagicMock(), MagicMock(), top_k=0)


def test_select_matches_query_as_typed():
    track = _make_track("Glove", "X", lyrics="glove box\nmy love")
    service, _, _ = _make_service([track], [])

    outcome = service.search(" love")
    selection = service.select(outcome, 0)

    assert selection.snippet.matched_index == 1
