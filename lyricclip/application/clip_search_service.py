# lyricclip/application/clip_search_service.py

from typing import Optional

from lyricclip.domain.exceptions import SearchProviderError
from lyricclip.domain.interfaces import LyricsSearchPort, VideoSearchPort
from lyricclip.domain.models import SearchOutcome, SelectionResult, Snippet, Track
from lyricclip.domain.span_locator import DEFAULT_CONTEXT_RADIUS, locate_relevant_span


class ClipSearchService:
    """
    Core use cases: find tracks whose lyrics match a phrase, find videos
    for the best track, and build the clip preview for a chosen track.

    Search is two ordered calls: lyrics first, then a video search keyed
    off the first lyrics result. The video call never runs without a track.
    """

    def __init__(
        self,
        lyrics_search: LyricsSearchPort,
        video_search: VideoSearchPort,
        top_k: int = 10,
        context_radius: int = DEFAULT_CONTEXT_RADIUS,
    ):
        if context_radius < 0:
            raise ValueError("context_radius must be zero or positive.")
        _check_top_k(top_k)
        self._lyrics_search = lyrics_search
        self._video_search = video_search
        self._top_k = top_k
        self._context_radius = context_radius

    @property
    def top_k(self) -> int:
        return self._top_k

    @property
    def context_radius(self) -> int:
        return self._context_radius

    @staticmethod
    def build_video_query(track: Track) -> str:
        return f"{track.track_name} {track.artist_name}".strip()

    def search(self, query: str, top_k: Optional[int] = None) -> SearchOutcome:
        search_text = query.strip()
        if not search_text:
            raise ValueError("Query cannot be empty.")

        if top_k is None:
            limit = self._top_k
        else:
            _check_top_k(top_k)
            limit = top_k

        tracks = self._lyrics_search.search_tracks(search_text, limit)
        # Snippets match the query as typed; only the lookup text is trimmed.
        outcome = SearchOutcome(query=query, tracks=tracks)

        if not tracks:
            print(f"[ClipSearchService] No lyrics found for '{search_text}'.")
            return outcome

        outcome.video_query = self.build_video_query(tracks[0])
        try:
            outcome.videos = self._video_search.search_videos(outcome.video_query, limit)
        except SearchProviderError as error:
            # Lyrics results stand; the video list stays empty.
            print(f"[ClipSearchService] ⚠ Video search failed: {error}")

        return outcome

    def preview(self, track: Track, query: str) -> Snippet:
        return locate_relevant_span(track.lyrics, query, self._context_radius)

    def select(
        self,
        outcome: SearchOutcome,
        track_index: int,
        video_index: Optional[int] = None,
    ) -> SelectionResult:
        """
        Build the clip preview for one listed track.

        The video defaults to the one at the same rank as the track; pass
        video_index to pair the track with a different listed video.
        """
        if not 0 <= track_index < len(outcome.tracks):
            raise IndexError(f"No track at position {track_index}.")

        if video_index is None:
            video = outcome.video_for(track_index)
        elif 0 <= video_index < len(outcome.videos):
            video = outcome.videos[video_index]
        else:
            raise IndexError(f"No video at position {video_index}.")

        track = outcome.tracks[track_index]
        return SelectionResult(
            track=track,
            video=video,
            snippet=self.preview(track, outcome.query),
        )


def _check_top_k(top_k: int) -> None:
    if top_k < 1:
        raise ValueError("top_k must be at least 1.")
