# main.py

import os
import sys

from lyricclip.application.clip_search_service import ClipSearchService
from lyricclip.application.session import ClipSession
from lyricclip.domain.exceptions import SearchProviderError
from lyricclip.infrastructure.lyrics_client import LrcLibLyricsClient
from lyricclip.infrastructure.youtube_client import YouTubeSearchClient
from lyricclip.interface.cli import (
    display_welcome_banner,
    display_provider_status,
    prompt_for_query,
    display_results,
    prompt_for_selection,
    display_clip_preview,
    display_full_lyrics,
    display_error,
    ask_yes_no,
    ask_continue,
)


LRCLIB_BASE_URL = os.getenv("LRCLIB_BASE_URL", "https://lrclib.net")
YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY")
YOUTUBE_BASE_URL = os.getenv("YOUTUBE_BASE_URL", "https://www.googleapis.com/youtube/v3")
TOP_K_RESULTS = int(os.getenv("LYRICCLIP_TOP_K", "10"))
CONTEXT_RADIUS = int(os.getenv("LYRICCLIP_CONTEXT_RADIUS", "2"))
HTTP_TIMEOUT = float(os.getenv("LYRICCLIP_HTTP_TIMEOUT", "15"))


def main() -> None:
    display_welcome_banner()

    # ── 1. Initialize infrastructure ─────────────────────────────────────────
    lyrics_client = LrcLibLyricsClient(base_url=LRCLIB_BASE_URL, timeout=HTTP_TIMEOUT)
    video_client = YouTubeSearchClient(
        api_key=YOUTUBE_API_KEY,
        base_url=YOUTUBE_BASE_URL,
        timeout=HTTP_TIMEOUT,
    )

    try:
        search_service = ClipSearchService(
            lyrics_search=lyrics_client,
            video_search=video_client,
            top_k=TOP_K_RESULTS,
            context_radius=CONTEXT_RADIUS,
        )
    except ValueError as error:
        display_error(str(error))
        sys.exit(1)

    display_provider_status(lyrics_client.base_url, video_client.has_api_key)
    session = ClipSession(search_service)

    # ── 2. Interactive search loop ────────────────────────────────────────────
    while True:
        session.update_query(prompt_for_query())
        try:
            outcome = session.run_search()
        except (ValueError, SearchProviderError) as error:
            display_error(str(error))
            if not ask_continue():
                break
            continue

        previews = [session.preview_for(i) for i in range(len(outcome.tracks))]
        display_results(outcome, previews)

        if outcome.tracks:
            _preview_loop(session)

        if not ask_continue():
            break


def _preview_loop(session: ClipSession) -> None:
    """Let the user open clip previews until they skip back to search."""
    while True:
        track_index = prompt_for_selection(len(session.outcome.tracks))
        if track_index is None:
            return

        selection = session.select(track_index)
        display_clip_preview(selection, session.query)

        if ask_yes_no("Show full lyrics?", default="n"):
            display_full_lyrics(selection.full_lyrics, selection.snippet)

        session.back_to_search()
        if not ask_yes_no("Preview another song from these results?", default="n"):
            return


if __name__ == "__main__":
    main()
