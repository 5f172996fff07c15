# lyricclip/infrastructure/lyrics_client.py

import re
from typing import List, Optional

import requests

from lyricclip.domain.exceptions import SearchProviderError
from lyricclip.domain.interfaces import LyricsSearchPort
from lyricclip.domain.models import LyricsDocument, Track


DEFAULT_BASE_URL = "https://lrclib.net"
DEFAULT_USER_AGENT = "lyricclip/1.0.0 (https://github.com/lyricclip/lyricclip)"
DEFAULT_TIMEOUT = 15

PROVIDER_NAME = "LRCLIB"

# [mm:ss.xx] prefixes of synced (LRC) lines
_LRC_TIMESTAMP = re.compile(r"^\s*(?:\[\d{1,3}:\d{2}(?:[.:]\d{1,3})?\])+\s?")


def synced_to_plain(synced: str) -> str:
    """Strip LRC timestamps, keeping one lyric line per timed line."""
    return "\n".join(_LRC_TIMESTAMP.sub("", line) for line in synced.splitlines())


class LrcLibLyricsClient(LyricsSearchPort):
    """
    Lyrics search backed by the public LRCLIB API (no key required).

    GET /api/search?q=<query> returns a ranked list of records holding
    both plain and synced lyrics, so no second lookup per track is needed.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    @property
    def base_url(self) -> str:
        return self._base_url

    def search_tracks(self, query: str, limit: int = 10) -> List[Track]:
        try:
            response = self.session.get(
                f"{self._base_url}/api/search",
                params={"q": query},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as error:
            raise SearchProviderError(PROVIDER_NAME, f"request failed: {error}") from error
        except ValueError as error:
            raise SearchProviderError(PROVIDER_NAME, "response is not valid JSON") from error

        if not isinstance(payload, list):
            print(f"[LrcLibClient] Unexpected payload type: {type(payload).__name__}")
            return []

        tracks = [
            self._to_track(record)
            for record in payload[:limit]
            if isinstance(record, dict)
        ]
        print(f"[LrcLibClient] {len(tracks)} track(s) for '{query}'")
        return tracks

    @staticmethod
    def _to_track(record: dict) -> Track:
        plain = (record.get("plainLyrics") or "").strip() or None
        synced = (record.get("syncedLyrics") or "").strip() or None
        if plain is None and synced is not None:
            plain = synced_to_plain(synced)

        return Track(
            track_id=str(record.get("id", "")),
            track_name=record.get("trackName") or record.get("name") or "",
            artist_name=record.get("artistName") or "",
            album_name=record.get("albumName") or "",
            duration=_as_float(record.get("duration")),
            instrumental=bool(record.get("instrumental", False)),
            lyrics=LyricsDocument.from_text(plain),
            synced_lyrics=synced,
        )


def _as_float(value) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None
