# lyricclip/infrastructure/youtube_client.py

from typing import List, Optional

import requests

from lyricclip.domain.exceptions import SearchProviderError
from lyricclip.domain.interfaces import VideoSearchPort
from lyricclip.domain.models import Video


DEFAULT_BASE_URL = "https://www.googleapis.com/youtube/v3"
DEFAULT_TIMEOUT = 15

PROVIDER_NAME = "YouTube"

THUMBNAIL_PREFERENCE = ("high", "medium", "default")


class YouTubeSearchClient(VideoSearchPort):
    """
    Video search backed by the YouTube Data API v3 `search` endpoint.

    The API key is checked when a search runs, not here, so the
    application can still serve lyrics when no key is configured.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self.session = requests.Session()

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def search_videos(self, query: str, limit: int = 10) -> List[Video]:
        if not self._api_key:
            raise SearchProviderError(PROVIDER_NAME, "no API key configured (set YOUTUBE_API_KEY).")

        params = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": int(limit),
            "key": self._api_key,
        }
        try:
            response = self.session.get(
                f"{self._base_url}/search", params=params, timeout=self._timeout
            )
        except requests.RequestException as error:
            raise SearchProviderError(PROVIDER_NAME, f"request failed: {error}") from error

        if not response.ok:
            raise SearchProviderError(
                PROVIDER_NAME,
                f"HTTP {response.status_code}: {_api_error_message(response)}",
            )

        try:
            payload = response.json()
        except ValueError as error:
            raise SearchProviderError(PROVIDER_NAME, "response is not valid JSON") from error

        if not isinstance(payload, dict):
            print(f"[YouTubeClient] Unexpected payload type: {type(payload).__name__}")
            return []

        videos = []
        for item in payload.get("items", []):
            video = self._to_video(item)
            if video is not None:
                videos.append(video)

        print(f"[YouTubeClient] {len(videos)} video(s) for '{query}'")
        return videos[:limit]

    @staticmethod
    def _to_video(item: dict) -> Optional[Video]:
        if not isinstance(item, dict) or not isinstance(item.get("id"), dict):
            return None

        video_id = item["id"].get("videoId")
        if not video_id:
            return None

        snippet = item.get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        thumbnail_url = next(
            (thumbnails[size]["url"] for size in THUMBNAIL_PREFERENCE
             if size in thumbnails and "url" in thumbnails[size]),
            None,
        )

        return Video(
            video_id=video_id,
            title=snippet.get("title", ""),
            channel_title=snippet.get("channelTitle", ""),
            description=snippet.get("description", ""),
            thumbnail_url=thumbnail_url,
        )


def _api_error_message(response: requests.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.reason or "unknown error"
