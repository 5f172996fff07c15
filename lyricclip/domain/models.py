# lyricclip/domain/models.py

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class LyricsDocument:
    """
    The full lyrics of one track as an ordered, immutable sequence of lines.
    """
    lines: Tuple[str, ...] = ()

    @classmethod
    def from_text(cls, raw: Optional[str]) -> "LyricsDocument":
        if not raw:
            return cls()
        return cls(lines=tuple(_LINE_BREAK.split(raw)))

    @property
    def last_index(self) -> int:
        return len(self.lines) - 1

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Snippet:
    """
    A contiguous window of lines taken from a LyricsDocument.

    matched_index is the line the window was centered on, or None when
    the default window starting at line 0 was used.
    """
    lines: Tuple[str, ...]
    start_index: int = 0
    matched_index: Optional[int] = None

    @property
    def end_index(self) -> int:
        return self.start_index + len(self.lines) - 1

    @property
    def is_match(self) -> bool:
        return self.matched_index is not None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass
class Track:
    """
    Represents a single lyrics record returned by the lyrics search API.
    """
    track_id: str
    track_name: str
    artist_name: str
    album_name: str = ""
    duration: Optional[float] = None
    instrumental: bool = False
    lyrics: LyricsDocument = field(default_factory=LyricsDocument, repr=False)
    synced_lyrics: Optional[str] = field(default=None, repr=False)


@dataclass
class Video:
    """
    Represents a single video record returned by the video search API.
    """
    video_id: str
    title: str
    channel_title: str = ""
    description: str = field(default="", repr=False)
    thumbnail_url: Optional[str] = field(default=None, repr=False)

    @property
    def watch_url(self) -> str:
        return YOUTUBE_WATCH_URL.format(video_id=self.video_id)

    @property
    def embed_url(self) -> str:
        return YOUTUBE_EMBED_URL.format(video_id=self.video_id)


@dataclass
class SearchOutcome:
    """
    Both ranked lists produced by one search.
    video_query is None when no track came back and no video search ran.
    """
    query: str
    tracks: List[Track] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)
    video_query: Optional[str] = None

    def video_for(self, track_index: int) -> Optional[Video]:
        """The video listed at the same rank as the track, if there is one."""
        if 0 <= track_index < len(self.videos):
            return self.videos[track_index]
        return None


@dataclass
class SelectionResult:
    track: Track
    video: Optional[Video]
    snippet: Snippet

    @property
    def song_title(self) -> str:
        return self.track.track_name

    @property
    def artist(self) -> str:
        return self.track.artist_name

    @property
    def video_id(self) -> Optional[str]:
        return self.video.video_id if self.video else None

    @property
    def full_lyrics(self) -> LyricsDocument:
        return self.track.lyrics

    def __repr__(self) -> str:
        preview = self.snippet.text[:80].replace("\n", " / ")
        return (
            f"SelectionResult(song='{self.song_title}', "
            f"artist='{self.artist}', video_id={self.video_id!r}, "
            f"snippet='{preview}')"
        )
