from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional
import uvicorn
import os

from lyricclip.application.clip_search_service import ClipSearchService
from lyricclip.domain.exceptions import SearchProviderError
from lyricclip.domain.models import LyricsDocument, Snippet, Track, Video
from lyricclip.domain.span_locator import DEFAULT_CONTEXT_RADIUS, locate_relevant_span
from lyricclip.infrastructure.lyrics_client import LrcLibLyricsClient
from lyricclip.infrastructure.youtube_client import YouTubeSearchClient

# ── Configuration ────────────────────────────────────────────────────────────
LRCLIB_BASE_URL = os.getenv("LRCLIB_BASE_URL", "https://lrclib.net")
YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY")
YOUTUBE_BASE_URL = os.getenv("YOUTUBE_BASE_URL", "https://www.googleapis.com/youtube/v3")
DEFAULT_TOP_K = int(os.getenv("LYRICCLIP_TOP_K", "10"))
CONTEXT_RADIUS = int(os.getenv("LYRICCLIP_CONTEXT_RADIUS", str(DEFAULT_CONTEXT_RADIUS)))
HTTP_TIMEOUT = float(os.getenv("LYRICCLIP_HTTP_TIMEOUT", "15"))

# ── API Models ───────────────────────────────────────────────────────────────
class SearchRequest(BaseModel):
    query: str
    top_k: Optional[int] = None

class SelectRequest(BaseModel):
    query: str
    track_index: int = 0
    video_index: Optional[int] = None
    top_k: Optional[int] = None

class SnippetRequest(BaseModel):
    query: str = ""
    text: Optional[str] = None
    lines: Optional[List[str]] = None
    context_radius: int = CONTEXT_RADIUS

class SnippetSchema(BaseModel):
    lines: List[str]
    start_index: int
    end_index: int
    matched_index: Optional[int] = None

class TrackSchema(BaseModel):
    track_id: str
    track_name: str
    artist_name: str
    album_name: str
    duration: Optional[float] = None
    instrumental: bool
    preview: SnippetSchema

class VideoSchema(BaseModel):
    video_id: str
    title: str
    channel_title: str
    thumbnail_url: Optional[str] = None
    watch_url: str

class SearchResponse(BaseModel):
    query: str
    video_query: Optional[str] = None
    tracks: List[TrackSchema]
    videos: List[VideoSchema]

class SelectionResponse(BaseModel):
    song_title: str
    artist: str
    video_id: Optional[str] = None
    watch_url: Optional[str] = None
    snippet: SnippetSchema
    full_lyrics: List[str]

# ── App Initialization ───────────────────────────────────────────────────────
app = FastAPI(
    title="Lyric-to-Clip API",
    description="Search songs by a lyric phrase and preview the matching clip.",
    version="1.0.0"
)

# ── CORS Middleware ──────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:8080", "http://127.0.0.1:8080",
                   "http://localhost:19006"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize infrastructure (global scope for singleton behavior)
lyrics_client = LrcLibLyricsClient(base_url=LRCLIB_BASE_URL, timeout=HTTP_TIMEOUT)
video_client = YouTubeSearchClient(
    api_key=YOUTUBE_API_KEY,
    base_url=YOUTUBE_BASE_URL,
    timeout=HTTP_TIMEOUT,
)
search_service = ClipSearchService(
    lyrics_search=lyrics_client,
    video_search=video_client,
    top_k=DEFAULT_TOP_K,
    context_radius=CONTEXT_RADIUS,
)

if not video_client.has_api_key:
    print("[API] WARNING: YOUTUBE_API_KEY is not set. Video results will be empty.")

# ── Serialization helpers ────────────────────────────────────────────────────
def _snippet_schema(snippet: Snippet) -> SnippetSchema:
    return SnippetSchema(
        lines=list(snippet.lines),
        start_index=snippet.start_index,
        end_index=snippet.end_index,
        matched_index=snippet.matched_index,
    )

def _track_schema(track: Track, query: str) -> TrackSchema:
    return TrackSchema(
        track_id=track.track_id,
        track_name=track.track_name,
        artist_name=track.artist_name,
        album_name=track.album_name,
        duration=track.duration,
        instrumental=track.instrumental,
        preview=_snippet_schema(search_service.preview(track, query)),
    )

def _video_schema(video: Video) -> VideoSchema:
    return VideoSchema(
        video_id=video.video_id,
        title=video.title,
        channel_title=video.channel_title,
        thumbnail_url=video.thumbnail_url,
        watch_url=video.watch_url,
    )

# ── Endpoints ────────────────────────────────────────────────────────────────
@app.get("/")
def read_root():
    return {
        "message": "Lyric-to-Clip API is running.",
        "status": "ready",
    }

@app.get("/status")
def get_status():
    """Returns the configured providers and preview settings."""
    return {
        "lyrics_provider": lyrics_client.base_url,
        "video_provider": YOUTUBE_BASE_URL,
        "video_api_key_configured": video_client.has_api_key,
        "top_k": search_service.top_k,
        "context_radius": search_service.context_radius,
    }

@app.post("/search", response_model=SearchResponse)
def search(request: SearchRequest):
    try:
        outcome = search_service.search(request.query, top_k=request.top_k)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SearchProviderError as e:
        print(f"[API] Search failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return SearchResponse(
        query=outcome.query,
        video_query=outcome.video_query,
        tracks=[_track_schema(t, outcome.query) for t in outcome.tracks],
        videos=[_video_schema(v) for v in outcome.videos],
    )

@app.post("/select", response_model=SelectionResponse)
def select(request: SelectRequest):
    """Search, then open the clip preview for one of the listed tracks."""
    try:
        outcome = search_service.search(request.query, top_k=request.top_k)
        selection = search_service.select(outcome, request.track_index, request.video_index)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SearchProviderError as e:
        print(f"[API] Selection failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return SelectionResponse(
        song_title=selection.song_title,
        artist=selection.artist,
        video_id=selection.video_id,
        watch_url=selection.video.watch_url if selection.video else None,
        snippet=_snippet_schema(selection.snippet),
        full_lyrics=list(selection.full_lyrics.lines),
    )

@app.post("/snippet", response_model=SnippetSchema)
def locate_snippet(request: SnippetRequest):
    """Locate the preview window in caller-supplied lyrics. No network calls."""
    if request.lines is not None:
        document = LyricsDocument(lines=tuple(request.lines))
    else:
        document = LyricsDocument.from_text(request.text)

    try:
        snippet = locate_relevant_span(document, request.query, request.context_radius)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _snippet_schema(snippet)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
