# lyricclip/application/session.py

from dataclasses import replace
from typing import Optional

from lyricclip.application.clip_search_service import ClipSearchService
from lyricclip.domain.models import SearchOutcome, SelectionResult, Snippet


class ClipSession:
    """
    Presentation state for one user: the query being typed, the last
    search outcome and the current selection.

    Lifecycle:
    - update_query() on every edit; an open selection follows the new query
    - run_search()   replaces the outcome and drops the selection
    - select()       opens the clip preview for one listed track
    - back_to_search() discards the selection, keeping the result lists
    """

    def __init__(self, service: ClipSearchService):
        self._service = service
        self.query = ""
        self.outcome: Optional[SearchOutcome] = None
        self.selection: Optional[SelectionResult] = None
        self.is_loading = False

    def update_query(self, text: str) -> None:
        self.query = text
        if self.selection is not None:
            self.selection = replace(
                self.selection,
                snippet=self._service.preview(self.selection.track, text),
            )

    def run_search(self) -> SearchOutcome:
        self.is_loading = True
        try:
            outcome = self._service.search(self.query)
        finally:
            self.is_loading = False

        self.outcome = outcome
        self.selection = None
        return outcome

    def select(self, track_index: int, video_index: Optional[int] = None) -> SelectionResult:
        if self.outcome is None:
            raise RuntimeError("No search results. Call run_search() first.")

        selection = self._service.select(self.outcome, track_index, video_index)
        if self.query != self.outcome.query:
            selection = replace(
                selection, snippet=self._service.preview(selection.track, self.query)
            )
        self.selection = selection
        return selection

    def back_to_search(self) -> None:
        self.selection = None

    def preview_for(self, track_index: int) -> Snippet:
        if self.outcome is None:
            raise RuntimeError("No search results. Call run_search() first.")
        if not 0 <= track_index < len(self.outcome.tracks):
            raise IndexError(f"No track at position {track_index}.")
        return self._service.preview(self.outcome.tracks[track_index], self.query)
