# lyricclip/domain/span_locator.py

from typing import Optional, Sequence, Union

from .models import LyricsDocument, Snippet


DEFAULT_CONTEXT_RADIUS = 2


def find_first_match(lines: Sequence[str], query: str) -> Optional[int]:
    """
    Index of the first line containing the query, compared in lower case.
    The query is matched as given, surrounding spaces included.
    Returns None for an empty or whitespace-only query.
    """
    if not query.strip():
        return None

    needle = query.lower()
    for index, line in enumerate(lines):
        if needle in line.lower():
            return index
    return None


def locate_relevant_span(
    lines: Union[LyricsDocument, Sequence[str]],
    query: str,
    context_radius: int = DEFAULT_CONTEXT_RADIUS,
) -> Snippet:
    """
    Pick the window of lines to preview for a query.

    The window is centered on the first matching line and clamped to the
    document: [max(0, i - k), min(last, i + k)]. Without a match (empty
    query, no hit, or empty text) the default window [0, min(last, 2k)]
    is returned, so both cases show at most 2k + 1 lines.
    """
    if context_radius < 0:
        raise ValueError("context_radius must be zero or positive.")

    if isinstance(lines, LyricsDocument):
        lines = lines.lines
    lines = tuple(lines)

    if not lines:
        return Snippet(lines=(), start_index=0)

    last_index = len(lines) - 1
    matched_index = find_first_match(lines, query)

    if matched_index is None:
        end = min(last_index, 2 * context_radius)
        return Snippet(lines=lines[: end + 1], start_index=0)

    start = max(0, matched_index - context_radius)
    end = min(last_index, matched_index + context_radius)
    return Snippet(
        lines=lines[start : end + 1],
        start_index=start,
        matched_index=matched_index,
    )
