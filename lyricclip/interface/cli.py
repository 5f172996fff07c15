# lyricclip/interface/cli.py

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from lyricclip.domain.models import LyricsDocument, SearchOutcome, SelectionResult, Snippet


console = Console()

HIGHLIGHT_STYLE = "bold black on yellow"


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold magenta]🎵 Lyric-to-Clip[/bold magenta]\n"
        "[dim]Type a line you remember, get the song and a clip to preview[/dim]",
        box=box.DOUBLE,
        border_style="magenta",
    ))


def display_provider_status(lyrics_url: str, has_video_key: bool) -> None:
    console.print(f"\n[green]✓[/green] Lyrics provider: [bold]{lyrics_url}[/bold]")
    if has_video_key:
        console.print("[green]✓[/green] Video provider: [bold]YouTube Data API[/bold]\n")
    else:
        console.print(
            "[yellow]⚠[/yellow] No YOUTUBE_API_KEY set. "
            "Video results will be empty.\n"
        )


def prompt_for_query() -> str:
    return Prompt.ask("\n[bold yellow]🎤 Lyric phrase[/bold yellow]")


def highlight_snippet(snippet: Snippet, query: str, numbered: bool = False) -> Text:
    text = Text()
    for offset, line in enumerate(snippet.lines):
        line_number = snippet.start_index + offset
        if numbered:
            text.append(f"{line_number + 1:>4} │ ", style="dim")
        line_text = Text(line)
        if query.strip():
            line_text.highlight_words([query], HIGHLIGHT_STYLE, case_sensitive=False)
        if line_number == snippet.matched_index:
            line_text.stylize("bold")
        text.append_text(line_text)
        if offset < len(snippet.lines) - 1:
            text.append("\n")
    return text


def display_results(outcome: SearchOutcome, previews: List[Snippet]) -> None:
    console.print(f"\n[bold]Results for:[/bold] [italic]\"{outcome.query}\"[/italic]\n")

    if not outcome.tracks:
        console.print("[dim]No lyrics matched that phrase.[/dim]")
        return

    lyrics_table = Table(title="Lyrics Results", box=box.ROUNDED, show_lines=True)
    lyrics_table.add_column("#", justify="right", style="bold")
    lyrics_table.add_column("Song", style="bold white")
    lyrics_table.add_column("Artist", style="cyan")
    lyrics_table.add_column("Album", style="dim")
    lyrics_table.add_column("Preview")

    for rank, (track, preview) in enumerate(zip(outcome.tracks, previews), start=1):
        preview_text = highlight_snippet(preview, outcome.query)
        if not preview.is_match:
            preview_text.stylize("dim")
        lyrics_table.add_row(
            str(rank), track.track_name, track.artist_name, track.album_name, preview_text
        )

    console.print(lyrics_table)

    if not outcome.videos:
        return

    video_table = Table(
        title=f"YouTube Results for \"{outcome.video_query}\"",
        box=box.ROUNDED,
    )
    video_table.add_column("#", justify="right", style="bold")
    video_table.add_column("Title", style="bold white")
    video_table.add_column("Channel", style="cyan")
    video_table.add_column("Link", style="blue")

    for rank, video in enumerate(outcome.videos, start=1):
        video_table.add_row(str(rank), video.title, video.channel_title, video.watch_url)

    console.print(video_table)


def prompt_for_selection(track_count: int) -> Optional[int]:
    """Returns the zero-based track index, or None to skip."""
    choice = IntPrompt.ask(
        f"\n[bold yellow]▶ Preview which song?[/bold yellow] [dim](1-{track_count}, 0 to skip)[/dim]",
        choices=[str(n) for n in range(track_count + 1)],
        show_choices=False,
        default=1,
    )
    return choice - 1 if choice > 0 else None


def display_clip_preview(selection: SelectionResult, query: str) -> None:
    content = Text()
    content.append("🎵 ", style="dim")
    content.append(selection.song_title, style="bold white")
    content.append("\n👤 ", style="dim")
    content.append(selection.artist, style="cyan")

    if selection.track.album_name:
        content.append(f"\n💿 {selection.track.album_name}", style="dim")

    content.append("\n\n")
    if selection.snippet.lines:
        content.append_text(highlight_snippet(selection.snippet, query, numbered=True))
    else:
        content.append("No lyrics available for this track.", style="dim italic")

    content.append("\n\n▶ ", style="dim")
    if selection.video is not None:
        content.append(selection.video.title, style="bold")
        content.append(f"\n  {selection.video.watch_url}", style="blue underline")
    else:
        content.append("No matching video.", style="dim italic")

    border = "green" if selection.snippet.is_match else "yellow"
    console.print(Panel(
        content,
        title="[bold]Clip Preview[/bold]",
        border_style=border,
        box=box.ROUNDED,
        padding=(1, 2),
    ))


def display_full_lyrics(lyrics: LyricsDocument, snippet: Snippet) -> None:
    if lyrics.is_empty:
        console.print("[dim]No lyrics available.[/dim]")
        return

    text = Text()
    for index, line in enumerate(lyrics.lines):
        style = "bold" if snippet.start_index <= index <= snippet.end_index else "dim"
        text.append(f"{index + 1:>4} │ ", style="dim")
        text.append(line + "\n", style=style)
    console.print(Panel(text, title="[bold]Full Lyrics[/bold]", box=box.ROUNDED))


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}\n")


def ask_yes_no(question: str, default: str = "y") -> bool:
    answer = Prompt.ask(
        f"\n[dim]{question}[/dim]",
        choices=["y", "n"],
        default=default,
    )
    return answer.lower() == "y"


def ask_continue() -> bool:
    return ask_yes_no("Search again?")
