"""Rich console output for the mediatracks CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from mediatracks.tracks import Track, TrackCollection

MEDIATRACKS_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "title": "bold white",
        "dim": "dim",
        "path": "cyan",
        "track": "bold magenta",
        "field": "cyan",
    }
)

# Primary console for normal output
console = Console(theme=MEDIATRACKS_THEME, stderr=False)

# Error console for stderr output
err_console = Console(theme=MEDIATRACKS_THEME, stderr=True)


def _track_title(track: Track) -> str:
    title = (track.type or "track").capitalize()
    if track.typeorder is not None:
        title += f" #{track.typeorder}"
    return title


def _add_rows(table: Table, track: Track, prefix: str = "") -> None:
    for name, value in track.items():
        if isinstance(value, Track):
            _add_rows(table, value, prefix=f"{prefix}{name}.")
        else:
            table.add_row(f"{prefix}{name}", escape(str(value)))


def build_track_table(track: Track) -> Table:
    """One two-column table of a track's attributes."""
    table = Table(
        title=f"[track]{_track_title(track)}[/]",
        show_header=True,
        header_style="bold",
        title_justify="left",
    )
    table.add_column("Attribute", style="field")
    table.add_column("Value", overflow="fold")
    _add_rows(table, track)
    return table


def print_tracks(tracks: TrackCollection, out: Console | None = None) -> None:
    """Print every track as a table.

    Example:
        >>> print_tracks(resolve("movie.mov"))
        General
        ┏━━━━━━━━━━━┳━━━━━━━━━━━━━━━━┓
        ┃ Attribute ┃ Value          ┃
        ┡━━━━━━━━━━━╇━━━━━━━━━━━━━━━━┩
        │ format    │ MPEG-4         │
        └───────────┴────────────────┘
    """
    out = out or console
    if not tracks:
        out.print("[dim]No tracks found[/]")
        return

    for track in tracks:
        out.print(build_track_table(track))


def print_tool_info(path: Any, version: str, out: Console | None = None) -> None:
    """Print the located mediainfo binary and its version."""
    out = out or console
    out.print(
        f"  [success]✓[/] mediainfo [title]{escape(version)}[/] at [path]{escape(str(path))}[/]",
        soft_wrap=True,
    )


def print_error(message: str) -> None:
    """Print an error message with X to stderr."""
    err_console.print(f"  [error]✗[/] {escape(message)}", soft_wrap=True)
