"""mediatracks CLI built with Typer and Rich.

Commands:
    mediatracks show INPUT   Print tracks for XML text, a URL or a file
    mediatracks tool         Show the mediainfo binary in use
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from mediatracks import __version__
from mediatracks.api import resolve
from mediatracks.console import console, print_error, print_tool_info, print_tracks
from mediatracks.exceptions import MediaTracksError
from mediatracks.logging_setup import setup_logging
from mediatracks.settings import MediaInfoSettings, get_settings
from mediatracks.tool import get_mediainfo

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mediatracks",
    help="📼 Per-track media metadata from mediainfo.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"mediatracks {__version__}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> MediaInfoSettings:
    if isinstance(ctx.obj, MediaInfoSettings):
        return ctx.obj
    return get_settings()


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write DEBUG logs to this file", dir_okay=False),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show warnings and errors on the console"),
    ] = False,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Plain log lines instead of Rich output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """📼 Per-track media metadata from mediainfo."""
    settings = get_settings()
    setup_logging(
        log_level or settings.log_level,
        log_file=log_file,
        rich_console=not plain,
        quiet_console=quiet,
    )
    ctx.obj = settings


@app.command("show")
def show(
    ctx: typer.Context,
    value: Annotated[
        str,
        typer.Argument(help="MediaInfo XML, a media URL, or a local file path"),
    ],
    kind: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Only show tracks of this type (video, audio, ...)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print JSON instead of tables"),
    ] = False,
) -> None:
    """🔍 Show the tracks of a media reference.

    [bold]Examples:[/]
      mediatracks show ~/videos/test_video.mov
      mediatracks show report.xml --type audio
      mediatracks show http://www.site.com/videofile.mov --json
    """
    try:
        tracks = resolve(value, settings=_settings(ctx))
    except MediaTracksError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except SyntaxError as e:
        # ElementTree ParseError and lxml XMLSyntaxError both derive from it
        print_error(f"Malformed MediaInfo XML: {e}")
        raise typer.Exit(1) from e

    if kind:
        tracks = tracks.of_type(kind)

    if as_json:
        typer.echo(json.dumps(tracks.to_list(), indent=2, ensure_ascii=False))
        return

    print_tracks(tracks)


@app.command("tool")
def tool(ctx: typer.Context) -> None:
    """🔧 Show the mediainfo binary and its version."""
    try:
        handle = get_mediainfo(_settings(ctx))
    except MediaTracksError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    print_tool_info(handle.path, handle.version)
