"""
Public entry points.

resolve() accepts any supported reference and picks the strategy itself;
from_xml(), from_url() and from_local_file() skip classification when the
caller already knows what it has.

Example:
    from mediatracks import resolve

    tracks = resolve("~/videos/test_video.mov")
    print(tracks.video.format)
"""

from __future__ import annotations

import logging
import os
from typing import Any

from mediatracks.classify import InputKind, classify_input
from mediatracks.settings import MediaInfoSettings, get_settings
from mediatracks.sources import xml_from_local_file, xml_from_text, xml_from_url
from mediatracks.tracks import TrackCollection, materialize

logger = logging.getLogger(__name__)


def from_xml(text: str, *, settings: MediaInfoSettings | None = None) -> TrackCollection:
    """Tracks from MediaInfo XML text."""
    settings = settings or get_settings()
    return materialize(xml_from_text(text), settings=settings)


def from_url(url: str, *, settings: MediaInfoSettings | None = None) -> TrackCollection:
    """Tracks for a remote media URL (HEAD-checked, then analyzed by mediainfo)."""
    settings = settings or get_settings()
    return materialize(xml_from_url(url, settings=settings), settings=settings)


def from_local_file(
    path: str | os.PathLike[str],
    *,
    settings: MediaInfoSettings | None = None,
) -> TrackCollection:
    """Tracks for a local media file, or from a saved MediaInfo .xml report."""
    settings = settings or get_settings()
    return materialize(xml_from_local_file(path, settings=settings), settings=settings)


def resolve(value: Any, *, settings: MediaInfoSettings | None = None) -> TrackCollection:
    """
    Resolve XML text, a URL or a local file path into tracks.

    Args:
        value: MediaInfo XML, an http(s) URL, or a path ending in an extension
        settings: Settings to use instead of the cached environment settings

    Returns:
        TrackCollection in document order.

    Raises:
        InvalidInputError: If value is blank or matches none of the forms.
        MediaTracksError: Any other failure from the chosen strategy.
    """
    reference = classify_input(value)
    logger.debug(f"Resolving input as {reference.kind.value}")

    if reference.kind is InputKind.XML:
        return from_xml(reference.value, settings=settings)
    if reference.kind is InputKind.URL:
        return from_url(reference.value, settings=settings)
    return from_local_file(reference.value, settings=settings)
