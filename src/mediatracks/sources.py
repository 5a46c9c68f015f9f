"""
Turning an input reference into a MediaInfo XML document.

Three strategies:
    - xml_from_text(): XML passed in directly, returned unchanged
    - xml_from_url(): HEAD check, then mediainfo on the escaped URL
    - xml_from_local_file(): .xml files read as-is, anything else run through mediainfo
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from urllib.parse import quote

import httpx

from mediatracks.exceptions import ArgumentError, RemoteUrlError
from mediatracks.runner import run_mediainfo
from mediatracks.settings import MediaInfoSettings, get_settings

logger = logging.getLogger(__name__)

# RFC 3986 reserved + unreserved, plus "%" so existing escapes survive
_URL_SAFE_CHARS = "-_.!~*'();/?:@&=+$,[]#%"


# =============================================================================
# XML Passthrough
# =============================================================================


def xml_from_text(text: str | None) -> str:
    """Return XML text unchanged."""
    if not text or not text.strip():
        raise ArgumentError("Your XML input cannot be blank.")
    return text


# =============================================================================
# Remote URL
# =============================================================================


def escape_url(url: str) -> str:
    """Percent-encode characters that are not valid in a URI (spaces, non-ASCII)."""
    return quote(url, safe=_URL_SAFE_CHARS)


def check_url_reachable(url: str, timeout: float) -> int:
    """
    HEAD the URL without downloading it.

    Returns:
        The response status code (always 200).

    Raises:
        RemoteUrlError: On any status other than 200, or if the URL cannot be parsed or reached.
    """
    try:
        response = httpx.head(url, timeout=timeout, follow_redirects=False)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        # InvalidURL and IDNA errors are raised while parsing, before any request
        raise RemoteUrlError(
            f"HTTP call to {url} is not working! {type(e).__name__}: {e}",
            url=url,
        ) from e

    if response.status_code != 200:
        raise RemoteUrlError(
            f"HTTP call to {url} is not working! Status: {response.status_code}",
            url=url,
            status_code=response.status_code,
        )

    return response.status_code


def xml_from_url(url: str | None, *, settings: MediaInfoSettings | None = None) -> str:
    """
    Get MediaInfo XML for a remote media URL.

    Raises:
        ArgumentError: If url is blank.
        RemoteUrlError: If the URL is not reachable.
        ExecutionError: If mediainfo fails.
    """
    if not url or not url.strip():
        raise ArgumentError("You must include a URL.")

    settings = settings or get_settings()
    url = url.strip()

    check_url_reachable(url, settings.http_timeout)
    logger.debug(f"URL reachable: {url}")

    return run_mediainfo(escape_url(url), settings=settings)


# =============================================================================
# Local File
# =============================================================================


def xml_from_local_file(
    path: str | os.PathLike[str] | None,
    *,
    settings: MediaInfoSettings | None = None,
) -> str | bytes:
    """
    Get MediaInfo XML for a local file.

    Relative paths and "~" are expanded. Files ending in .xml are assumed to
    already be MediaInfo reports and are returned as raw bytes.

    Raises:
        ArgumentError: If path is blank or does not exist.
        ExecutionError: If mediainfo fails.
    """
    if path is None or not str(path).strip():
        raise ArgumentError("You must include a file location.")

    absolute_path = Path(path).expanduser().absolute()

    if not absolute_path.exists():
        raise ArgumentError(
            f"need a path to a video file, {absolute_path} does not exist",
            path=absolute_path,
        )

    if absolute_path.suffix.lower() == ".xml":
        logger.debug(f"Reading MediaInfo XML from: {absolute_path}")
        return absolute_path.read_bytes()

    return run_mediainfo(str(absolute_path), settings=settings)
