"""Shared pytest fixtures and helpers for mediatracks tests."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from pathlib import Path

import pytest

from mediatracks.settings import MediaInfoSettings, clear_settings_cache
from mediatracks.tool import ToolHandle, clear_version_cache

# mediainfo 0.7.x layout
LEGACY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Mediainfo version="0.7.25">
<File>
<track type="General">
<Complete_name>/videos/test_video.mov</Complete_name>
<Format>MPEG-4</Format>
<Format_profile>QuickTime</Format_profile>
<Duration>1mn 30s</Duration>
</track>
<track type="Video">
<ID>1</ID>
<Format>AVC</Format>
<Codec_ID>avc1</Codec_ID>
<Width>1 920 pixels</Width>
</track>
<track type="Audio">
<ID>2</ID>
<Format>AAC</Format>
<Channel_s_>2 channels</Channel_s_>
</track>
</File>
</Mediainfo>
"""

# mediainfo 17+ layout: default namespace, typeorder and an <extra> block
MODERN_XML = """<?xml version="1.0" encoding="UTF-8"?>
<MediaInfo xmlns="https://mediaarea.net/mediainfo" version="2.0">
<creatingLibrary version="24.01" url="https://mediaarea.net/MediaInfo">MediaInfoLib</creatingLibrary>
<media ref="/videos/test_video.mkv">
<track type="General">
<Format>Matroska</Format>
<Duration>90.000</Duration>
</track>
<track type="Video">
<Format>AVC</Format>
<CodecID>V_MPEG4/ISO/AVC</CodecID>
<Width>1920</Width>
</track>
<track type="Audio" typeorder="1">
<Format>AAC</Format>
<Channels>2</Channels>
</track>
<track type="Audio" typeorder="2">
<Format>AC-3</Format>
<Channels>6</Channels>
<extra>
<Service_Kind>CM</Service_Kind>
<dialnorm>-27</dialnorm>
</extra>
</track>
</media>
</MediaInfo>
"""

VERSION_OUTPUT = "MediaInfo Command line,\nMediaInfoLib - v24.01\n"


def make_completed(
    stdout: str = "",
    returncode: int = 0,
    args: list[str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Create a CompletedProcess for mocking subprocess.run() in tests.

    Args:
        stdout: Merged stdout/stderr text.
        returncode: Process exit code.
        args: Command arguments.

    Returns:
        CompletedProcess with the specified values.
    """
    return subprocess.CompletedProcess(args=args or [], returncode=returncode, stdout=stdout)


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    """Start every test with fresh settings and no memoized tool version."""
    clear_settings_cache()
    clear_version_cache()
    yield
    clear_settings_cache()
    clear_version_cache()


@pytest.fixture
def fake_mediainfo(tmp_path: Path) -> Path:
    """An existing file standing in for the mediainfo binary."""
    binary = tmp_path / "bin" / "mediainfo"
    binary.parent.mkdir()
    binary.write_text("#!/bin/sh\n")
    binary.chmod(0o755)
    return binary


@pytest.fixture
def settings(fake_mediainfo: Path) -> MediaInfoSettings:
    """Settings pointing at the fake binary."""
    return MediaInfoSettings(path=str(fake_mediainfo), timeout=5, http_timeout=2)


@pytest.fixture
def tool(fake_mediainfo: Path) -> ToolHandle:
    """Validated handle for the fake binary."""
    return ToolHandle(path=fake_mediainfo, version="24.01")


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers attached by setup_logging() so files are closed between tests."""
    yield
    logger = logging.getLogger("mediatracks")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
