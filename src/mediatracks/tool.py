"""
Locating and version-checking the mediainfo binary.

Key functions:
    - locate_mediainfo(): Resolve the configured binary path
    - verify_mediainfo_version(): Query --Version and enforce the minimum
    - get_mediainfo(): Both of the above, as a ToolHandle
    - call_mediainfo(): Run any mediainfo command with a timeout
"""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from mediatracks.exceptions import (
    ExecutionError,
    IncompatibleVersionError,
    ToolNotFoundError,
    UnknownVersionError,
)
from mediatracks.settings import MediaInfoSettings, get_settings

logger = logging.getLogger(__name__)

MINIMUM_VERSION = "0.7.25"

# "MediaInfoLib - v24.01", "MediaInfo Command line, MediaInfoLib - v0.7.25"
_VERSION_RE = re.compile(r"v(\d+(?:\.\d+)+)")


@dataclass(frozen=True)
class ToolHandle:
    """Resolved mediainfo binary and its validated version."""

    path: Path
    version: str


# =============================================================================
# Location
# =============================================================================


def locate_mediainfo(settings: MediaInfoSettings | None = None) -> Path:
    """
    Resolve the mediainfo binary from settings.

    Args:
        settings: Settings carrying the MEDIAINFO_PATH override

    Returns:
        Path to the binary.

    Raises:
        ToolNotFoundError: If nothing exists at the configured path.
    """
    settings = settings or get_settings()
    location = Path(settings.path)

    if not location.exists():
        raise ToolNotFoundError(
            f"{location} cannot be found. Are you sure mediainfo is installed?",
            path=location,
        )

    return location


# =============================================================================
# Version
# =============================================================================


def parse_version(output: str) -> str | None:
    """Extract the first v<major>.<minor>[.<patch>...] token from --Version output."""
    match = _VERSION_RE.search(output or "")
    return match.group(1) if match else None


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split(".") if part.isdigit())


def is_compatible_version(version: str, minimum: str = MINIMUM_VERSION) -> bool:
    """
    Check a version against the supported minimum.

    Compares dotted components numerically, so "0.10.0" is newer than "0.7.25"
    and "24.01" is newer than both.
    """
    return _version_key(version) >= _version_key(minimum)


def call_mediainfo(cmd: list[str], timeout: float) -> subprocess.CompletedProcess[str]:
    """
    Run a mediainfo command with stdout and stderr merged.

    The exit code is left to the caller.

    Raises:
        ExecutionError: If the process times out or cannot be spawned.
    """
    command = shlex.join(cmd)
    logger.debug(f"Running mediainfo: {command}")

    try:
        return subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ExecutionError(
            f"Execution of '{command}' timed out after {timeout}s",
            command=command,
        ) from e
    except OSError as e:
        raise ExecutionError(
            f"Execution of '{command}' failed: {e}",
            command=command,
        ) from e


@lru_cache(maxsize=8)
def _query_version(tool_path: str, timeout: float) -> str:
    """Run `<tool> --Version` and return its merged output."""
    # Some mediainfo builds exit non-zero for --Version; only the text matters
    result = call_mediainfo([tool_path, "--Version"], timeout)
    return result.stdout or ""


def clear_version_cache() -> None:
    """Forget memoized --Version output."""
    _query_version.cache_clear()


def verify_mediainfo_version(
    tool_path: Path | str,
    settings: MediaInfoSettings | None = None,
) -> str:
    """
    Query the binary's version and make sure it is supported.

    Args:
        tool_path: mediainfo binary
        settings: Settings carrying the subprocess timeout

    Returns:
        Version string, e.g. "24.01".

    Raises:
        UnknownVersionError: If --Version output carries no version.
        IncompatibleVersionError: If the version is below MINIMUM_VERSION.
        ExecutionError: If the binary cannot be run or times out.
    """
    settings = settings or get_settings()
    command = shlex.join([str(tool_path), "--Version"])

    output = _query_version(str(tool_path), settings.timeout)
    version = parse_version(output)

    if not version:
        raise UnknownVersionError(
            f"Unable to determine mediainfo version. We tried: {command}. "
            "Set MEDIAINFO_PATH to the full path of mediainfo if it is not at the default location.",
            command=command,
            stdout=output,
        )

    if not is_compatible_version(version):
        raise IncompatibleVersionError(
            f"Your version of mediainfo, {version}, is not compatible. "
            f">= {MINIMUM_VERSION} required.",
            version=version,
            minimum=MINIMUM_VERSION,
            command=command,
        )

    logger.debug(f"mediainfo {version} at {tool_path}")
    return version


def get_mediainfo(settings: MediaInfoSettings | None = None) -> ToolHandle:
    """Locate mediainfo and validate its version."""
    settings = settings or get_settings()
    path = locate_mediainfo(settings)
    version = verify_mediainfo_version(path, settings)
    return ToolHandle(path=path, version=version)
