"""Tests for locating and version-checking mediainfo."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mediatracks.exceptions import (
    ExecutionError,
    IncompatibleVersionError,
    ToolNotFoundError,
    UnknownVersionError,
)
from mediatracks.settings import MediaInfoSettings
from mediatracks.tool import (
    MINIMUM_VERSION,
    ToolHandle,
    call_mediainfo,
    get_mediainfo,
    is_compatible_version,
    locate_mediainfo,
    parse_version,
    verify_mediainfo_version,
)
from tests.conftest import VERSION_OUTPUT, make_completed


class TestLocateMediainfo:
    """Tests for locate_mediainfo()."""

    def test_configured_path_exists(self, settings: MediaInfoSettings, fake_mediainfo: Path) -> None:
        """Existing override is returned."""
        assert locate_mediainfo(settings) == fake_mediainfo

    def test_missing_path_raises(self, tmp_path: Path) -> None:
        """Missing binary raises ToolNotFoundError naming the path."""
        missing = tmp_path / "nope" / "mediainfo"
        settings = MediaInfoSettings(path=str(missing))

        with pytest.raises(ToolNotFoundError, match="cannot be found") as exc_info:
            locate_mediainfo(settings)

        assert str(missing) in str(exc_info.value)
        assert exc_info.value.path == missing

    def test_default_path_used_when_unset(self) -> None:
        """Default location checked when no override is set."""
        with patch.dict(os.environ, {}, clear=True):
            settings = MediaInfoSettings()
        with patch.object(Path, "exists", return_value=True):
            assert locate_mediainfo(settings) == Path("/usr/local/bin/mediainfo")


class TestParseVersion:
    """Tests for parse_version()."""

    @pytest.mark.parametrize(
        ("output", "expected"),
        [
            ("MediaInfo Command line,\nMediaInfoLib - v0.7.25\n", "0.7.25"),
            ("MediaInfo Command line,\nMediaInfoLib - v24.01\n", "24.01"),
            ("MediaInfoLib - v0.7.99.1", "0.7.99.1"),
        ],
    )
    def test_extracts_version(self, output: str, expected: str) -> None:
        """Version token extracted from --Version output."""
        assert parse_version(output) == expected

    @pytest.mark.parametrize("output", ["", "command not found", "version 24"])
    def test_no_version(self, output: str) -> None:
        """Output without a v<digits>.<digits> token yields None."""
        assert parse_version(output) is None


class TestIsCompatibleVersion:
    """Tests for numeric version comparison."""

    def test_minimum_accepted(self) -> None:
        """The minimum itself is accepted."""
        assert MINIMUM_VERSION == "0.7.25"
        assert is_compatible_version("0.7.25") is True

    def test_below_minimum_rejected(self) -> None:
        """0.7.24 is too old."""
        assert is_compatible_version("0.7.24") is False

    @pytest.mark.parametrize("version", ["0.10.0", "0.7.100", "24.01", "0.7.25.1"])
    def test_numeric_ordering(self, version: str) -> None:
        """Components compare as numbers, not strings."""
        assert is_compatible_version(version) is True

    @pytest.mark.parametrize("version", ["0.6.99", "0.7.9", "0.7"])
    def test_older_versions(self, version: str) -> None:
        """Older versions rejected."""
        assert is_compatible_version(version) is False


class TestCallMediainfo:
    """Tests for the shared subprocess helper."""

    @patch("subprocess.run")
    def test_merges_output_and_keeps_exit_code(self, mock_run: MagicMock) -> None:
        """stderr is merged into stdout; a non-zero exit is returned, not raised."""
        mock_run.return_value = make_completed("boom\n", returncode=2)

        result = call_mediainfo(["/usr/bin/mediainfo", "clip.mov"], 5)

        assert result.returncode == 2
        kwargs = mock_run.call_args.kwargs
        assert kwargs["stderr"] is subprocess.STDOUT
        assert kwargs["timeout"] == 5
        assert kwargs["check"] is False

    @patch("subprocess.run")
    def test_timeout_names_command(self, mock_run: MagicMock) -> None:
        """Timeout message carries the joined command."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="mediainfo", timeout=5)

        with pytest.raises(ExecutionError, match="timed out after 5s") as exc_info:
            call_mediainfo(["/usr/bin/mediainfo", "my clip.mov"], 5)

        assert exc_info.value.command == "/usr/bin/mediainfo 'my clip.mov'"


class TestVerifyMediainfoVersion:
    """Tests for verify_mediainfo_version()."""

    @patch("subprocess.run")
    def test_returns_version(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """Supported version returned."""
        mock_run.return_value = make_completed(VERSION_OUTPUT)

        assert verify_mediainfo_version(settings.path, settings) == "24.01"

        args, kwargs = mock_run.call_args
        assert args[0] == [settings.path, "--Version"]
        assert kwargs["stderr"] == subprocess.STDOUT
        assert kwargs["timeout"] == settings.timeout

    @patch("subprocess.run")
    def test_nonzero_exit_still_parsed(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """Exit status of --Version is ignored."""
        mock_run.return_value = make_completed(VERSION_OUTPUT, returncode=255)
        assert verify_mediainfo_version(settings.path, settings) == "24.01"

    @patch("subprocess.run")
    def test_version_memoized(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """--Version runs once per binary."""
        mock_run.return_value = make_completed(VERSION_OUTPUT)

        verify_mediainfo_version(settings.path, settings)
        verify_mediainfo_version(settings.path, settings)

        assert mock_run.call_count == 1

    @patch("subprocess.run")
    def test_unknown_version(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """Unparsable output raises UnknownVersionError naming the command."""
        mock_run.return_value = make_completed("Segmentation fault\n")

        with pytest.raises(UnknownVersionError, match="Unable to determine mediainfo version") as exc_info:
            verify_mediainfo_version(settings.path, settings)

        assert "--Version" in str(exc_info.value)
        assert exc_info.value.stdout == "Segmentation fault\n"

    @patch("subprocess.run")
    def test_old_version_rejected(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """0.7.24 raises IncompatibleVersionError."""
        mock_run.return_value = make_completed("MediaInfoLib - v0.7.24\n")

        with pytest.raises(IncompatibleVersionError, match="0.7.24") as exc_info:
            verify_mediainfo_version(settings.path, settings)

        assert exc_info.value.version == "0.7.24"
        assert exc_info.value.minimum == "0.7.25"

    @patch("subprocess.run")
    def test_minimum_version_accepted(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """0.7.25 passes the gate."""
        mock_run.return_value = make_completed("MediaInfoLib - v0.7.25\n")
        assert verify_mediainfo_version(settings.path, settings) == "0.7.25"

    @patch("subprocess.run")
    def test_timeout(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """Hung --Version raises ExecutionError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="mediainfo", timeout=5)

        with pytest.raises(ExecutionError, match="timed out"):
            verify_mediainfo_version(settings.path, settings)

    @patch("subprocess.run")
    def test_spawn_failure(self, mock_run: MagicMock, settings: MediaInfoSettings) -> None:
        """OS error while spawning raises ExecutionError."""
        mock_run.side_effect = PermissionError("Permission denied")

        with pytest.raises(ExecutionError, match="Permission denied"):
            verify_mediainfo_version(settings.path, settings)


class TestGetMediainfo:
    """Tests for get_mediainfo()."""

    @patch("subprocess.run")
    def test_returns_handle(
        self, mock_run: MagicMock, settings: MediaInfoSettings, fake_mediainfo: Path
    ) -> None:
        """Handle carries path and version."""
        mock_run.return_value = make_completed(VERSION_OUTPUT)

        handle = get_mediainfo(settings)

        assert handle == ToolHandle(path=fake_mediainfo, version="24.01")

    @patch("subprocess.run")
    def test_missing_binary_skips_version_query(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """No subprocess when the binary does not exist."""
        settings = MediaInfoSettings(path=str(tmp_path / "missing"))

        with pytest.raises(ToolNotFoundError):
            get_mediainfo(settings)

        mock_run.assert_not_called()
