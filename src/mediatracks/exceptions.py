"""
mediatracks exception hierarchy.

Provides typed exceptions so callers can tell apart bad input, a missing or
outdated mediainfo binary, failed executions and unreachable URLs.

Exception Hierarchy:
    MediaTracksError (base)
    ├── ConfigurationError - Invalid settings
    │   └── XmlParserError - Configured XML parser cannot be loaded
    ├── ArgumentError - Missing or non-existent required value
    │   └── InvalidInputError - Input cannot be classified
    ├── NetworkError - Remote resource communication failures
    │   └── RemoteUrlError - HEAD check did not return 200
    └── ExternalToolError - mediainfo subprocess failures
        ├── ToolNotFoundError - Configured binary does not exist
        ├── UnknownVersionError - Version output could not be parsed
        ├── IncompatibleVersionError - Version below the supported minimum
        └── ExecutionError - Non-zero exit, timeout or spawn failure
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class MediaTracksError(Exception):
    """Base exception for all mediatracks errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """
        Initialize mediatracks exception.

        Args:
            message: Human-readable error message
            details: Optional structured error details for logging/debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MediaTracksError):
    """Settings error."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)
        self.field = field


class XmlParserError(ConfigurationError):
    """Configured XML parser module could not be loaded."""

    def __init__(self, message: str, *, parser: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("field", "xml_parser")
        details = kwargs.get("details") or {}
        if parser:
            details["parser"] = parser
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.parser = parser


# =============================================================================
# Argument Errors
# =============================================================================


class ArgumentError(MediaTracksError):
    """A required value is missing or points at nothing."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = str(path)
        super().__init__(message, details=details)
        self.path = path


class InvalidInputError(ArgumentError):
    """Input is not XML text, a URL or a file path with an extension."""

    def __init__(self, message: str, *, value: Any = None, **kwargs: Any) -> None:
        details = kwargs.get("details") or {}
        if value is not None:
            details["value"] = repr(value)
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.value = value


# =============================================================================
# Network Errors
# =============================================================================


class NetworkError(MediaTracksError):
    """Remote resource communication failure."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.url = url
        self.status_code = status_code


class RemoteUrlError(NetworkError):
    """URL did not answer a HEAD request with 200 OK."""

    pass


# =============================================================================
# External Tool Errors
# =============================================================================


class ExternalToolError(MediaTracksError):
    """mediainfo subprocess failure."""

    def __init__(
        self,
        message: str,
        *,
        tool: str | None = "mediainfo",
        command: str | None = None,
        return_code: int | None = None,
        stdout: str | None = None,
        stderr: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if tool:
            details["tool"] = tool
        if command:
            details["command"] = command
        if return_code is not None:
            details["return_code"] = return_code
        if stdout:
            details["stdout"] = stdout
        if stderr:
            details["stderr"] = stderr
        super().__init__(message, details=details)
        self.tool = tool
        self.command = command
        self.return_code = return_code
        self.stdout = stdout
        self.stderr = stderr


class ToolNotFoundError(ExternalToolError):
    """Configured mediainfo binary does not exist."""

    def __init__(self, message: str, *, path: Path | str | None = None, **kwargs: Any) -> None:
        details = kwargs.get("details") or {}
        if path:
            details["path"] = str(path)
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.path = path


class UnknownVersionError(ExternalToolError):
    """mediainfo --Version produced no recognizable version."""

    pass


class IncompatibleVersionError(ExternalToolError):
    """mediainfo is older than the minimum supported version."""

    def __init__(
        self,
        message: str,
        *,
        version: str | None = None,
        minimum: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.get("details") or {}
        if version:
            details["version"] = version
        if minimum:
            details["minimum"] = minimum
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.version = version
        self.minimum = minimum


class ExecutionError(ExternalToolError):
    """mediainfo exited non-zero, timed out or could not be spawned."""

    @property
    def output(self) -> str:
        """Raw merged output of the failed run."""
        return self.stdout or ""
