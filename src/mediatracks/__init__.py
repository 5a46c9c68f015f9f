"""mediatracks - Per-track media metadata from mediainfo XML."""

from mediatracks.api import from_local_file, from_url, from_xml, resolve
from mediatracks.exceptions import (
    ArgumentError,
    ConfigurationError,
    ExecutionError,
    ExternalToolError,
    IncompatibleVersionError,
    InvalidInputError,
    MediaTracksError,
    NetworkError,
    RemoteUrlError,
    ToolNotFoundError,
    UnknownVersionError,
    XmlParserError,
)
from mediatracks.settings import MediaInfoSettings, get_settings
from mediatracks.tracks import Track, TrackCollection

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Entry points
    "resolve",
    "from_xml",
    "from_url",
    "from_local_file",
    # Records
    "Track",
    "TrackCollection",
    # Settings
    "MediaInfoSettings",
    "get_settings",
    # Base exception
    "MediaTracksError",
    # Configuration
    "ConfigurationError",
    "XmlParserError",
    # Input
    "ArgumentError",
    "InvalidInputError",
    # Network
    "NetworkError",
    "RemoteUrlError",
    # External tool
    "ExternalToolError",
    "ToolNotFoundError",
    "UnknownVersionError",
    "IncompatibleVersionError",
    "ExecutionError",
]
