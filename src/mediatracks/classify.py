"""
Input classification.

Decides whether a reference is MediaInfo XML text, a remote URL or a local
file path. Checks run in a fixed order and the first match wins, so XML text
that happens to contain a URL or a filename is still treated as XML.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mediatracks.exceptions import InvalidInputError

XML_MARKER = "<?xml"

# scheme://authority..., scheme of 2+ chars so "C://" style drive letters never match
_URI_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]+://[^\s/?#]+(?:[/?#].*)?$")

# Trailing "basename.ext"
_FILENAME_RE = re.compile(r"[^\\/]*\.\w+$")

INPUT_GUIDELINE_MESSAGE = (
    "Bad Input\n"
    "Input must be:\n"
    "A video or xml file location. Example: '~/videos/test_video.mov' or '~/videos/test_video.xml'\n"
    "A valid URL. Example: 'http://www.site.com/videofile.mov'\n"
    "Or MediaInfo XML\n"
)


class InputKind(str, Enum):
    """Resolution strategy for an input."""

    XML = "xml"
    URL = "url"
    LOCAL_FILE = "local_file"


@dataclass(frozen=True)
class InputReference:
    """Classified input."""

    kind: InputKind
    value: str


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, os.PathLike):
        path = os.fspath(value)
        return path if isinstance(path, str) else None
    return None


def is_xml_text(value: str) -> bool:
    return XML_MARKER in value


def is_url(value: str) -> bool:
    return bool(_URI_RE.match(value.strip()))


def has_file_extension(value: str) -> bool:
    return bool(_FILENAME_RE.search(value.strip()))


def classify_input(value: Any) -> InputReference:
    """
    Classify an input reference.

    Args:
        value: XML text, URL, or file path (str or os.PathLike)

    Returns:
        InputReference with the matched kind.

    Raises:
        InvalidInputError: If the input is blank or matches no form.
    """
    text = _as_text(value)
    if text is None or not text.strip():
        raise InvalidInputError(INPUT_GUIDELINE_MESSAGE, value=value)

    if is_xml_text(text):
        return InputReference(InputKind.XML, text)
    if is_url(text):
        return InputReference(InputKind.URL, text.strip())
    if has_file_extension(text):
        return InputReference(InputKind.LOCAL_FILE, text)

    raise InvalidInputError(INPUT_GUIDELINE_MESSAGE, value=value)
