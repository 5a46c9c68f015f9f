"""
Track records built from MediaInfo XML.

MediaInfo's field set varies per container and per version, so nothing here
declares fields up front. Each <track> element becomes a Track whose
attributes are exactly its child elements, in document order, with names
normalized to lowercase and "." replaced by "_":

    <track type="Video">
        <Format>AVC</Format>
        <Codec.ID>avc1</Codec.ID>
    </track>

    track.format      -> "AVC"
    track["codec_id"] -> "avc1"
    track.attributes  -> ("format", "codec_id")

Both the legacy layout (Mediainfo/File/track) and the current namespaced
layout (MediaInfo/media/track) are supported.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType, ModuleType
from typing import Any, overload

from mediatracks.exceptions import XmlParserError
from mediatracks.settings import MediaInfoSettings, get_settings

logger = logging.getLogger(__name__)


def normalize_attribute_name(name: str) -> str:
    """'Codec.ID' -> 'codec_id'"""
    return name.replace(".", "_").lower()


class Track(Mapping[str, Any]):
    """
    One MediaInfo track (General, Video, Audio, Text, Menu, ...).

    Behaves as a read-only mapping of attribute name to value. Attributes can
    also be read as Python attributes (track.format), except for names taken
    by the Track itself:

        type, typeorder, fields, attributes, to_dict
        get, items, keys, values (Mapping methods)

    A MediaInfo field with one of those names, e.g. <Type>Chapters</Type>,
    is only reachable by subscript: track.type is the track type ("menu"),
    track["type"] is the field value ("Chapters").
    """

    __slots__ = ("_type", "_typeorder", "_fields")

    def __init__(
        self,
        type: str = "",
        fields: Mapping[str, Any] | None = None,
        typeorder: int | None = None,
    ) -> None:
        self._type = type.lower()
        self._typeorder = typeorder
        self._fields: Mapping[str, Any] = MappingProxyType(dict(fields or {}))

    @property
    def type(self) -> str:
        """Lowercased track type, e.g. "video"; empty if the element had none."""
        return self._type

    @property
    def typeorder(self) -> int | None:
        """Position among tracks of the same type, when MediaInfo reports it."""
        return self._typeorder

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    @property
    def attributes(self) -> tuple[str, ...]:
        """Attribute names in document order."""
        return tuple(self._fields)

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(
                f"{self._type or 'untyped'} track has no attribute {name!r}"
            ) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return (
            self._type == other._type
            and self._typeorder == other._typeorder
            and list(self._fields.items()) == list(other._fields.items())
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Track(type={self._type!r}, attributes={list(self._fields)!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict of attributes; nested tracks (e.g. "extra") become dicts."""
        return {
            name: value.to_dict() if isinstance(value, Track) else value
            for name, value in self._fields.items()
        }


class TrackCollection(Sequence[Track]):
    """Ordered, read-only sequence of tracks from one MediaInfo report."""

    __slots__ = ("_tracks",)

    def __init__(self, tracks: Iterable[Track] = ()) -> None:
        self._tracks: tuple[Track, ...] = tuple(tracks)

    @overload
    def __getitem__(self, index: int) -> Track: ...

    @overload
    def __getitem__(self, index: slice) -> TrackCollection: ...

    def __getitem__(self, index: int | slice) -> Track | TrackCollection:
        if isinstance(index, slice):
            return TrackCollection(self._tracks[index])
        return self._tracks[index]

    def __len__(self) -> int:
        return len(self._tracks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrackCollection):
            return NotImplemented
        return self._tracks == other._tracks

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TrackCollection({[track.type for track in self._tracks]!r})"

    @property
    def types(self) -> tuple[str, ...]:
        """Distinct track types in order of first appearance."""
        return tuple(dict.fromkeys(track.type for track in self._tracks))

    def of_type(self, kind: str) -> TrackCollection:
        """All tracks of a type (case-insensitive)."""
        kind = kind.lower()
        return TrackCollection(track for track in self._tracks if track.type == kind)

    def first(self, kind: str) -> Track | None:
        """First track of a type, or None."""
        kind = kind.lower()
        return next((track for track in self._tracks if track.type == kind), None)

    @property
    def general(self) -> Track | None:
        return self.first("general")

    @property
    def video(self) -> Track | None:
        return self.first("video")

    @property
    def audio(self) -> Track | None:
        return self.first("audio")

    @property
    def text(self) -> Track | None:
        return self.first("text")

    @property
    def menu(self) -> Track | None:
        return self.first("menu")

    def to_list(self) -> list[dict[str, Any]]:
        """JSON-friendly representation."""
        return [
            {
                "type": track.type,
                "typeorder": track.typeorder,
                "attributes": track.to_dict(),
            }
            for track in self._tracks
        ]


# =============================================================================
# Materialization
# =============================================================================


def load_xml_parser(name: str) -> ModuleType:
    """
    Import the configured XML parser module.

    Any module exposing an ElementTree-style fromstring() works, e.g.
    "xml.etree.ElementTree" or "lxml.etree".

    Raises:
        XmlParserError: If the module cannot be imported or has no fromstring().
    """
    try:
        module = importlib.import_module(name)
    except ImportError as e:
        raise XmlParserError(
            f"Your specified XML parser, {name!r}, could not be loaded: {e}",
            parser=name,
        ) from e

    if not callable(getattr(module, "fromstring", None)):
        raise XmlParserError(
            f"Your specified XML parser, {name!r}, has no fromstring()",
            parser=name,
        )

    return module


def _local_name(tag: Any) -> str:
    # lxml gives comments/processing instructions a non-string tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _parse_typeorder(value: str | None) -> int | None:
    if value and value.strip().isdigit():
        return int(value)
    return None


def _build_track(element: Any, track_type: str) -> Track:
    fields: dict[str, Any] = {}

    for child in element:
        tag = _local_name(child.tag)
        if not tag:
            continue

        name = normalize_attribute_name(tag)
        if any(_local_name(grandchild.tag) for grandchild in child):
            value: Any = _build_track(child, name)
        else:
            value = (child.text or "").strip()

        if name in fields:
            logger.debug(f"Attribute {name!r} repeated in {track_type or 'untyped'} track, keeping last value")
        fields[name] = value

    return Track(
        type=track_type,
        fields=fields,
        typeorder=_parse_typeorder(element.get("typeorder")),
    )


def materialize(
    document: str | bytes,
    *,
    settings: MediaInfoSettings | None = None,
) -> TrackCollection:
    """
    Parse a MediaInfo XML document into tracks.

    Args:
        document: XML text or bytes
        settings: Settings naming the XML parser

    Returns:
        TrackCollection in document order.

    Raises:
        XmlParserError: If the configured parser cannot be loaded.
        Parser-specific error (e.g. xml.etree.ElementTree.ParseError) if the
        document is not well-formed.
    """
    settings = settings or get_settings()
    parser = load_xml_parser(settings.xml_parser)

    if isinstance(document, str):
        document = document.encode("utf-8")
    root = parser.fromstring(document.lstrip())

    tracks = [
        _build_track(element, element.get("type", ""))
        for element in root.iter()
        if _local_name(element.tag) == "track"
    ]

    logger.debug(f"Materialized {len(tracks)} tracks")
    return TrackCollection(tracks)
