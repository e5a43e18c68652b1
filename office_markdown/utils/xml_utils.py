"""Helpers to work with XML namespaces, parsing and forward-only event streams."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, Iterator, List, Mapping, Optional, Tuple
from xml.etree import ElementTree as ET
from xml.parsers import expat

from office_markdown.errors import XmlSyntaxError

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    RELS: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}


def parse_xml(data: bytes) -> ET.ElementTree:
    """Parse a small XML part from raw bytes into a tree."""
    try:
        return ET.ElementTree(ET.fromstring(data))
    except ET.ParseError as exc:
        raise XmlSyntaxError(str(exc)) from exc


class EventType(Enum):
    """Kinds of events produced by :func:`iter_events`."""

    OPEN = "open"
    EMPTY = "empty"
    TEXT = "text"
    CLOSE = "close"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class XmlEvent:
    """A single token of the XML stream.

    ``name`` is the qualified tag name as written in the source (``w:p``);
    ``text`` is only populated for ``TEXT`` events.
    """

    type: EventType
    name: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    text: str = ""

    @property
    def local_name(self) -> str:
        return local_name(self.name)


def local_name(name: str) -> str:
    """Strip a namespace prefix (``w:p`` -> ``p``)."""
    return name.rsplit(":", 1)[-1]


def get_attribute(attributes: Mapping[str, str], name: str) -> Optional[str]:
    """Return an attribute value by local name, ignoring its prefix."""
    if name in attributes:
        return attributes[name]
    for key, value in attributes.items():
        if local_name(key) == name:
            return value
    return None


class _EventCollector:
    """Expat callbacks that queue events.

    A start immediately followed by its end becomes one EMPTY event, and
    character data is held back until the next tag so that text split across
    fed chunks still arrives as a single TEXT event.
    """

    def __init__(self) -> None:
        self.events: Deque[XmlEvent] = deque()
        self._pending: Optional[Tuple[str, Dict[str, str]]] = None
        self._text: List[str] = []

    def start(self, name: str, attributes: Dict[str, str]) -> None:
        self.flush()
        self._pending = (name, attributes)

    def end(self, name: str) -> None:
        if self._pending is not None and self._pending[0] == name:
            self.events.append(XmlEvent(EventType.EMPTY, name, self._pending[1]))
            self._pending = None
            return
        self.flush()
        self.events.append(XmlEvent(EventType.CLOSE, name))

    def data(self, text: str) -> None:
        if not text:
            return
        self._open_pending()
        self._text.append(text)

    def flush(self) -> None:
        self._open_pending()
        if self._text:
            self.events.append(XmlEvent(EventType.TEXT, text="".join(self._text)))
            self._text.clear()

    def _open_pending(self) -> None:
        if self._pending is None:
            return
        name, attributes = self._pending
        self._pending = None
        self.events.append(XmlEvent(EventType.OPEN, name, attributes))


def iter_events(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[XmlEvent]:
    """Yield the events of an XML document without building a tree.

    The input is fed to expat in chunks; namespace prefixes are left intact so
    that callers decide how to treat them. The last event is always ``EOF``.
    """
    collector = _EventCollector()
    parser = expat.ParserCreate()
    parser.buffer_text = True
    parser.StartElementHandler = collector.start
    parser.EndElementHandler = collector.end
    parser.CharacterDataHandler = collector.data

    try:
        for offset in range(0, len(text), chunk_size):
            parser.Parse(text[offset : offset + chunk_size], False)
            while collector.events:
                yield collector.events.popleft()
        parser.Parse("", True)
        collector.flush()
    except expat.ExpatError as exc:
        raise XmlSyntaxError(str(exc)) from exc

    while collector.events:
        yield collector.events.popleft()
    yield XmlEvent(EventType.EOF)
