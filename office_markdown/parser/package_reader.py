"""OOXML package reader: opens the zip container and resolves named parts."""
from __future__ import annotations

import io
import re
import zlib
import zipfile
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from office_markdown.errors import EntryNotFound, PackageError
from office_markdown.parser.rels_parser import Relationships
from office_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)

DOCUMENT_XML_PATH = "word/document.xml"
SLIDE_PART_PREFIX = "ppt/slides/slide"
NOTES_PART_PREFIX = "ppt/notesSlides/notesSlide"

_SLIDE_PART_PATTERN = re.compile(r"^ppt/slides/slide(?P<number>[^/]*)\.xml$")


def slide_number(part_name: str) -> int:
    """Integer suffix of a slide part name; 0 when it cannot be parsed."""
    match = _SLIDE_PART_PATTERN.match(part_name)
    if match is None:
        return 0
    number = match.group("number")
    # plain ASCII digits only; int() would also take signs, spaces and underscores
    if not (number.isascii() and number.isdigit()):
        return 0
    return int(number)


def notes_part_name(slide_part: str) -> str:
    """Conventional notes part name paired with a slide part."""
    return slide_part.replace(SLIDE_PART_PREFIX, NOTES_PART_PREFIX, 1)


@dataclass(slots=True)
class OfficePackage:
    """Decompressed parts of an OOXML zip container, keyed by part name."""

    raw_parts: Mapping[str, bytes]
    _relationships: Optional[Relationships] = field(default=None, init=False, repr=False)

    @classmethod
    def open(cls, data: bytes) -> "OfficePackage":
        """Read every entry of a zip archive held in memory."""
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                parts = {
                    info.filename: archive.read(info)
                    for info in archive.infolist()
                    if not info.is_dir()
                }
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, ValueError) as exc:
            raise PackageError(f"Invalid zip container: {exc}") from exc
        except (zlib.error, NotImplementedError, RuntimeError) as exc:
            # corrupt deflate data, unsupported compression or an encrypted entry
            raise PackageError(f"Unreadable zip entry: {exc}") from exc

        LOGGER.debug("Loaded %d parts from package", len(parts))
        return cls(raw_parts=parts)

    # ------------------------------------------------------------------
    # Public helpers
    def has_entry(self, name: str) -> bool:
        return name in self.raw_parts

    def read_bytes(self, name: str) -> bytes:
        data = self.raw_parts.get(name)
        if data is None:
            raise EntryNotFound(name)
        return data

    def read_entry(self, name: str) -> str:
        """Return a part decoded as UTF-8 text."""
        data = self.read_bytes(name)
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise PackageError(f"Entry {name} is not valid UTF-8: {exc}") from exc

    def slide_part_names(self) -> List[str]:
        """Slide parts ordered by their numeric suffix (slide2 before slide10)."""
        slides = [name for name in self.raw_parts if _SLIDE_PART_PATTERN.match(name)]
        return sorted(slides, key=slide_number)

    @property
    def relationships(self) -> Relationships:
        if self._relationships is None:
            self._relationships = Relationships.from_package(self.raw_parts)
        return self._relationships
