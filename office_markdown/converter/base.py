"""Converter contract shared by every supported container format."""
from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import BinaryIO, ClassVar, Iterator, Optional

from office_markdown.errors import ConversionError, EntryNotFound, PackageError, XmlSyntaxError
from office_markdown.utils.debug import DebugDumper
from office_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)


class Converter(ABC):
    """Turns the raw bytes of one input into UTF-8 Markdown.

    Output is written to ``destination`` fragment by fragment, so a failing
    conversion may leave a partial prefix behind. Package, entry and XML
    failures surface as a single :class:`ConversionError`; ``OSError`` from
    the destination propagates unchanged.
    """

    format_name: ClassVar[str] = ""

    def __init__(self, dumper: Optional[DebugDumper] = None) -> None:
        self._dumper = dumper

    def convert(self, data: bytes, destination: BinaryIO) -> None:
        try:
            for fragment in self.iter_markdown(data):
                destination.write(fragment.encode("utf-8"))
        except (PackageError, EntryNotFound, XmlSyntaxError) as exc:
            raise ConversionError(self.format_name, str(exc)) from exc

    def convert_to_string(self, data: bytes) -> str:
        buffer = io.BytesIO()
        self.convert(data, buffer)
        return buffer.getvalue().decode("utf-8")

    @abstractmethod
    def iter_markdown(self, data: bytes) -> Iterator[str]:
        """Yield Markdown fragments in output order."""

    def _debug_dump(self, part_name: str, model: object) -> None:
        if self._dumper is not None:
            self._dumper.dump(part_name, model)

    @staticmethod
    def _parse_failure(part_name: str, exc: XmlSyntaxError) -> XmlSyntaxError:
        return XmlSyntaxError(f"Failed to parse {part_name}: {exc}")
