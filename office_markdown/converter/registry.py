"""Lookup of converters by format name."""
from __future__ import annotations

from typing import Dict, List, Optional, Type

from office_markdown.converter.base import Converter
from office_markdown.converter.powerpoint import PowerPointConverter
from office_markdown.converter.word import WordConverter
from office_markdown.errors import UnsupportedFormatError
from office_markdown.utils.debug import DebugDumper

CONVERTERS: Dict[str, Type[Converter]] = {
    WordConverter.format_name: WordConverter,
    PowerPointConverter.format_name: PowerPointConverter,
}


def available_formats() -> List[str]:
    return sorted(CONVERTERS)


def get_converter(format_name: str, dumper: Optional[DebugDumper] = None) -> Converter:
    """Instantiate the converter registered for ``format_name``."""
    converter_cls = CONVERTERS.get(format_name.strip().lower())
    if converter_cls is None:
        raise UnsupportedFormatError(
            f"Unsupported format: {format_name} (expected one of {', '.join(available_formats())})"
        )
    return converter_cls(dumper)


def convert_bytes(data: bytes, format_name: str) -> str:
    """Convert an in-memory document and return the Markdown text."""
    return get_converter(format_name).convert_to_string(data)
