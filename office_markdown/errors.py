"""Exception hierarchy shared by the package reader, builders and converters."""
from __future__ import annotations


class OfficeMarkdownError(Exception):
    """Base class for every failure raised by the library."""


class PackageError(OfficeMarkdownError):
    """The input is not a readable zip container."""


class EntryNotFound(OfficeMarkdownError, KeyError):
    """A required part is missing from an otherwise valid package."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Entry not found: {self.name}"


class XmlSyntaxError(OfficeMarkdownError):
    """The XML event source reported malformed markup."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConversionError(OfficeMarkdownError):
    """Terminal failure of one conversion, tagged with the converter's format."""

    def __init__(self, format_name: str, message: str) -> None:
        super().__init__(format_name, message)
        self.format_name = format_name
        self.message = message

    def __str__(self) -> str:
        return f"Conversion error ({self.format_name}): {self.message}"


class UnsupportedFormatError(OfficeMarkdownError):
    """No converter is registered for the requested format."""
