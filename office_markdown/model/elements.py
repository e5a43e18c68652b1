"""In-memory representation of content extracted from office parts."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6


def clamp_heading_level(level: int) -> int:
    """Force a requested heading depth into the Markdown range 1..6."""
    return max(MIN_HEADING_LEVEL, min(level, MAX_HEADING_LEVEL))


def format_run_text(text: str, bold: bool, italic: bool) -> str:
    """Wrap run text in the emphasis markers matching its formatting."""
    if not text:
        return ""
    if bold and italic:
        return f"***{text}***"
    if bold:
        return f"**{text}**"
    if italic:
        return f"*{text}*"
    return text


@dataclass(slots=True)
class TextRun:
    """Contiguous text sharing one bold/italic combination."""

    text: str
    bold: bool = False
    italic: bool = False

    @property
    def markdown(self) -> str:
        return format_run_text(self.text, self.bold, self.italic)


@dataclass(slots=True)
class Paragraph:
    """Ordered runs of one source paragraph."""

    runs: List[TextRun] = field(default_factory=list)

    @property
    def plain_text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def markdown(self) -> str:
        return "".join(run.markdown for run in self.runs)

    def is_empty(self) -> bool:
        return not self.runs


@dataclass(slots=True)
class Heading:
    """Heading block; the level is clamped on construction."""

    level: int
    text: str

    def __post_init__(self) -> None:
        self.level = clamp_heading_level(self.level)


@dataclass(slots=True)
class TextBlock:
    """Plain body paragraph."""

    text: str


@dataclass(slots=True)
class ListItem:
    text: str


@dataclass(slots=True)
class BlockQuote:
    text: str


@dataclass(slots=True)
class Table:
    """Rows of cell strings in source order; rows may be jagged."""

    rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def is_empty(self) -> bool:
        return self.column_count == 0


@dataclass(slots=True)
class Shape:
    """Text-bearing presentation shape."""

    paragraphs: List[Paragraph] = field(default_factory=list)
    is_title: bool = False
    is_subtitle: bool = False
    has_bullets: bool = False
    placeholder_type: str = ""

    @property
    def inline_text(self) -> str:
        """Paragraphs joined with spaces, as used for headings."""
        return " ".join(paragraph.markdown for paragraph in self.paragraphs)


BlockElement = Heading | TextBlock | ListItem | BlockQuote | Table | Shape
