"""Per-part content trees handed from the builders to the renderer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from office_markdown.model.elements import BlockElement, Shape, Table


@dataclass(slots=True)
class ContentTree:
    """Ordered top-level blocks of one word-processing part."""

    blocks: List[BlockElement] = field(default_factory=list)


@dataclass(slots=True)
class SlideContent:
    """Shapes and tables of one slide (or notes) part, in encounter order."""

    shapes: List[Shape] = field(default_factory=list)
    tables: List[Table] = field(default_factory=list)

    def note_lines(self) -> List[str]:
        """Non-empty paragraph lines, minus bare slide-number placeholders."""
        lines: List[str] = []
        for shape in self.shapes:
            for paragraph in shape.paragraphs:
                text = paragraph.markdown.strip()
                if not text or _is_ascii_digits(text):
                    continue
                lines.append(text)
        return lines


def _is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()
