"""Render content trees into Markdown text."""
from __future__ import annotations

from typing import Iterator, Optional, Sequence

from office_markdown.model.document_model import ContentTree
from office_markdown.model.elements import (
    BlockElement,
    BlockQuote,
    Heading,
    ListItem,
    Shape,
    Table,
    TextBlock,
)
from office_markdown.renderer.utils import escape_cell, heading_prefix, pad_row

SLIDE_SEPARATOR = "\n---\n\n"
EMPTY_SLIDE = "*Empty slide*\n"


class MarkdownRenderer:
    """Pure functions from content model pieces to Markdown fragments.

    Every fragment ends with a newline. Blocks of a :class:`ContentTree` are
    separated by one blank line, except consecutive list items.
    """

    def render(self, tree: ContentTree) -> str:
        return "".join(self.iter_fragments(tree))

    def iter_fragments(self, tree: ContentTree) -> Iterator[str]:
        previous: Optional[BlockElement] = None
        for block in tree.blocks:
            text = self.render_block(block)
            if not text:
                continue
            if previous is not None and not (isinstance(previous, ListItem) and isinstance(block, ListItem)):
                yield "\n"
            yield text
            previous = block

    def render_block(self, block: BlockElement) -> str:
        if isinstance(block, Heading):
            return self.render_heading(block.level, block.text)
        if isinstance(block, TextBlock):
            return f"{block.text}\n" if block.text else ""
        if isinstance(block, ListItem):
            return f"- {block.text}\n"
        if isinstance(block, BlockQuote):
            return f"> {block.text}\n"
        if isinstance(block, Table):
            return self.render_table(block.rows)
        if isinstance(block, Shape):
            return self.render_shape(block, promoted=block.is_title)
        raise TypeError(f"Unsupported block type: {type(block).__name__}")

    def render_heading(self, level: int, text: str) -> str:
        return f"{heading_prefix(level)} {text}\n"

    def render_table(self, rows: Sequence[Sequence[str]]) -> str:
        """Pipe table; the first row is the header and short rows are padded."""
        column_count = max((len(row) for row in rows), default=0)
        if column_count == 0:
            return ""
        lines = [self._table_row(rows[0], column_count), "|" + "---|" * column_count]
        lines.extend(self._table_row(row, column_count) for row in rows[1:])
        return "\n".join(lines) + "\n"

    def render_shape(self, shape: Shape, promoted: bool = False) -> str:
        """Markdown for one slide shape.

        ``promoted`` renders the shape as the level-1 title; a title shape
        that was not promoted falls through to ordinary paragraphs.
        """
        if promoted:
            return self.render_heading(1, shape.inline_text)
        if shape.is_subtitle:
            text = shape.inline_text
            return f"{self.render_heading(2, text)}\n" if text else ""

        parts = []
        for paragraph in shape.paragraphs:
            text = paragraph.markdown.strip()
            if not text:
                continue
            parts.append(f"- {text}\n" if shape.has_bullets else f"{text}\n\n")
        if shape.has_bullets:
            parts.append("\n")
        return "".join(parts)

    def render_slide_heading(self, slide_number: int, title: Optional[Shape] = None) -> str:
        if title is not None:
            return f"{self.render_shape(title, promoted=True)}\n"
        return f"{self.render_heading(1, f'Slide {slide_number}')}\n"

    def render_notes(self, lines: Sequence[str]) -> str:
        if not lines:
            return ""
        joined = "\n".join(lines)
        return f"> **Notes**: {joined}\n\n"

    @staticmethod
    def _table_row(row: Sequence[str], column_count: int) -> str:
        return "|" + "".join(f" {escape_cell(cell)} |" for cell in pad_row(row, column_count))
