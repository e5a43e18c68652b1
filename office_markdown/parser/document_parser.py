"""Parse word/document.xml into a content tree of Markdown-level blocks."""
from __future__ import annotations

import re
from typing import Optional

from office_markdown.model.document_model import ContentTree
from office_markdown.model.elements import BlockElement, BlockQuote, Heading, ListItem, Table, TextBlock
from office_markdown.parser.content_builder import ContentBuilder, ParagraphFrame, RunFrame, is_enabled
from office_markdown.utils.logger import get_logger
from office_markdown.utils.xml_utils import XmlEvent, get_attribute

LOGGER = get_logger(__name__)

_HEADING_STYLE_PATTERN = re.compile(r"^(?:heading|titre)\s*(\d+)$", re.IGNORECASE)
BLOCKQUOTE_STYLES = frozenset({"quote", "intensequote", "blockquote"})


def heading_level(style_name: Optional[str]) -> Optional[int]:
    """Level of a ``HeadingN`` / ``TitreN`` style, or None for other styles."""
    if not style_name:
        return None
    match = _HEADING_STYLE_PATTERN.match(style_name.strip())
    if match is None:
        return None
    level = int(match.group(1))
    if 1 <= level <= 6:
        return level
    return None


def is_blockquote_style(style_name: Optional[str]) -> bool:
    return bool(style_name) and style_name.strip().lower() in BLOCKQUOTE_STYLES


class DocumentParser(ContentBuilder):
    """Single-pass builder for the main body of a word-processing document.

    Use one instance per part: ``DocumentParser().parse(xml_text)``.
    """

    OPEN_HANDLERS = {
        "p": "_open_paragraph",
        "r": "_open_run",
        "t": "_open_text",
        "numPr": "_mark_list_item",
        "tbl": "_open_table",
        "tr": "_open_row",
        "tc": "_open_cell",
    }
    EMPTY_HANDLERS = {
        "pStyle": "_set_style",
        "b": "_set_bold",
        "i": "_set_italic",
        "numPr": "_mark_list_item",
        "ilvl": "_mark_list_item",
    }
    CLOSE_HANDLERS = {
        "p": "_close_paragraph",
        "r": "_close_run",
        "t": "_close_marker",
        "tbl": "_close_table",
        "tr": "_close_row",
        "tc": "_close_cell",
    }

    def __init__(self) -> None:
        super().__init__()
        self._tree = ContentTree()

    def parse(self, xml_text: str) -> ContentTree:
        """Parse the document body into high-level block elements."""
        self.feed(xml_text)
        LOGGER.debug("Parsed %d blocks from document body", len(self._tree.blocks))
        return self._tree

    # ------------------------------------------------------------------
    # Paragraph state
    def _open_paragraph(self, event: XmlEvent) -> None:
        self._push(ParagraphFrame(self._depth))

    def _close_paragraph(self, event: XmlEvent, depth: int) -> None:
        frame = self._pop(ParagraphFrame, depth)
        if frame is None or self._attach_paragraph(frame):
            return
        if not frame.runs:
            return
        self._tree.blocks.append(self._classify(frame))

    def _set_style(self, event: XmlEvent) -> None:
        paragraph = self._top()
        if isinstance(paragraph, ParagraphFrame):
            paragraph.style = get_attribute(event.attributes, "val")

    def _mark_list_item(self, event: XmlEvent) -> None:
        paragraph = self._top()
        if isinstance(paragraph, ParagraphFrame):
            paragraph.is_list_item = True

    # ------------------------------------------------------------------
    # Run formatting
    def _set_bold(self, event: XmlEvent) -> None:
        run = self._top()
        if isinstance(run, RunFrame):
            run.bold = is_enabled(get_attribute(event.attributes, "val"))

    def _set_italic(self, event: XmlEvent) -> None:
        run = self._top()
        if isinstance(run, RunFrame):
            run.italic = is_enabled(get_attribute(event.attributes, "val"))

    def _emit_table(self, table: Table) -> None:
        self._tree.blocks.append(table)

    @staticmethod
    def _classify(frame: ParagraphFrame) -> BlockElement:
        text = "".join(run.markdown for run in frame.runs)
        level = heading_level(frame.style)
        if level is not None:
            return Heading(level, text)
        if is_blockquote_style(frame.style):
            return BlockQuote(text)
        if frame.is_list_item:
            return ListItem(text)
        return TextBlock(text)
