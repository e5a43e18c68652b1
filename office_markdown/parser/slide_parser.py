"""Parse slide and notes parts of a presentation into shapes and tables."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from office_markdown.model.document_model import SlideContent
from office_markdown.model.elements import Paragraph, Shape, Table
from office_markdown.parser.content_builder import ContentBuilder, Frame, ParagraphFrame, RunFrame, TableFrame
from office_markdown.utils.logger import get_logger
from office_markdown.utils.xml_utils import XmlEvent, get_attribute

LOGGER = get_logger(__name__)

TITLE_PLACEHOLDERS = frozenset({"title", "ctrTitle"})
SUBTITLE_PLACEHOLDERS = frozenset({"subTitle"})
DEFAULT_PLACEHOLDER = "body"


@dataclass(slots=True)
class ShapeFrame(Frame):
    paragraphs: List[Paragraph] = field(default_factory=list)
    placeholder_type: str = ""
    has_bullets: bool = False


def _flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in ("1", "true")


class SlideParser(ContentBuilder):
    """Single-pass builder for one slide (or notes slide) part.

    Shapes (``sp``/``pic``) collect text-body paragraphs; tables inside
    graphic frames are collected separately, in encounter order.
    """

    OPEN_HANDLERS = {
        "sp": "_open_shape",
        "pic": "_open_shape",
        "ph": "_set_placeholder",
        "txBody": "_open_marker",
        "p": "_open_paragraph",
        "pPr": "_open_paragraph_properties",
        "r": "_open_run",
        "rPr": "_apply_run_properties",
        "t": "_open_text",
        "tbl": "_open_table",
        "tr": "_open_row",
        "tc": "_open_cell",
    }
    EMPTY_HANDLERS = {
        "ph": "_set_placeholder",
        "rPr": "_apply_run_properties",
        "buChar": "_mark_bullets",
        "buAutoNum": "_mark_bullets",
        "buFont": "_mark_bullets",
    }
    CLOSE_HANDLERS = {
        "sp": "_close_shape",
        "pic": "_close_shape",
        "txBody": "_close_marker",
        "p": "_close_paragraph",
        "pPr": "_close_marker",
        "r": "_close_run",
        "t": "_close_marker",
        "tbl": "_close_table",
        "tr": "_close_row",
        "tc": "_close_cell",
    }

    def __init__(self) -> None:
        super().__init__()
        self._content = SlideContent()

    def parse(self, xml_text: str) -> SlideContent:
        self.feed(xml_text)
        LOGGER.debug(
            "Parsed %d shapes and %d tables from slide part",
            len(self._content.shapes),
            len(self._content.tables),
        )
        return self._content

    # ------------------------------------------------------------------
    # Shapes
    def _open_shape(self, event: XmlEvent) -> None:
        if self._innermost(TableFrame) is None:
            self._push(ShapeFrame(self._depth))

    def _close_shape(self, event: XmlEvent, depth: int) -> None:
        frame = self._pop(ShapeFrame, depth)
        if frame is None or not frame.paragraphs:
            return
        placeholder = frame.placeholder_type
        self._content.shapes.append(
            Shape(
                paragraphs=frame.paragraphs,
                is_title=placeholder in TITLE_PLACEHOLDERS,
                is_subtitle=placeholder in SUBTITLE_PLACEHOLDERS,
                has_bullets=frame.has_bullets,
                placeholder_type=placeholder,
            )
        )

    def _set_placeholder(self, event: XmlEvent) -> None:
        shape = self._innermost(ShapeFrame)
        if shape is not None:
            shape.placeholder_type = get_attribute(event.attributes, "type") or DEFAULT_PLACEHOLDER

    # ------------------------------------------------------------------
    # Paragraphs and runs
    def _open_paragraph(self, event: XmlEvent) -> None:
        if self._inside_marker("txBody"):
            self._push(ParagraphFrame(self._depth))

    def _close_paragraph(self, event: XmlEvent, depth: int) -> None:
        frame = self._pop(ParagraphFrame, depth)
        if frame is None or self._attach_paragraph(frame) or not frame.runs:
            return
        shape = self._innermost(ShapeFrame)
        if shape is not None:
            shape.paragraphs.append(Paragraph(frame.runs))

    def _open_paragraph_properties(self, event: XmlEvent) -> None:
        if isinstance(self._top(), ParagraphFrame):
            self._open_marker(event)

    def _mark_bullets(self, event: XmlEvent) -> None:
        if not self._inside_marker("pPr"):
            return
        shape = self._innermost(ShapeFrame)
        if shape is not None:
            shape.has_bullets = True

    def _apply_run_properties(self, event: XmlEvent) -> None:
        run = self._top()
        if not isinstance(run, RunFrame):
            return
        bold = get_attribute(event.attributes, "b")
        italic = get_attribute(event.attributes, "i")
        if bold is not None:
            run.bold = _flag(bold)
        if italic is not None:
            run.italic = _flag(italic)

    def _paragraph_containers(self) -> tuple:
        return (ShapeFrame,)

    def _emit_table(self, table: Table) -> None:
        self._content.tables.append(table)
