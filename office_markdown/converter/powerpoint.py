"""Presentations (.pptx) to Markdown, one section per slide."""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from office_markdown.converter.base import Converter
from office_markdown.errors import EntryNotFound, PackageError, XmlSyntaxError
from office_markdown.model.document_model import SlideContent
from office_markdown.model.elements import Shape
from office_markdown.parser.package_reader import OfficePackage, notes_part_name
from office_markdown.parser.rels_parser import RELTYPE_NOTES_SLIDE
from office_markdown.parser.slide_parser import SlideParser
from office_markdown.renderer.markdown_renderer import EMPTY_SLIDE, SLIDE_SEPARATOR, MarkdownRenderer
from office_markdown.utils.debug import DebugDumper
from office_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)


def promote_title(shapes: List[Shape]) -> Tuple[Optional[Shape], List[Shape]]:
    """Split off the slide title: only the first shape, and only if title-flagged."""
    if shapes and shapes[0].is_title:
        return shapes[0], shapes[1:]
    return None, list(shapes)


class PowerPointConverter(Converter):
    format_name = "powerpoint"

    def __init__(self, dumper: Optional[DebugDumper] = None) -> None:
        super().__init__(dumper)
        self._renderer = MarkdownRenderer()

    def iter_markdown(self, data: bytes) -> Iterator[str]:
        package = OfficePackage.open(data)
        slide_names = package.slide_part_names()
        LOGGER.debug("Found %d slides", len(slide_names))

        for index, slide_name in enumerate(slide_names):
            content = self._parse_part(slide_name, package.read_entry(slide_name))
            if index > 0:
                yield SLIDE_SEPARATOR
            yield from self._render_slide(index + 1, content)

            notes = self._read_notes(package, slide_name)
            if notes is not None:
                yield self._renderer.render_notes(notes.note_lines())

    def _render_slide(self, slide_number: int, content: SlideContent) -> Iterator[str]:
        title, body_shapes = promote_title(content.shapes)
        yield self._renderer.render_slide_heading(slide_number, title)

        body_shapes = [shape for shape in body_shapes if shape.paragraphs]
        if not body_shapes and not content.tables and title is None:
            yield EMPTY_SLIDE

        for shape in body_shapes:
            yield self._renderer.render_shape(shape)
        for table in content.tables:
            yield f"{self._renderer.render_table(table.rows)}\n"

    def _read_notes(self, package: OfficePackage, slide_name: str) -> Optional[SlideContent]:
        """Best effort: a missing or unreadable notes part means no notes."""
        notes_name = notes_part_name(slide_name)
        if not package.has_entry(notes_name):
            notes_name = package.relationships.first_target(slide_name, RELTYPE_NOTES_SLIDE) or notes_name
        try:
            xml_text = package.read_entry(notes_name)
        except (EntryNotFound, PackageError) as exc:
            LOGGER.debug("No notes for %s: %s", slide_name, exc)
            return None
        return self._parse_part(notes_name, xml_text)

    def _parse_part(self, part_name: str, xml_text: str) -> SlideContent:
        try:
            content = SlideParser().parse(xml_text)
        except XmlSyntaxError as exc:
            raise self._parse_failure(part_name, exc) from exc
        self._debug_dump(part_name, content)
        return content
