"""Word-processing documents (.docx) to Markdown."""
from __future__ import annotations

from typing import Iterator

from office_markdown.converter.base import Converter
from office_markdown.errors import XmlSyntaxError
from office_markdown.parser.document_parser import DocumentParser
from office_markdown.parser.package_reader import DOCUMENT_XML_PATH, OfficePackage
from office_markdown.renderer.markdown_renderer import MarkdownRenderer
from office_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)


class WordConverter(Converter):
    format_name = "word"

    def iter_markdown(self, data: bytes) -> Iterator[str]:
        package = OfficePackage.open(data)
        xml_text = package.read_entry(DOCUMENT_XML_PATH)
        try:
            tree = DocumentParser().parse(xml_text)
        except XmlSyntaxError as exc:
            raise self._parse_failure(DOCUMENT_XML_PATH, exc) from exc
        self._debug_dump(DOCUMENT_XML_PATH, tree)

        LOGGER.debug("Rendering %d blocks", len(tree.blocks))
        yield from MarkdownRenderer().iter_fragments(tree)
