"""Tests for relationship parsing and indexing."""
import unittest

from office_markdown.parser.rels_parser import RELTYPE_NOTES_SLIDE, Relationships


slide_rels_xml = """
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideLayout" Target="../slideLayouts/slideLayout2.xml"/>
  <Relationship Id="rId2" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/notesSlide" Target="../notesSlides/notesSlide7.xml"/>
  <Relationship Id="rId3" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink" Target="https://example.com" TargetMode="External"/>
</Relationships>
"""

package_rels_xml = """
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="ppt/presentation.xml"/>
</Relationships>
"""


class RelationshipsTest(unittest.TestCase):
    """Validate relationship lookup and target resolution."""

    def setUp(self) -> None:
        self.parts = {
            "_rels/.rels": package_rels_xml.encode("utf-8"),
            "ppt/slides/_rels/slide1.xml.rels": slide_rels_xml.encode("utf-8"),
            "ppt/slides/_rels/slide2.xml.rels": b"<Relationships><broken",
        }

    def test_targets_resolve_relative_to_source_folder(self) -> None:
        relationships = Relationships.from_package(self.parts)

        rel = relationships.for_source("ppt/slides/slide1.xml").get("rId2")
        assert rel is not None
        self.assertEqual(rel.resolved_target, "ppt/notesSlides/notesSlide7.xml")
        self.assertEqual(rel.rel_type, RELTYPE_NOTES_SLIDE)

        root = relationships.for_source("_rels/.rels").get("rId1")
        assert root is not None
        self.assertEqual(root.resolved_target, "ppt/presentation.xml")

    def test_external_targets_are_kept_verbatim(self) -> None:
        relationships = Relationships.from_package(self.parts)
        rel = relationships.for_source("ppt/slides/slide1.xml").get("rId3")
        assert rel is not None
        self.assertTrue(rel.is_external)
        self.assertEqual(rel.resolved_target, "https://example.com")

    def test_first_target_by_type(self) -> None:
        relationships = Relationships.from_package(self.parts)
        self.assertEqual(
            relationships.first_target("ppt/slides/slide1.xml", RELTYPE_NOTES_SLIDE),
            "ppt/notesSlides/notesSlide7.xml",
        )
        self.assertIsNone(relationships.first_target("ppt/slides/slide9.xml", RELTYPE_NOTES_SLIDE))

    def test_malformed_relationship_parts_are_skipped(self) -> None:
        relationships = Relationships.from_package(self.parts)
        self.assertEqual(relationships.for_source("ppt/slides/slide2.xml"), {})
        self.assertEqual(len(relationships.for_source("ppt/slides/slide1.xml")), 3)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
