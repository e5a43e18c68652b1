"""Utilities for reading Open Packaging Convention relationship parts."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Mapping, Optional, Tuple
from xml.etree import ElementTree as ET

from office_markdown.errors import XmlSyntaxError
from office_markdown.utils.logger import get_logger
from office_markdown.utils.xml_utils import Namespaces, parse_xml

LOGGER = get_logger(__name__)

OFFICE_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

RELTYPE_NOTES_SLIDE = f"{OFFICE_REL_NS}/notesSlide"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    source_part: str
    r_id: str
    target: str
    rel_type: str
    is_external: bool = False
    resolved_target: Optional[str] = None


class Relationships:
    """Aggregated relationship mappings for an OOXML package."""

    def __init__(self, relationships: Dict[str, Dict[str, Relationship]]) -> None:
        self._by_source = relationships

    @classmethod
    def from_package(cls, parts: Mapping[str, bytes]) -> "Relationships":
        """Collect relationships from all .rels parts; unreadable ones are skipped."""
        by_source: Dict[str, Dict[str, Relationship]] = {}
        for name, payload in parts.items():
            if not name.endswith(".rels"):
                continue
            source, base_dir = cls._source_and_base_from_rel_part(name)
            try:
                tree = parse_xml(payload)
            except XmlSyntaxError as exc:
                LOGGER.debug("Skipping malformed relationship part %s: %s", name, exc)
                continue
            parsed = cls._parse_relationship_part(source, base_dir, tree)
            if parsed:
                by_source[source] = parsed
        return cls(by_source)

    def for_source(self, part_name: str) -> Dict[str, Relationship]:
        """Return all relationships for a given source part."""
        source = self._normalize_source(part_name)
        return dict(self._by_source.get(source, {}))

    def first_target(self, part_name: str, rel_type: str) -> Optional[str]:
        """Resolved target of the first internal relationship of a type."""
        for rel in self.for_source(part_name).values():
            if rel.rel_type == rel_type and not rel.is_external and rel.resolved_target:
                return rel.resolved_target
        return None

    @classmethod
    def _parse_relationship_part(
        cls, source_part: str, base_dir: PurePosixPath, tree: ET.ElementTree
    ) -> Dict[str, Relationship]:
        result: Dict[str, Relationship] = {}
        for rel_el in tree.findall(".//rel:Relationship", Namespaces.RELS):
            r_id = rel_el.attrib.get("Id")
            if not r_id:
                continue
            target = rel_el.attrib.get("Target", "")
            is_external = rel_el.attrib.get("TargetMode") == "External"
            result[r_id] = Relationship(
                source_part=source_part,
                r_id=r_id,
                target=target,
                rel_type=rel_el.attrib.get("Type", ""),
                is_external=is_external,
                resolved_target=cls._resolve_target_path(base_dir, target, is_external),
            )
        return result

    @staticmethod
    def _source_and_base_from_rel_part(rel_part: str) -> Tuple[str, PurePosixPath]:
        rel_path = PurePosixPath(rel_part)
        if rel_part == "_rels/.rels":
            return "", PurePosixPath("")
        if "/_rels/" in rel_part:
            folder, suffix = rel_part.split("/_rels/", 1)
            return f"{folder}/{suffix[:-5]}", PurePosixPath(folder)
        if rel_part.startswith("_rels/"):
            return rel_part[len("_rels/") : -5], PurePosixPath("")
        return rel_part[:-5], rel_path.parent

    @staticmethod
    def _resolve_target_path(base_dir: PurePosixPath, target: str, is_external: bool) -> Optional[str]:
        if not target:
            return None
        if is_external:
            return target
        if target.startswith("/"):
            return target.lstrip("/")
        return posixpath.normpath(base_dir.joinpath(target).as_posix())

    @classmethod
    def _normalize_source(cls, part_name: str) -> str:
        if part_name.endswith(".rels"):
            source, _ = cls._source_and_base_from_rel_part(part_name)
            return source
        return part_name
