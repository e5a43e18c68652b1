"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from office_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)


class DebugDumper:
    """Writes the content model of each parsed part onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, part_name: str, model: Any) -> Path:
        """Persist one part's content model as JSON and return the file written."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / f"{part_name.replace('/', '_')}.json"
        payload = self._serialize(model)
        target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        LOGGER.debug("Dumped content model of %s to %s", part_name, target)
        return target

    def _serialize(self, value: Any) -> Any:
        # asdict() loses the block type, which is what matters when debugging.
        if is_dataclass(value):
            data = {"type": type(value).__name__}
            data.update({f.name: self._serialize(getattr(value, f.name)) for f in fields(value)})
            return data
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
