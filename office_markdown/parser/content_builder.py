"""Stack-based state machine shared by the word-processing and slide builders."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Mapping, Optional, Type, TypeVar

from office_markdown.model.elements import Paragraph, Table, TextRun
from office_markdown.utils.logger import get_logger
from office_markdown.utils.xml_utils import EventType, XmlEvent, iter_events

LOGGER = get_logger(__name__)

# Subtrees that only carry an alternate rendition of content seen elsewhere.
SKIPPED_SUBTREES = frozenset({"Fallback"})

FALSE_VALUES = frozenset({"0", "false", "off"})


@dataclass(slots=True)
class Frame:
    """Base frame; ``depth`` is the element depth at which it was opened."""

    depth: int


@dataclass(slots=True)
class MarkerFrame(Frame):
    """Records that the builder is inside a named element (``t``, ``pPr``...)."""

    name: str = ""


@dataclass(slots=True)
class ParagraphFrame(Frame):
    style: Optional[str] = None
    is_list_item: bool = False
    runs: List[TextRun] = field(default_factory=list)


@dataclass(slots=True)
class RunFrame(Frame):
    bold: bool = False
    italic: bool = False
    parts: List[str] = field(default_factory=list)


@dataclass(slots=True)
class TableFrame(Frame):
    rows: List[List[str]] = field(default_factory=list)


@dataclass(slots=True)
class RowFrame(Frame):
    cells: List[str] = field(default_factory=list)


@dataclass(slots=True)
class CellFrame(Frame):
    parts: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.parts).strip()


FrameT = TypeVar("FrameT", bound=Frame)


def is_enabled(value: Optional[str]) -> bool:
    """Interpret an OOXML on/off attribute; a missing value means on."""
    if value is None:
        return True
    return value.strip().lower() not in FALSE_VALUES


class ContentBuilder:
    """Consumes the events of one part and accumulates its content.

    Subclasses declare which local tag names they react to in the
    ``OPEN_HANDLERS``, ``EMPTY_HANDLERS`` and ``CLOSE_HANDLERS`` tables
    (local name -> method name). Anything not listed is ignored. A frame is
    popped only by the close event at the depth that opened it, so pushes
    guarded by context never unbalance the stack.
    """

    OPEN_HANDLERS: ClassVar[Mapping[str, str]] = {}
    EMPTY_HANDLERS: ClassVar[Mapping[str, str]] = {}
    CLOSE_HANDLERS: ClassVar[Mapping[str, str]] = {}

    def __init__(self) -> None:
        self._stack: List[Frame] = []
        self._depth = 0
        self._skip_depth: Optional[int] = None

    def feed(self, xml_text: str) -> None:
        """Run the state machine over a whole part."""
        for event in iter_events(xml_text):
            if event.type is EventType.EOF:
                break
            self._dispatch(event)
        if self._stack:
            LOGGER.debug("Discarding %d unclosed frames at end of part", len(self._stack))
            self._stack.clear()

    # ------------------------------------------------------------------
    # Dispatch
    def _dispatch(self, event: XmlEvent) -> None:
        if event.type is EventType.OPEN:
            self._depth += 1
            if self._skip_depth is not None:
                return
            name = event.local_name
            if name in SKIPPED_SUBTREES:
                self._skip_depth = self._depth
                return
            self._call(self.OPEN_HANDLERS, name, event)
        elif event.type is EventType.CLOSE:
            depth = self._depth
            self._depth -= 1
            if self._skip_depth is not None:
                if depth == self._skip_depth:
                    self._skip_depth = None
                return
            self._call(self.CLOSE_HANDLERS, event.local_name, event, depth)
        elif self._skip_depth is not None:
            return
        elif event.type is EventType.EMPTY:
            self._call(self.EMPTY_HANDLERS, event.local_name, event)
        elif event.type is EventType.TEXT:
            self._on_text(event.text)

    def _call(self, table: Mapping[str, str], name: str, event: XmlEvent, depth: Optional[int] = None) -> None:
        method_name = table.get(name)
        if method_name is None:
            return
        handler = getattr(self, method_name)
        if depth is None:
            handler(event)
        else:
            handler(event, depth)

    def _on_text(self, text: str) -> None:
        """Text only counts inside a ``t`` element that belongs to a run."""
        top = self._top()
        if not isinstance(top, MarkerFrame) or top.name != "t":
            return
        run = self._innermost(RunFrame)
        if run is not None:
            run.parts.append(text)

    # ------------------------------------------------------------------
    # Stack helpers
    def _push(self, frame: Frame) -> None:
        self._stack.append(frame)

    def _pop(self, frame_type: Type[FrameT], depth: int) -> Optional[FrameT]:
        """Pop the top frame if it has the given type and was opened at ``depth``."""
        if not self._stack:
            return None
        top = self._stack[-1]
        if not isinstance(top, frame_type) or top.depth != depth:
            return None
        self._stack.pop()
        return top

    def _top(self) -> Optional[Frame]:
        return self._stack[-1] if self._stack else None

    def _innermost(self, *frame_types: Type[Frame]) -> Optional[Frame]:
        for frame in reversed(self._stack):
            if isinstance(frame, frame_types):
                return frame
        return None

    def _inside_marker(self, name: str) -> bool:
        return any(isinstance(frame, MarkerFrame) and frame.name == name for frame in self._stack)

    # ------------------------------------------------------------------
    # Handlers shared by both formats
    def _open_marker(self, event: XmlEvent) -> None:
        self._push(MarkerFrame(self._depth, event.local_name))

    def _close_marker(self, event: XmlEvent, depth: int) -> None:
        self._pop(MarkerFrame, depth)

    def _open_text(self, event: XmlEvent) -> None:
        if self._innermost(RunFrame) is not None:
            self._open_marker(event)

    def _open_run(self, event: XmlEvent) -> None:
        if self._innermost(ParagraphFrame) is not None:
            self._push(RunFrame(self._depth))

    def _close_run(self, event: XmlEvent, depth: int) -> None:
        run = self._pop(RunFrame, depth)
        if run is None:
            return
        text = "".join(run.parts)
        if not text:
            return
        paragraph = self._innermost(ParagraphFrame)
        if paragraph is not None:
            paragraph.runs.append(TextRun(text=text, bold=run.bold, italic=run.italic))

    def _open_table(self, event: XmlEvent) -> None:
        self._push(TableFrame(self._depth))

    def _close_table(self, event: XmlEvent, depth: int) -> None:
        frame = self._pop(TableFrame, depth)
        if frame is None:
            return
        table = Table(rows=frame.rows)
        if table.is_empty():
            LOGGER.debug("Dropping table without cells")
            return
        cell = self._innermost(CellFrame)
        if cell is not None:
            # Nested table: flatten it into the enclosing cell.
            cell.parts.extend(value for row in table.rows for value in row)
            return
        self._emit_table(table)

    def _open_row(self, event: XmlEvent) -> None:
        if isinstance(self._top(), TableFrame):
            self._push(RowFrame(self._depth))

    def _close_row(self, event: XmlEvent, depth: int) -> None:
        row = self._pop(RowFrame, depth)
        if row is None:
            return
        table = self._innermost(TableFrame)
        if table is not None:
            table.rows.append(row.cells)

    def _open_cell(self, event: XmlEvent) -> None:
        if isinstance(self._top(), RowFrame):
            self._push(CellFrame(self._depth))

    def _close_cell(self, event: XmlEvent, depth: int) -> None:
        cell = self._pop(CellFrame, depth)
        if cell is None:
            return
        row = self._innermost(RowFrame)
        if row is not None:
            row.cells.append(cell.text)

    def _attach_paragraph(self, frame: ParagraphFrame) -> bool:
        """Route a closed paragraph into an enclosing cell; True when consumed."""
        container = self._innermost(CellFrame, *self._paragraph_containers())
        if isinstance(container, CellFrame):
            container.parts.append(Paragraph(frame.runs).plain_text)
            return True
        return False

    def _paragraph_containers(self) -> tuple:
        """Frame types that own paragraphs besides table cells."""
        return ()

    def _emit_table(self, table: Table) -> None:
        raise NotImplementedError
