"""
In-process text views.

A TextView is an open text buffer with an optional backing path, an
optional line selection and a language hint. The Workspace tracks the open
views, which one is active, and notifies listeners when a view closes.
"""

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Callable, Dict, List, Optional

from .languages import language_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineSelection:
    """Inclusive, 1-based line range."""
    start_line: int
    end_line: int

    def __post_init__(self):
        if self.start_line < 1 or self.end_line < self.start_line:
            raise ValueError(f"Invalid line selection {self.start_line}:{self.end_line}")

    @classmethod
    def parse(cls, value: str) -> "LineSelection":
        """Parse "A:B" or a single line number "A"."""
        start, _, end = value.partition(":")
        try:
            start_line = int(start)
            end_line = int(end) if end else start_line
        except ValueError:
            raise ValueError(f"Invalid line selection '{value}', expected START:END") from None
        return cls(start_line, end_line)


@dataclass
class TextView:
    """An open text buffer."""
    content: str
    language: Optional[str] = None
    path: Optional[Path] = None
    selection: Optional[LineSelection] = None
    view_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    @property
    def is_untitled(self) -> bool:
        return self.path is None

    @property
    def title(self) -> str:
        return self.path.name if self.path else f"Untitled-{self.view_id}"

    def get_text(self, selection: Optional[LineSelection] = None) -> str:
        """Full text, or the text of the given line range."""
        if selection is None:
            return self.content
        lines = self.content.splitlines(keepends=True)
        return "".join(lines[selection.start_line - 1:selection.end_line])

    def selected_text(self) -> Optional[str]:
        """Text under the selection; None when nothing is selected."""
        if self.selection is None:
            return None
        return self.get_text(self.selection) or None

    def text_for_upload(self) -> str:
        """Selection text when a non-empty selection exists, else everything."""
        selected = self.selected_text()
        return selected if selected is not None else self.content


def file_name_of(path: str) -> str:
    """Last path segment, accepting both / and \\ as separators."""
    return PurePath(path.replace("\\", "/")).name


CloseListener = Callable[[TextView], None]


class Workspace:
    """Open views plus the notion of an active one."""

    def __init__(self):
        self._views: Dict[str, TextView] = {}
        self._active_id: Optional[str] = None
        self._close_listeners: List[CloseListener] = []

    @property
    def views(self) -> List[TextView]:
        return list(self._views.values())

    @property
    def active_view(self) -> Optional[TextView]:
        if self._active_id is None:
            return None
        return self._views.get(self._active_id)

    def open_text_document(
        self,
        content: str,
        language: Optional[str] = None,
        path: Optional[Path] = None,
    ) -> TextView:
        """Open a new view. Without a path the view is untitled."""
        view = TextView(content=content, language=language, path=path)
        self._views[view.view_id] = view
        logger.debug(f"Opened view {view.view_id} ({view.title})")
        return view

    def open_file(self, path: Path) -> TextView:
        """Open a file from disk as a view and make it active."""
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        view = self.open_text_document(content, language_for(path.name), path=path)
        self.show(view)
        return view

    def show(self, view: TextView) -> None:
        if view.view_id not in self._views:
            raise KeyError(f"View {view.view_id} is not open")
        self._active_id = view.view_id

    def close(self, view: TextView) -> None:
        """Close a view and notify listeners."""
        if self._views.pop(view.view_id, None) is None:
            return
        if self._active_id == view.view_id:
            remaining = list(self._views)
            self._active_id = remaining[-1] if remaining else None
        for listener in list(self._close_listeners):
            listener(view)
        logger.debug(f"Closed view {view.view_id}")

    def on_did_close(self, listener: CloseListener) -> None:
        self._close_listeners.append(listener)
