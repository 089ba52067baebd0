"""Ephemeral association between open views and the gist file they came from."""

from dataclasses import dataclass
from typing import Dict, Optional

from ..editor.workspace import TextView, Workspace


@dataclass(frozen=True)
class GistMetadata:
    """Remote identity of a view opened from a gist."""
    gist_id: str
    file_name: str
    description: str


class SessionMetadataStore:
    """Side table keyed by view id.

    Entries are dropped when their view closes and never persisted.
    """

    def __init__(self, workspace: Workspace):
        self._entries: Dict[str, GistMetadata] = {}
        workspace.on_did_close(self.forget)

    def __len__(self) -> int:
        return len(self._entries)

    def attach(self, view: TextView, metadata: GistMetadata) -> None:
        self._entries[view.view_id] = metadata

    def get(self, view: TextView) -> Optional[GistMetadata]:
        return self._entries.get(view.view_id)

    def forget(self, view: TextView) -> None:
        self._entries.pop(view.view_id, None)

    def forget_gist(self, gist_id: str) -> None:
        """Detach every view that points at a gist."""
        for view_id, metadata in list(self._entries.items()):
            if metadata.gist_id == gist_id:
                del self._entries[view_id]
