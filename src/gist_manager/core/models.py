"""
Pydantic models for GitHub gists as returned by the REST API.

Only the fields the commands use are declared; anything else GitHub sends
is ignored.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

UNTITLED_LABEL = "Untitled"


class GistFile(BaseModel):
    """One file of a gist. Its filename is its identity within the gist."""

    model_config = ConfigDict(extra="ignore")

    filename: str
    # List responses omit content; fetch raw_url when it is needed.
    content: Optional[str] = None
    language: Optional[str] = None
    raw_url: Optional[str] = None
    truncated: bool = False

    @property
    def needs_raw_fetch(self) -> bool:
        return self.truncated or self.content is None


class Gist(BaseModel):
    """A hosted collection of named text files."""

    model_config = ConfigDict(extra="ignore")

    id: str
    description: Optional[str] = None
    public: bool = False
    html_url: str = ""
    files: Dict[str, GistFile] = Field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def file_names(self) -> List[str]:
        """Filenames in the order the server returned them."""
        return list(self.files)

    @property
    def label(self) -> str:
        """Display label: description, else first filename, else Untitled."""
        if self.description:
            return self.description
        if self.files:
            return self.file_names[0]
        return UNTITLED_LABEL

    @property
    def visibility(self) -> str:
        return "Public" if self.public else "Secret"

    def summary(self) -> str:
        """Short descriptive text: file count and visibility."""
        return f"{len(self.files)} file(s) - {self.visibility}"
