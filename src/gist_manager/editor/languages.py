"""Filename extension to language identifier lookup."""

from typing import Dict, Optional

EXTENSION_LANGUAGES: Dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "rb": "ruby",
    "go": "go",
    "rs": "rust",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "cs": "csharp",
    "php": "php",
    "sh": "shellscript",
    "bash": "shellscript",
    "zsh": "shellscript",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "xml": "xml",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "less": "less",
    "md": "markdown",
    "sql": "sql",
    "swift": "swift",
    "kt": "kotlin",
    "vue": "vue",
    "jsx": "javascriptreact",
    "tsx": "typescriptreact",
}


def language_for(filename: str) -> Optional[str]:
    """Language identifier for a filename, or None for plain text.

    The text after the last dot is the extension, compared case-insensitively.
    """
    extension = filename.rsplit(".", 1)[-1].lower()
    if not extension:
        return None
    return EXTENSION_LANGUAGES.get(extension)
