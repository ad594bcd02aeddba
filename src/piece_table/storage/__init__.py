"""Storage collaborators: loading original content and persisting text."""

from .sources import FileSource, StringSource, TextSource
from .writer import write_text_atomic

__all__ = [
    "FileSource",
    "StringSource",
    "TextSource",
    "write_text_atomic",
]
