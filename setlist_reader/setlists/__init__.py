"""
Setlist subsystem exports.
"""

from .manager import SetlistManager
from .models import ActiveCursor, DocumentEntry, Setlist, SetlistItem
from .storage import (
    FORMAT_HEADER,
    SetlistFileStorage,
    SetlistFormatError,
    default_save_path,
    parse_setlists,
    serialize_setlists,
)
from .viewer import DocumentViewer, InMemoryDocumentViewer, PyMuPdfViewer

__all__ = [
    "ActiveCursor",
    "DocumentEntry",
    "DocumentViewer",
    "FORMAT_HEADER",
    "InMemoryDocumentViewer",
    "PyMuPdfViewer",
    "Setlist",
    "SetlistFileStorage",
    "SetlistFormatError",
    "SetlistItem",
    "SetlistManager",
    "default_save_path",
    "parse_setlists",
    "serialize_setlists",
]
