from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class DocumentViewer(Protocol):
    """
    Navigation primitives the setlist manager needs from a document viewer.
    Pages are 0-based.
    """

    def load(self, path: str) -> bool:
        ...

    def close(self) -> None:
        ...

    def is_loaded(self) -> bool:
        ...

    def page_count(self) -> int:
        ...

    def current_page(self) -> int:
        ...

    def next_page(self) -> None:
        ...

    def previous_page(self) -> None:
        ...

    def go_to_page(self, page: int) -> None:
        ...

    def can_go_next(self) -> bool:
        ...

    def can_go_previous(self) -> bool:
        ...


class _PagedViewer:
    """
    Shared page bookkeeping. Subclasses implement `_open` and return the
    page count of the opened document, or None when it cannot be opened.
    """

    def __init__(self):
        self._loaded_path: Optional[str] = None
        self._page_count = 0
        self._current_page = 0

    def _open(self, path: str) -> Optional[int]:
        raise NotImplementedError

    def load(self, path: str) -> bool:
        self.close()
        count = self._open(path)
        if count is None:
            return False
        self._loaded_path = path
        self._page_count = count
        self._current_page = 0
        return True

    def close(self) -> None:
        self._loaded_path = None
        self._page_count = 0
        self._current_page = 0

    @property
    def loaded_path(self) -> Optional[str]:
        return self._loaded_path

    def is_loaded(self) -> bool:
        return self._loaded_path is not None

    def page_count(self) -> int:
        return self._page_count

    def current_page(self) -> int:
        return self._current_page

    def can_go_next(self) -> bool:
        return self._current_page < self._page_count - 1

    def can_go_previous(self) -> bool:
        return self._current_page > 0

    def next_page(self) -> None:
        if self.can_go_next():
            self._current_page += 1

    def previous_page(self) -> None:
        if self.can_go_previous():
            self._current_page -= 1

    def go_to_page(self, page: int) -> None:
        if 0 <= page < self._page_count:
            self._current_page = page


class InMemoryDocumentViewer(_PagedViewer):
    """
    Viewer over a fixed path -> page count table, for local runs and tests.
    Loading a path that is not in the table fails.
    """

    def __init__(self, page_counts: Optional[Dict[str, int]] = None):
        super().__init__()
        self.page_counts: Dict[str, int] = dict(page_counts or {})
        self.load_calls: list = []

    def _open(self, path: str) -> Optional[int]:
        self.load_calls.append(path)
        return self.page_counts.get(path)


class PyMuPdfViewer(_PagedViewer):
    """
    PDF viewer state backed by PyMuPDF. Only page geometry and zoom are
    tracked here; drawing pages is left to whatever UI hosts the viewer.
    """

    MIN_ZOOM = 0.1
    MAX_ZOOM = 5.0

    def __init__(self):
        super().__init__()
        self._document = None
        self.filename = ""
        self.zoom = 1.0

    def _open(self, path: str) -> Optional[int]:
        try:
            import fitz  # PyMuPDF
        except ImportError as exc:  # pragma: no cover - dependency guard
            raise RuntimeError("PyMuPDF is required for PDF viewing. Please install 'pymupdf'.") from exc

        source = Path(path)
        # Read into memory first so odd path encodings never reach MuPDF.
        try:
            data = source.read_bytes()
        except OSError as exc:
            logger.warning("Failed to open file %s: %s", path, exc)
            return None

        try:
            document = fitz.open(stream=data, filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            logger.warning("Failed to load PDF %s: %s", path, exc)
            return None

        self._document = document
        self.filename = source.name
        self.zoom = 1.0
        return document.page_count

    def close(self) -> None:
        if self._document is not None:
            self._document.close()
            self._document = None
        self.filename = ""
        self.zoom = 1.0
        super().close()

    def set_zoom(self, zoom: float) -> None:
        self.zoom = min(max(zoom, self.MIN_ZOOM), self.MAX_ZOOM)

    def zoom_in(self, factor: float = 1.25) -> None:
        self.set_zoom(self.zoom * factor)

    def zoom_out(self, factor: float = 1.25) -> None:
        self.set_zoom(self.zoom / factor)

    def reset_zoom(self) -> None:
        self.set_zoom(1.0)
