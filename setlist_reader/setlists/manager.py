from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .models import ActiveCursor, Setlist, SetlistItem
from .storage import (
    SetlistFileStorage,
    SetlistFormatError,
    default_save_path,
    parse_setlists,
    serialize_setlists,
)
from .viewer import DocumentViewer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SetlistManager:
    """
    Owns all setlists and the active reading cursor.

    While a setlist is active, `next`/`previous` page through the loaded
    document and cross into the neighbouring setlist item at either end. The
    viewer is passed into every navigation call and never stored. Any call
    that returns False leaves setlists and cursor exactly as they were.
    """

    def __init__(self):
        self._setlists: List[Setlist] = []
        self._cursor: Optional[ActiveCursor] = None

    # region Collection management
    @property
    def setlists(self) -> Tuple[Setlist, ...]:
        return tuple(self._setlists)

    @property
    def setlist_count(self) -> int:
        return len(self._setlists)

    def get_setlist(self, index: int) -> Optional[Setlist]:
        if not 0 <= index < len(self._setlists):
            return None
        return self._setlists[index]

    def create_setlist(self, name: str = "") -> int:
        if not name:
            name = f"Setlist {len(self._setlists) + 1}"
        self._setlists.append(Setlist(name=name))
        return len(self._setlists) - 1

    def remove_setlist(self, index: int) -> bool:
        if not 0 <= index < len(self._setlists):
            return False

        if self._cursor is not None:
            if index == self._cursor.setlist_index:
                self.deactivate()
            elif index < self._cursor.setlist_index:
                self._cursor = ActiveCursor(self._cursor.setlist_index - 1, self._cursor.item_index)

        del self._setlists[index]
        return True

    # endregion

    # region Item editing
    # Edits made through these methods keep the cursor on the loaded item.
    def add_item(self, setlist_index: int, name: str, path: str) -> bool:
        setlist = self.get_setlist(setlist_index)
        if setlist is None:
            return False
        return setlist.add_item(name, path)

    def remove_item(self, setlist_index: int, item_index: int) -> bool:
        setlist = self.get_setlist(setlist_index)
        if setlist is None or not setlist.remove_item(item_index):
            return False

        if self._cursor is not None and self._cursor.setlist_index == setlist_index:
            if item_index == self._cursor.item_index:
                self.deactivate()
            elif item_index < self._cursor.item_index:
                self._cursor = ActiveCursor(setlist_index, self._cursor.item_index - 1)
        return True

    def move_item(self, setlist_index: int, from_index: int, to_index: int) -> bool:
        setlist = self.get_setlist(setlist_index)
        if setlist is None or not setlist.move_item(from_index, to_index):
            return False

        if self._cursor is not None and self._cursor.setlist_index == setlist_index:
            current = self._cursor.item_index
            if current == from_index:
                current = to_index
            elif from_index < current <= to_index:
                current -= 1
            elif to_index <= current < from_index:
                current += 1
            self._cursor = ActiveCursor(setlist_index, current)
        return True

    def clear_setlist(self, setlist_index: int) -> bool:
        setlist = self.get_setlist(setlist_index)
        if setlist is None:
            return False
        if self._cursor is not None and self._cursor.setlist_index == setlist_index:
            self.deactivate()
        setlist.clear()
        return True

    # endregion

    # region Cursor
    @property
    def cursor(self) -> Optional[ActiveCursor]:
        return self._cursor if self.is_active else None

    @property
    def is_active(self) -> bool:
        return self.get_active_item() is not None

    @property
    def active_setlist_index(self) -> Optional[int]:
        cursor = self.cursor
        return cursor.setlist_index if cursor else None

    @property
    def active_item_index(self) -> Optional[int]:
        cursor = self.cursor
        return cursor.item_index if cursor else None

    def get_active_setlist(self) -> Optional[Setlist]:
        """
        The setlist under the cursor, or None when the cursor no longer points
        at an existing item (e.g. items were removed from the Setlist directly).
        """
        if self._cursor is None:
            return None
        setlist = self.get_setlist(self._cursor.setlist_index)
        if setlist is None or setlist.get_item(self._cursor.item_index) is None:
            return None
        return setlist

    def get_active_item(self) -> Optional[SetlistItem]:
        setlist = self.get_active_setlist()
        if setlist is None:
            return None
        return setlist.get_item(self._cursor.item_index)

    # endregion

    # region Activation and navigation
    def activate_setlist(self, setlist_index: int, viewer: DocumentViewer) -> bool:
        """Make a setlist active and load its first document."""
        return self.jump_to_item(setlist_index, 0, viewer)

    def jump_to_item(self, setlist_index: int, item_index: int, viewer: DocumentViewer) -> bool:
        setlist = self.get_setlist(setlist_index)
        if setlist is None:
            return False
        item = setlist.get_item(item_index)
        if item is None:
            return False

        previous = self._cursor
        self._cursor = ActiveCursor(setlist_index, item_index)
        if not self._load_active_item(viewer, item_index):
            self._cursor = previous
            logger.info("Could not open %s; cursor left at %s", item.path, previous)
            return False

        logger.debug("Activated setlist %d item %d", setlist_index, item_index)
        return True

    def deactivate(self) -> None:
        self._cursor = None

    def next(self, viewer: DocumentViewer) -> bool:
        setlist = self.get_active_setlist()
        if setlist is None:
            return False

        if viewer.is_loaded() and viewer.can_go_next():
            viewer.next_page()
            return True

        next_item = self._cursor.item_index + 1
        if next_item < setlist.item_count:
            return self._load_active_item(viewer, next_item)
        return False

    def previous(self, viewer: DocumentViewer) -> bool:
        setlist = self.get_active_setlist()
        if setlist is None:
            return False

        if viewer.is_loaded() and viewer.can_go_previous():
            viewer.previous_page()
            return True

        prev_item = self._cursor.item_index - 1
        if prev_item < 0:
            return False
        if not self._load_active_item(viewer, prev_item):
            return False

        # Entering a document backwards lands on its last page.
        if viewer.page_count() > 0:
            viewer.go_to_page(viewer.page_count() - 1)
        return True

    def can_go_next(self, viewer: DocumentViewer) -> bool:
        setlist = self.get_active_setlist()
        if setlist is None:
            return False
        if viewer.is_loaded() and viewer.can_go_next():
            return True
        return self._cursor.item_index + 1 < setlist.item_count

    def can_go_previous(self, viewer: DocumentViewer) -> bool:
        setlist = self.get_active_setlist()
        if setlist is None:
            return False
        if viewer.is_loaded() and viewer.can_go_previous():
            return True
        return self._cursor.item_index - 1 >= 0

    def _load_active_item(self, viewer: DocumentViewer, item_index: int) -> bool:
        setlist = self.get_active_setlist()
        if setlist is None:
            return False
        item = setlist.get_item(item_index)
        if item is None:
            return False
        if not viewer.load(item.path):
            return False

        self._cursor = ActiveCursor(self._cursor.setlist_index, item_index)
        logger.debug("Loaded %s (setlist %d item %d)", item.path, self._cursor.setlist_index, item_index)
        return True

    # endregion

    # region Persistence
    def serialize(self) -> str:
        return serialize_setlists(self._setlists)

    def deserialize(self, text: str) -> bool:
        try:
            setlists = parse_setlists(text)
        except SetlistFormatError as exc:
            logger.warning("Invalid setlist data: %s", exc)
            return False
        self._replace_setlists(setlists)
        return True

    def save_to_file(self, path: Optional[PathLike] = None) -> bool:
        target = Path(path) if path is not None else default_save_path()
        try:
            SetlistFileStorage(target).write(self._setlists)
        except OSError as exc:
            logger.error("Failed to save setlists to %s: %s", target, exc)
            return False
        logger.info("Saved %d setlists to %s", len(self._setlists), target)
        return True

    def load_from_file(self, path: Optional[PathLike] = None) -> bool:
        source = Path(path) if path is not None else default_save_path()
        try:
            setlists = SetlistFileStorage(source).read()
        except SetlistFormatError as exc:
            logger.warning("Invalid setlist save file %s: %s", source, exc)
            return False
        except OSError as exc:
            logger.warning("Could not read setlists from %s: %s", source, exc)
            return False

        if setlists is None:
            logger.debug("No setlist save file at %s", source)
            return False

        self._replace_setlists(setlists)
        logger.info("Loaded %d setlists from %s", len(setlists), source)
        return True

    @staticmethod
    def default_save_path() -> Path:
        return default_save_path()

    def _replace_setlists(self, setlists: List[Setlist]) -> None:
        self.deactivate()
        self._setlists = list(setlists)

    # endregion
