from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class SetlistItem:
    name: str
    path: str


@dataclass(frozen=True)
class DocumentEntry:
    """
    A document picked from a library listing. Only the filename and the full
    path are used when it is added to a setlist.
    """

    filename: str
    full_path: str


@dataclass(frozen=True)
class ActiveCursor:
    setlist_index: int
    item_index: int


@dataclass
class Setlist:
    """
    Ordered collection of documents that is read through as one continuous
    sequence. Indices are always checked; negative values are out of range.
    """

    name: str
    _items: List[SetlistItem] = field(default_factory=list, repr=False)

    @property
    def items(self) -> Tuple[SetlistItem, ...]:
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def get_item(self, index: int) -> Optional[SetlistItem]:
        if not self._in_range(index):
            return None
        return self._items[index]

    def rename(self, name: str) -> None:
        self.name = name

    def add_item(self, name: str, path: str) -> bool:
        if not path:
            return False
        self._items.append(SetlistItem(name=name, path=path))
        return True

    def add_entry(self, entry: DocumentEntry) -> bool:
        return self.add_item(entry.filename, entry.full_path)

    def remove_item(self, index: int) -> bool:
        if not self._in_range(index):
            return False
        del self._items[index]
        return True

    def move_item(self, from_index: int, to_index: int) -> bool:
        """
        Move one item; `to_index` is its position after the item has been
        taken out, so the result matches a drag-and-drop reorder.
        """
        if not self._in_range(from_index) or not self._in_range(to_index):
            return False
        if from_index == to_index:
            return True
        item = self._items.pop(from_index)
        self._items.insert(to_index, item)
        return True

    def clear(self) -> None:
        self._items.clear()
