from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .models import Setlist

logger = logging.getLogger(__name__)

FORMAT_HEADER = "SETLISTS_V1"
SETLIST_PREFIX = "SETLIST:"
ITEM_PREFIX = "ITEM:"
END_MARKER = "END"

DEFAULT_FILENAME = "setlists.dat"


class SetlistFormatError(ValueError):
    """Raised when saved setlist data does not start with the format header."""


def default_save_path() -> Path:
    env_path = os.getenv("SETLIST_FILE")
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_FILENAME


def _one_line(value: str) -> str:
    return value.replace("\r", " ").replace("\n", " ")


def serialize_setlists(setlists: Iterable[Setlist]) -> str:
    """
    Render setlists in the SETLISTS_V1 line format:

        SETLISTS_V1
        SETLIST:<name>
        ITEM:<display_name>\\t<full_path>
        END

    Display names lose tabs and every field loses line breaks so that each
    record stays on one parseable line.
    """
    lines = [FORMAT_HEADER]
    for setlist in setlists:
        lines.append(f"{SETLIST_PREFIX}{_one_line(setlist.name)}")
        for item in setlist.items:
            name = _one_line(item.name).replace("\t", " ")
            lines.append(f"{ITEM_PREFIX}{name}\t{_one_line(item.path)}")
    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"


def parse_setlists(text: str) -> List[Setlist]:
    """
    Parse SETLISTS_V1 text. A wrong or missing header raises
    SetlistFormatError; malformed or unknown lines after it are skipped.
    """
    lines = text.split("\n")
    if lines[0].rstrip("\r") != FORMAT_HEADER:
        raise SetlistFormatError("missing SETLISTS_V1 header")

    setlists: List[Setlist] = []
    current: Optional[Setlist] = None
    for raw in lines[1:]:
        line = raw.rstrip("\r")
        if line == END_MARKER:
            break
        if line.startswith(SETLIST_PREFIX):
            current = Setlist(name=line[len(SETLIST_PREFIX):])
            setlists.append(current)
        elif line.startswith(ITEM_PREFIX) and current is not None:
            name, tab, path = line[len(ITEM_PREFIX):].partition("\t")
            if not tab:
                logger.debug("Skipping item line without tab: %r", line)
                continue
            current.add_item(name, path)
    return setlists


@dataclass
class SetlistFileStorage:
    """
    Reads and writes the setlist save file. Missing files are reported as
    None since no save exists before the first run.
    """

    path: Path

    def exists(self) -> bool:
        return self.path.exists()

    def write(self, setlists: Iterable[Setlist]) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(serialize_setlists(setlists))
        return self.path

    def read(self) -> Optional[List[Setlist]]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise SetlistFormatError(f"{self.path} is not UTF-8 text") from exc
        return parse_setlists(text)
