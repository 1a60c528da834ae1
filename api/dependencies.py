from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from fastapi import Depends

from setlist_reader.setlists import DocumentViewer, PyMuPdfViewer, SetlistManager, default_save_path

logger = logging.getLogger(__name__)

# Handlers run in FastAPI's threadpool; the manager and viewer are used by one
# request at a time.
_session_lock = threading.Lock()


def get_save_path() -> Path:
    return default_save_path()


@lru_cache(maxsize=1)
def get_manager() -> SetlistManager:
    manager = SetlistManager()
    save_path = get_save_path()
    if not manager.load_from_file(save_path):
        logger.info("Starting with no saved setlists (%s)", save_path)
    return manager


@lru_cache(maxsize=1)
def get_viewer() -> PyMuPdfViewer:
    return PyMuPdfViewer()


@dataclass
class ReaderSession:
    manager: SetlistManager
    viewer: DocumentViewer


def get_session(
    manager: SetlistManager = Depends(get_manager),
    viewer: DocumentViewer = Depends(get_viewer),
) -> Iterator[ReaderSession]:
    with _session_lock:
        yield ReaderSession(manager=manager, viewer=viewer)


def log_level() -> str:
    level = os.getenv("SETLIST_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown SETLIST_LOG_LEVEL %r, using INFO", level)
        return "INFO"
    return level
