from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import ReaderSession, get_session

router = APIRouter(prefix="/navigation", tags=["navigation"])


class JumpIn(BaseModel):
    setlist_index: int
    item_index: int


def _state(session: ReaderSession) -> dict:
    manager, viewer = session.manager, session.viewer
    item = manager.get_active_item()
    return {
        "active": manager.is_active,
        "setlist_index": manager.active_setlist_index,
        "item_index": manager.active_item_index,
        "item": {"name": item.name, "path": item.path} if item else None,
        "loaded_path": getattr(viewer, "loaded_path", None),
        "page": viewer.current_page() if viewer.is_loaded() else None,
        "page_count": viewer.page_count() if viewer.is_loaded() else None,
        "can_go_next": manager.can_go_next(viewer),
        "can_go_previous": manager.can_go_previous(viewer),
    }


@router.get("")
def get_state(session: ReaderSession = Depends(get_session)):
    return _state(session)


@router.post("/activate/{setlist_index}")
def activate(setlist_index: int, session: ReaderSession = Depends(get_session)):
    setlist = session.manager.get_setlist(setlist_index)
    if setlist is None:
        raise HTTPException(status_code=404, detail=f"Setlist not found: {setlist_index}")
    if setlist.item_count == 0:
        raise HTTPException(status_code=409, detail=f"Setlist {setlist_index} has no items")
    if not session.manager.activate_setlist(setlist_index, session.viewer):
        raise HTTPException(status_code=409, detail=f"Failed to open first item of setlist {setlist_index}")
    return _state(session)


@router.post("/jump")
def jump(body: JumpIn, session: ReaderSession = Depends(get_session)):
    setlist = session.manager.get_setlist(body.setlist_index)
    if setlist is None or setlist.get_item(body.item_index) is None:
        raise HTTPException(
            status_code=404,
            detail=f"Item not found: setlist {body.setlist_index} item {body.item_index}",
        )
    if not session.manager.jump_to_item(body.setlist_index, body.item_index, session.viewer):
        raise HTTPException(status_code=409, detail=f"Failed to open item {body.item_index}")
    return _state(session)


@router.post("/deactivate")
def deactivate(session: ReaderSession = Depends(get_session)):
    session.manager.deactivate()
    return _state(session)


@router.post("/next")
def next_page(session: ReaderSession = Depends(get_session)):
    if not session.manager.next(session.viewer):
        raise HTTPException(status_code=409, detail="No next page in the active setlist")
    return _state(session)


@router.post("/previous")
def previous_page(session: ReaderSession = Depends(get_session)):
    if not session.manager.previous(session.viewer):
        raise HTTPException(status_code=409, detail="No previous page in the active setlist")
    return _state(session)
