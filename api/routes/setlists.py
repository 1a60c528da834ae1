from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from setlist_reader.setlists import Setlist, SetlistManager

from api.dependencies import ReaderSession, get_save_path, get_session

router = APIRouter(prefix="/setlists", tags=["setlists"])


class SetlistName(BaseModel):
    name: str = ""


class ItemIn(BaseModel):
    name: str = ""
    path: str


class MoveIn(BaseModel):
    from_index: int
    to_index: int


def _setlist_payload(index: int, setlist: Setlist) -> dict:
    return {
        "index": index,
        "name": setlist.name,
        "items": [{"name": item.name, "path": item.path} for item in setlist.items],
    }


def _require_setlist(manager: SetlistManager, index: int) -> Setlist:
    setlist = manager.get_setlist(index)
    if setlist is None:
        raise HTTPException(status_code=404, detail=f"Setlist not found: {index}")
    return setlist


@router.get("")
def list_setlists(session: ReaderSession = Depends(get_session)):
    return [
        {"index": idx, "name": s.name, "item_count": s.item_count}
        for idx, s in enumerate(session.manager.setlists)
    ]


@router.post("", status_code=201)
def create_setlist(body: SetlistName, session: ReaderSession = Depends(get_session)):
    index = session.manager.create_setlist(body.name)
    return _setlist_payload(index, session.manager.get_setlist(index))


@router.post("/save")
def save_setlists(
    session: ReaderSession = Depends(get_session),
    save_path: Path = Depends(get_save_path),
):
    if not session.manager.save_to_file(save_path):
        raise HTTPException(status_code=500, detail=f"Failed to save setlists to {save_path}")
    return {"status": "saved", "path": str(save_path), "setlist_count": session.manager.setlist_count}


@router.post("/load")
def load_setlists(
    session: ReaderSession = Depends(get_session),
    save_path: Path = Depends(get_save_path),
):
    if not session.manager.load_from_file(save_path):
        raise HTTPException(status_code=404, detail=f"No valid setlist file at {save_path}")
    return {"status": "loaded", "path": str(save_path), "setlist_count": session.manager.setlist_count}


@router.get("/{index}")
def get_setlist(index: int, session: ReaderSession = Depends(get_session)):
    return _setlist_payload(index, _require_setlist(session.manager, index))


@router.patch("/{index}")
def rename_setlist(index: int, body: SetlistName, session: ReaderSession = Depends(get_session)):
    setlist = _require_setlist(session.manager, index)
    if not body.name:
        raise HTTPException(status_code=400, detail="Setlist name must not be empty")
    setlist.rename(body.name)
    return _setlist_payload(index, setlist)


@router.delete("/{index}")
def delete_setlist(index: int, session: ReaderSession = Depends(get_session)):
    if not session.manager.remove_setlist(index):
        raise HTTPException(status_code=404, detail=f"Setlist not found: {index}")
    return {"status": "deleted", "index": index}


@router.post("/{index}/items", status_code=201)
def add_item(index: int, body: ItemIn, session: ReaderSession = Depends(get_session)):
    setlist = _require_setlist(session.manager, index)
    name = body.name or Path(body.path).name
    if not session.manager.add_item(index, name, body.path):
        raise HTTPException(status_code=400, detail="Item path must not be empty")
    return _setlist_payload(index, setlist)


@router.post("/{index}/items/move")
def move_item(index: int, body: MoveIn, session: ReaderSession = Depends(get_session)):
    setlist = _require_setlist(session.manager, index)
    if not session.manager.move_item(index, body.from_index, body.to_index):
        raise HTTPException(
            status_code=400,
            detail=f"Cannot move item {body.from_index} to {body.to_index} in a setlist of {setlist.item_count}",
        )
    return _setlist_payload(index, setlist)


@router.delete("/{index}/items")
def clear_items(index: int, session: ReaderSession = Depends(get_session)):
    setlist = _require_setlist(session.manager, index)
    session.manager.clear_setlist(index)
    return _setlist_payload(index, setlist)


@router.delete("/{index}/items/{item_index}")
def remove_item(index: int, item_index: int, session: ReaderSession = Depends(get_session)):
    setlist = _require_setlist(session.manager, index)
    if not session.manager.remove_item(index, item_index):
        raise HTTPException(status_code=404, detail=f"Item not found: {item_index}")
    return _setlist_payload(index, setlist)
