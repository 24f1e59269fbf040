from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from signage_lite.db import get_db
from signage_lite.models.playlist import Playlist
from signage_lite.schemas.common import OkOut
from signage_lite.schemas.playlist import (
    FitModeIn,
    PlaylistCreateIn,
    PlaylistItemCreateIn,
    PlaylistItemDetailOut,
    PlaylistItemOut,
    PlaylistOut,
    ReorderIn,
    TransitionIn,
)
from signage_lite.services import playlists
from signage_lite.services.errors import NotFound

router = APIRouter(prefix="/api/admin", tags=["playlists"])


@router.get("/players/{player_id}/playlists", response_model=list[PlaylistOut])
def list_playlists(player_id: int, db: Session = Depends(get_db)):
    return db.query(Playlist).filter(Playlist.player_id == player_id).order_by(Playlist.id.asc()).all()


@router.post("/players/{player_id}/playlists", status_code=201, response_model=PlaylistOut)
def create_playlist(player_id: int, payload: PlaylistCreateIn, db: Session = Depends(get_db)):
    return playlists.create_playlist(
        db,
        player_id,
        payload.name,
        design_width=payload.design_width,
        design_height=payload.design_height,
        fit_mode=payload.fit_mode,
    )


@router.delete("/playlists/{playlist_id}", response_model=OkOut)
def delete_playlist(playlist_id: int, db: Session = Depends(get_db)):
    playlists.delete_playlist(db, playlist_id)
    return {"ok": True}


@router.post("/playlists/{playlist_id}/activate", response_model=OkOut)
def activate_playlist(playlist_id: int, db: Session = Depends(get_db)):
    playlists.activate_playlist(db, playlist_id)
    return {"ok": True}


@router.post("/playlists/{playlist_id}/fit-mode", response_model=PlaylistOut)
def set_fit_mode(playlist_id: int, payload: FitModeIn, db: Session = Depends(get_db)):
    return playlists.set_fit_mode(db, playlist_id, payload.fit_mode)


@router.get("/playlists/{playlist_id}/items", response_model=list[PlaylistItemDetailOut])
def list_items(playlist_id: int, db: Session = Depends(get_db)):
    if db.get(Playlist, playlist_id) is None:
        raise NotFound("Playlist not found")
    return [
        {**PlaylistItemOut.model_validate(item).model_dump(), "media": media}
        for item, media in playlists.ordered_items(db, playlist_id)
    ]


@router.post("/playlists/{playlist_id}/items", status_code=201, response_model=PlaylistItemOut)
def add_item(playlist_id: int, payload: PlaylistItemCreateIn, db: Session = Depends(get_db)):
    return playlists.add_item(db, playlist_id, payload.media_id, payload.duration_sec)


@router.put("/playlists/{playlist_id}/reorder", response_model=OkOut)
def reorder_items(playlist_id: int, payload: ReorderIn, db: Session = Depends(get_db)):
    playlists.reorder_items(db, playlist_id, [(entry.id, entry.sort_order) for entry in payload.order])
    return {"ok": True}


@router.delete("/playlist-items/{item_id}", response_model=OkOut)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    playlists.delete_item(db, item_id)
    return {"ok": True}


@router.post("/playlist-items/{item_id}/transition", response_model=PlaylistItemOut)
def set_item_transition(item_id: int, payload: TransitionIn, db: Session = Depends(get_db)):
    return playlists.set_item_transition(
        db,
        item_id,
        payload.transition_type,
        payload.transition_duration_ms,
    )
