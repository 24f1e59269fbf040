from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from signage_lite.db import get_db
from signage_lite.models.player import Player
from signage_lite.schemas.common import OkOut
from signage_lite.schemas.device import ScreenReportIn
from signage_lite.services.device_auth import DeviceSession, require_device
from signage_lite.services.errors import NotFound
from signage_lite.services.playlists import active_playlist_payload

router = APIRouter(prefix="/api/device", tags=["device"])


@router.get("/playlist")
def device_playlist(session: DeviceSession = Depends(require_device), db: Session = Depends(get_db)):
    return active_playlist_payload(db, session.player_id)


@router.post("/screen", response_model=OkOut)
def report_screen(
    payload: ScreenReportIn,
    session: DeviceSession = Depends(require_device),
    db: Session = Depends(get_db),
):
    player = db.get(Player, session.player_id)
    if player is None:
        raise NotFound("Player not found")
    player.screen_width = int(payload.screen_width)
    player.screen_height = int(payload.screen_height)
    db.commit()
    return {"ok": True}
