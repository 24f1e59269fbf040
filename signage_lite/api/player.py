import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from signage_lite.db import get_db
from signage_lite.models.device import Device
from signage_lite.models.player import Player
from signage_lite.models.playlist import Playlist, PlaylistItem
from signage_lite.models.tenant import Tenant
from signage_lite.schemas.common import OkOut
from signage_lite.schemas.player import (
    PairIn,
    PairOut,
    PairWithCodeIn,
    PairWithCodeOut,
    PlayerCreateIn,
    PlayerDetailOut,
    PlayerOut,
)
from signage_lite.services import pairing
from signage_lite.services.errors import NotFound, PlayerNotFound

router = APIRouter(prefix="/api", tags=["players"])
logger = logging.getLogger(__name__)


@router.post("/players/pair", status_code=201, response_model=PairOut)
def pair_player(payload: PairIn, db: Session = Depends(get_db)):
    result = pairing.redeem_code(
        db,
        pairing_code=payload.pairing_code,
        player_name=payload.player_name,
        tenant_id=payload.tenant_id,
        location=payload.location,
    )
    return result


@router.post("/admin/players/{player_id}/pair-with-code", response_model=PairWithCodeOut)
def pair_with_code(player_id: int, payload: PairWithCodeIn, db: Session = Depends(get_db)):
    result = pairing.pair_with_code(db, player_id, payload.pairing_code)
    return {
        "ok": True,
        "device_id": result.device_id,
        "player_id": result.player_id,
        "device_token": result.device_token,
    }


@router.get("/admin/tenants/{tenant_id}/players", response_model=list[PlayerDetailOut])
def list_players(tenant_id: int, db: Session = Depends(get_db)):
    players = db.query(Player).filter(Player.tenant_id == tenant_id).order_by(Player.id.asc()).all()
    player_ids = [player.id for player in players]
    devices: dict[int, Device] = {}
    playlists: dict[int, list[Playlist]] = {player_id: [] for player_id in player_ids}
    if player_ids:
        for device in (
            db.query(Device)
            .filter(Device.player_id.in_(player_ids))
            .order_by(Device.id.asc())
            .all()
        ):
            devices[device.player_id] = device
        for playlist in (
            db.query(Playlist)
            .filter(Playlist.player_id.in_(player_ids))
            .order_by(Playlist.id.asc())
            .all()
        ):
            playlists[playlist.player_id].append(playlist)

    return [
        {
            **PlayerOut.model_validate(player).model_dump(),
            "device": devices.get(player.id),
            "playlists": playlists[player.id],
        }
        for player in players
    ]


@router.post("/admin/tenants/{tenant_id}/players", status_code=201, response_model=PlayerOut)
def create_player(tenant_id: int, payload: PlayerCreateIn, db: Session = Depends(get_db)):
    if db.get(Tenant, tenant_id) is None:
        raise NotFound("Tenant not found")
    player = Player(
        tenant_id=tenant_id,
        name=payload.name.strip(),
        location=(payload.location or "").strip() or None,
    )
    db.add(player)
    db.commit()
    db.refresh(player)
    return player


@router.delete("/admin/players/{player_id}", response_model=OkOut)
def delete_player(player_id: int, db: Session = Depends(get_db)):
    if db.get(Player, player_id) is None:
        raise PlayerNotFound()

    playlist_ids = [row[0] for row in db.query(Playlist.id).filter(Playlist.player_id == player_id).all()]
    if playlist_ids:
        db.query(PlaylistItem).filter(PlaylistItem.playlist_id.in_(playlist_ids)).delete(synchronize_session=False)
        db.query(Playlist).filter(Playlist.id.in_(playlist_ids)).delete(synchronize_session=False)
    db.query(Device).filter(Device.player_id == player_id).delete(synchronize_session=False)
    db.query(Player).filter(Player.id == player_id).delete(synchronize_session=False)
    db.commit()
    logger.info("Deleted player %s with %s playlist(s)", player_id, len(playlist_ids))
    return {"ok": True}
