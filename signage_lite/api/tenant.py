import logging
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session
from signage_lite.db import get_db
from signage_lite.models.device import Device
from signage_lite.models.media import MediaAsset
from signage_lite.models.player import Player
from signage_lite.models.playlist import Playlist, PlaylistItem
from signage_lite.models.tenant import Tenant, User
from signage_lite.schemas.common import OkOut
from signage_lite.schemas.tenant import TenantCreateIn, TenantOut
from signage_lite.services.errors import NotFound

router = APIRouter(prefix="/api/admin/tenants", tags=["tenants"])
logger = logging.getLogger(__name__)


def _tenant_cascade(db: Session, tenant_id: int) -> list:
    """Delete statements for a tenant, innermost rows first."""
    player_ids = select(Player.id).where(Player.tenant_id == tenant_id)
    playlist_ids = select(Playlist.id).where(Playlist.player_id.in_(player_ids))
    media_ids = select(MediaAsset.id).where(MediaAsset.tenant_id == tenant_id)
    return [
        db.query(PlaylistItem).filter(PlaylistItem.playlist_id.in_(playlist_ids)),
        db.query(PlaylistItem).filter(PlaylistItem.media_id.in_(media_ids)),
        db.query(Playlist).filter(Playlist.player_id.in_(player_ids)),
        db.query(Device).filter(Device.player_id.in_(player_ids)),
        db.query(Player).filter(Player.tenant_id == tenant_id),
        db.query(MediaAsset).filter(MediaAsset.tenant_id == tenant_id),
        db.query(User).filter(User.tenant_id == tenant_id),
        db.query(Tenant).filter(Tenant.id == tenant_id),
    ]


@router.get("", response_model=list[TenantOut])
def list_tenants(db: Session = Depends(get_db)):
    return db.query(Tenant).order_by(Tenant.id.asc()).all()


@router.post("", status_code=201, response_model=TenantOut)
def create_tenant(payload: TenantCreateIn, db: Session = Depends(get_db)):
    tenant = Tenant(name=payload.name.strip())
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


@router.delete("/{tenant_id}", response_model=OkOut)
def delete_tenant(tenant_id: int, db: Session = Depends(get_db)):
    if db.get(Tenant, tenant_id) is None:
        raise NotFound("Tenant not found")
    for statement in _tenant_cascade(db, tenant_id):
        statement.delete(synchronize_session=False)
    db.commit()
    logger.info("Deleted tenant %s", tenant_id)
    return {"ok": True}
