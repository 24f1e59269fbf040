from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from signage_lite.db import get_db
from signage_lite.models.media import MediaAsset
from signage_lite.models.playlist import PlaylistItem
from signage_lite.models.tenant import Tenant
from signage_lite.schemas.common import OkOut
from signage_lite.schemas.media import MediaCreateIn, MediaOut
from signage_lite.services.errors import NotFound, ValidationError
from signage_lite.services.playlists import bump_version

router = APIRouter(prefix="/api/admin", tags=["media"])

MEDIA_TYPES = {"IMAGE", "VIDEO"}


def _normalized_media_type(raw: str | None) -> str:
    media_type = (raw or "").strip().upper()
    if media_type not in MEDIA_TYPES:
        raise ValidationError("mediaType must be IMAGE or VIDEO")
    return media_type


@router.get("/tenants/{tenant_id}/media", response_model=list[MediaOut])
def list_media(tenant_id: int, db: Session = Depends(get_db)):
    return db.query(MediaAsset).filter(MediaAsset.tenant_id == tenant_id).order_by(MediaAsset.id.asc()).all()


@router.post("/tenants/{tenant_id}/media", status_code=201, response_model=MediaOut)
def create_media(tenant_id: int, payload: MediaCreateIn, db: Session = Depends(get_db)):
    media_type = _normalized_media_type(payload.media_type)
    if db.get(Tenant, tenant_id) is None:
        raise NotFound("Tenant not found")
    media = MediaAsset(
        tenant_id=tenant_id,
        filename=payload.filename.strip(),
        url=payload.url.strip(),
        mime_type=payload.mime_type.strip(),
        media_type=media_type,
        size_bytes=payload.size_bytes or 0,
    )
    db.add(media)
    db.commit()
    db.refresh(media)
    return media


@router.delete("/media/{media_id}", response_model=OkOut)
def delete_media(media_id: int, db: Session = Depends(get_db)):
    if db.get(MediaAsset, media_id) is None:
        raise NotFound("Media not found")
    affected = {
        row[0]
        for row in db.query(PlaylistItem.playlist_id).filter(PlaylistItem.media_id == media_id).all()
    }
    db.query(PlaylistItem).filter(PlaylistItem.media_id == media_id).delete(synchronize_session=False)
    for playlist_id in sorted(affected):
        bump_version(db, playlist_id)
    db.query(MediaAsset).filter(MediaAsset.id == media_id).delete(synchronize_session=False)
    db.commit()
    return {"ok": True}
