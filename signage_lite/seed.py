import logging
from sqlalchemy.orm import Session
from signage_lite.db import SessionLocal, Base, engine
from signage_lite.models.tenant import Tenant
from signage_lite.models.player import Player
from signage_lite.models.media import MediaAsset
from signage_lite.models.playlist import Playlist, PlaylistItem

logger = logging.getLogger(__name__)

DEMO_IMAGE_URL = "https://picsum.photos/800/600.jpg"
DEMO_PLAYLIST_NAME = "Demo playlist"


def seed(db: Session | None = None) -> dict[str, int]:
    """Create a demo tenant with one player playing a one-image playlist.

    Reuses the first tenant, its first player and any demo media, playlist
    and item from an earlier run.
    """
    Base.metadata.create_all(bind=engine)
    owns_session = db is None
    db = db or SessionLocal()
    try:
        tenant = db.query(Tenant).order_by(Tenant.id.asc()).first()
        if tenant is None:
            tenant = Tenant(name="Demo tenant")
            db.add(tenant)
            db.flush()

        player = db.query(Player).filter(Player.tenant_id == tenant.id).order_by(Player.id.asc()).first()
        if player is None:
            player = Player(tenant_id=tenant.id, name="Demo player", location="Lobby")
            db.add(player)
            db.flush()

        media = (
            db.query(MediaAsset)
            .filter(MediaAsset.tenant_id == tenant.id, MediaAsset.url == DEMO_IMAGE_URL)
            .order_by(MediaAsset.id.asc())
            .first()
        )
        if media is None:
            media = MediaAsset(
                tenant_id=tenant.id,
                filename="demo-image.jpg",
                url=DEMO_IMAGE_URL,
                mime_type="image/jpeg",
                media_type="IMAGE",
                size_bytes=123456,
            )
            db.add(media)
            db.flush()

        playlist = (
            db.query(Playlist)
            .filter(Playlist.player_id == player.id, Playlist.name == DEMO_PLAYLIST_NAME)
            .order_by(Playlist.id.asc())
            .first()
        )
        created = playlist is None
        if created:
            playlist = Playlist(player_id=player.id, name=DEMO_PLAYLIST_NAME, is_active=True, version=1)
            db.add(playlist)
            db.flush()
        changed = not playlist.is_active

        db.query(Playlist).filter(Playlist.player_id == player.id, Playlist.id != playlist.id).update(
            {Playlist.is_active: False},
            synchronize_session=False,
        )
        playlist.is_active = True

        item = (
            db.query(PlaylistItem)
            .filter(PlaylistItem.playlist_id == playlist.id, PlaylistItem.media_id == media.id)
            .order_by(PlaylistItem.id.asc())
            .first()
        )
        if item is None:
            item = PlaylistItem(playlist_id=playlist.id, media_id=media.id, sort_order=1, duration_sec=10)
            db.add(item)
            changed = True
        if changed and not created:
            playlist.version = Playlist.version + 1
        db.commit()

        result = {
            "tenant_id": tenant.id,
            "player_id": player.id,
            "media_id": media.id,
            "playlist_id": playlist.id,
            "item_id": item.id,
        }
        logger.info("Seeded demo playlist: %s", result)
        return result
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
