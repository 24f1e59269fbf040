import logging
import math
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from signage_lite.models.media import MediaAsset
from signage_lite.models.player import Player
from signage_lite.models.playlist import Playlist, PlaylistItem
from signage_lite.services.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

FIT_MODES = ("CONTAIN", "COVER", "STRETCH", "ORIGINAL")
DEFAULT_FIT_MODE = "CONTAIN"
TRANSITION_TYPES = ("NONE", "FADE")
DEFAULT_TRANSITION_TYPE = "NONE"
DEFAULT_TRANSITION_DURATION_MS = 1000
MAX_TRANSITION_DURATION_MS = 10000
DEFAULT_ITEM_DURATION_SEC = 10


def normalize_fit_mode(value: Any) -> str:
    if not isinstance(value, str):
        return DEFAULT_FIT_MODE
    upper = value.upper()
    return upper if upper in FIT_MODES else DEFAULT_FIT_MODE


def normalize_transition(transition_type: Any, duration_ms: Any = None) -> tuple[str, int]:
    safe_type = DEFAULT_TRANSITION_TYPE
    if isinstance(transition_type, str) and transition_type.upper() in TRANSITION_TYPES:
        safe_type = transition_type.upper()
    if safe_type == "NONE":
        return safe_type, 0

    is_number = isinstance(duration_ms, (int, float)) and not isinstance(duration_ms, bool)
    raw = duration_ms if is_number and math.isfinite(duration_ms) else DEFAULT_TRANSITION_DURATION_MS
    return safe_type, int(min(max(raw, 0), MAX_TRANSITION_DURATION_MS))


def bump_version(db: Session, playlist_id: int) -> None:
    # SQL-side increment; the caller commits it together with the mutation.
    db.query(Playlist).filter(Playlist.id == playlist_id).update(
        {Playlist.version: Playlist.version + 1},
        synchronize_session=False,
    )


def _get_playlist(db: Session, playlist_id: int) -> Playlist:
    playlist = db.get(Playlist, playlist_id)
    if playlist is None:
        raise NotFound("Playlist not found")
    return playlist


def _get_item(db: Session, item_id: int) -> PlaylistItem:
    item = db.get(PlaylistItem, item_id)
    if item is None:
        raise NotFound("Playlist item not found")
    return item


def empty_payload(player_id: int) -> dict:
    return {
        "playerId": player_id,
        "playerName": None,
        "playlistName": None,
        "version": 0,
        "designWidth": None,
        "designHeight": None,
        "fitMode": DEFAULT_FIT_MODE,
        "items": [],
    }


def ordered_items(db: Session, playlist_id: int) -> list[tuple[PlaylistItem, MediaAsset]]:
    return (
        db.query(PlaylistItem, MediaAsset)
        .join(MediaAsset, MediaAsset.id == PlaylistItem.media_id)
        .filter(PlaylistItem.playlist_id == playlist_id)
        .order_by(PlaylistItem.sort_order.asc(), PlaylistItem.id.asc())
        .all()
    )


def active_playlist_payload(db: Session, player_id: int) -> dict:
    playlist = (
        db.query(Playlist)
        .filter(Playlist.player_id == player_id, Playlist.is_active.is_(True))
        .order_by(Playlist.id.desc())
        .first()
    )
    if playlist is None:
        return empty_payload(player_id)

    player = db.get(Player, player_id)
    return {
        "playerId": player_id,
        "playerName": player.name if player else None,
        "location": player.location if player else None,
        "playlistName": playlist.name,
        "version": playlist.version,
        "designWidth": playlist.design_width,
        "designHeight": playlist.design_height,
        "fitMode": normalize_fit_mode(playlist.fit_mode),
        "items": [
            {
                "id": item.id,
                "type": media.media_type,
                "url": media.url,
                "durationSec": item.duration_sec,
                "transitionType": item.transition_type or DEFAULT_TRANSITION_TYPE,
                "transitionDurationMs": item.transition_duration_ms or 0,
            }
            for item, media in ordered_items(db, playlist.id)
        ],
    }


def create_playlist(
    db: Session,
    player_id: int,
    name: str,
    design_width: int | None = None,
    design_height: int | None = None,
    fit_mode: Any = None,
) -> Playlist:
    name = (name or "").strip()
    if not name:
        raise ValidationError("name is required")
    if db.get(Player, player_id) is None:
        raise NotFound("Player not found")

    # A new playlist only goes live when nothing else is playing on this player.
    has_active = (
        db.query(Playlist.id)
        .filter(Playlist.player_id == player_id, Playlist.is_active.is_(True))
        .first()
        is not None
    )
    playlist = Playlist(
        player_id=player_id,
        name=name,
        is_active=not has_active,
        version=1,
        design_width=design_width,
        design_height=design_height,
        fit_mode=normalize_fit_mode(fit_mode),
    )
    db.add(playlist)
    db.commit()
    db.refresh(playlist)
    return playlist


def delete_playlist(db: Session, playlist_id: int) -> None:
    _get_playlist(db, playlist_id)
    db.query(PlaylistItem).filter(PlaylistItem.playlist_id == playlist_id).delete(synchronize_session=False)
    db.query(Playlist).filter(Playlist.id == playlist_id).delete(synchronize_session=False)
    db.commit()


def activate_playlist(db: Session, playlist_id: int) -> None:
    playlist = _get_playlist(db, playlist_id)
    player_id = playlist.player_id
    db.query(Playlist).filter(Playlist.player_id == player_id, Playlist.id != playlist_id).update(
        {Playlist.is_active: False},
        synchronize_session=False,
    )
    db.query(Playlist).filter(Playlist.id == playlist_id).update(
        {Playlist.is_active: True, Playlist.version: Playlist.version + 1},
        synchronize_session=False,
    )
    db.commit()
    logger.info("Activated playlist %s for player %s", playlist_id, player_id)


def set_fit_mode(db: Session, playlist_id: int, fit_mode: Any) -> Playlist:
    playlist = _get_playlist(db, playlist_id)
    safe_mode = normalize_fit_mode(fit_mode)
    if playlist.fit_mode == safe_mode:
        return playlist
    db.query(Playlist).filter(Playlist.id == playlist_id).update(
        {Playlist.fit_mode: safe_mode, Playlist.version: Playlist.version + 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(playlist)
    return playlist


def add_item(db: Session, playlist_id: int, media_id: int, duration_sec: int | None = None) -> PlaylistItem:
    playlist = _get_playlist(db, playlist_id)
    media = db.get(MediaAsset, media_id)
    if media is None:
        raise NotFound("Media not found")
    player = db.get(Player, playlist.player_id)
    if player is not None and media.tenant_id != player.tenant_id:
        raise ValidationError("Media belongs to another tenant")

    max_order = (
        db.query(func.max(PlaylistItem.sort_order))
        .filter(PlaylistItem.playlist_id == playlist_id)
        .scalar()
    )
    item = PlaylistItem(
        playlist_id=playlist_id,
        media_id=media_id,
        sort_order=(max_order or 0) + 1,
        duration_sec=duration_sec if duration_sec is not None else DEFAULT_ITEM_DURATION_SEC,
        transition_type=DEFAULT_TRANSITION_TYPE,
        transition_duration_ms=0,
    )
    db.add(item)
    bump_version(db, playlist_id)
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, item_id: int) -> None:
    item = _get_item(db, item_id)
    playlist_id = item.playlist_id
    db.query(PlaylistItem).filter(PlaylistItem.id == item_id).delete(synchronize_session=False)
    bump_version(db, playlist_id)
    db.commit()


def set_item_transition(db: Session, item_id: int, transition_type: Any, duration_ms: Any = None) -> PlaylistItem:
    item = _get_item(db, item_id)
    safe_type, safe_duration = normalize_transition(transition_type, duration_ms)
    if item.transition_type == safe_type and item.transition_duration_ms == safe_duration:
        return item
    item.transition_type = safe_type
    item.transition_duration_ms = safe_duration
    bump_version(db, item.playlist_id)
    db.commit()
    db.refresh(item)
    return item


def reorder_items(db: Session, playlist_id: int, order: list[tuple[int, int]]) -> None:
    _get_playlist(db, playlist_id)
    if not order:
        return

    item_ids = [item_id for item_id, _ in order]
    if len(set(item_ids)) != len(item_ids):
        raise ValidationError("order contains duplicate item ids")
    current = dict(
        db.query(PlaylistItem.id, PlaylistItem.sort_order)
        .filter(PlaylistItem.playlist_id == playlist_id, PlaylistItem.id.in_(item_ids))
        .all()
    )
    missing = sorted(set(item_ids) - set(current))
    if missing:
        raise ValidationError(f"order contains unknown playlist items: {', '.join(str(i) for i in missing)}")

    changed = [(item_id, sort_order) for item_id, sort_order in order if current[item_id] != sort_order]
    if not changed:
        return
    for item_id, sort_order in changed:
        db.query(PlaylistItem).filter(PlaylistItem.id == item_id).update(
            {PlaylistItem.sort_order: sort_order},
            synchronize_session=False,
        )
    bump_version(db, playlist_id)
    db.commit()
