import logging
from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from signage_lite.db import get_db
from signage_lite.models.device import Device
from signage_lite.models.player import Player
from signage_lite.services.errors import InternalError, Unauthorized

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass
class DeviceSession:
    device_id: int
    player_id: int
    tenant_id: int


def resolve_device_session(db: Session, authorization: str | None) -> DeviceSession:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized("Missing or invalid Authorization header")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthorized("Missing device token")

    try:
        row = (
            db.query(Device.id, Player.id, Player.tenant_id)
            .join(Player, Player.id == Device.player_id)
            .filter(Device.device_token == token)
            .first()
        )
    except SQLAlchemyError as exc:
        logger.exception("Device token lookup failed")
        raise InternalError() from exc

    if row is None:
        logger.debug("Rejected unknown or unbound device token")
        raise Unauthorized("Invalid device token")
    device_id, player_id, tenant_id = row
    return DeviceSession(device_id=device_id, player_id=player_id, tenant_id=tenant_id)


def require_device(
    authorization: str | None = Header(None),
    db: Session = Depends(get_db),
) -> DeviceSession:
    return resolve_device_session(db, authorization)
