import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from signage_lite.config import PAIRING_CODE_MAX_DRAWS, PAIRING_CODE_TTL_SEC
from signage_lite.models.device import Device
from signage_lite.models.player import Player
from signage_lite.models.tenant import Tenant
from signage_lite.services.codes import generate_device_token, generate_pairing_code
from signage_lite.services.errors import InvalidOrExpiredCode, NotFound, PlayerNotFound, ValidationError

logger = logging.getLogger(__name__)

STATUS_NOT_FOUND = "NOT_FOUND"
STATUS_PENDING = "PENDING"
STATUS_PAIRED = "PAIRED"


@dataclass
class Registration:
    device_id: int
    pairing_code: str
    expires_at: datetime


@dataclass
class Pairing:
    device_id: int
    player_id: int
    device_token: str


def _utcnow() -> datetime:
    # Naive UTC wall clock, matching what the DateTime columns store.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _cleared_binding() -> dict:
    return {
        Device.player_id: None,
        Device.device_token: None,
        Device.pairing_code: None,
        Device.pairing_expires: None,
    }


def _unused_pairing_code(db: Session, now: datetime) -> str:
    code = generate_pairing_code()
    for _ in range(PAIRING_CODE_MAX_DRAWS):
        live = (
            db.query(Device.id)
            .filter(Device.pairing_code == code, Device.pairing_expires > now)
            .first()
        )
        if live is None:
            return code
        code = generate_pairing_code()
    logger.warning("Issuing pairing code that may collide with a live code after %s draws", PAIRING_CODE_MAX_DRAWS)
    return code


def register_device(db: Session, platform: str, device_name: str | None = None) -> Registration:
    platform = (platform or "").strip()
    if not platform:
        raise ValidationError("platform is required")

    now = _utcnow()
    code = _unused_pairing_code(db, now)
    expires = now + timedelta(seconds=PAIRING_CODE_TTL_SEC)
    device = Device(
        platform=platform,
        device_name=(device_name or "").strip() or None,
        pairing_code=code,
        pairing_expires=expires,
    )
    db.add(device)
    db.commit()
    db.refresh(device)
    logger.info("Registered device %s (%s), pairing code valid until %s", device.id, platform, expires.isoformat())
    return Registration(device_id=device.id, pairing_code=code, expires_at=expires)


def device_status(db: Session, device_id: int) -> dict:
    device = db.get(Device, device_id)
    if device is None:
        return {"status": STATUS_NOT_FOUND}
    if not device.player_id or not device.device_token:
        return {"status": STATUS_PENDING}
    return {
        "status": STATUS_PAIRED,
        "player_id": device.player_id,
        "device_token": device.device_token,
    }


def _claim_device(db: Session, device_id: int, pairing_code: str, binding: dict, require_unbound: bool) -> None:
    # Conditional update so that a concurrently redeemed code cannot be claimed twice.
    query = db.query(Device).filter(Device.id == device_id, Device.pairing_code == pairing_code)
    if require_unbound:
        query = query.filter(Device.player_id.is_(None))
    claimed = query.update(binding, synchronize_session=False)
    if claimed != 1:
        raise InvalidOrExpiredCode()


def redeem_code(
    db: Session,
    pairing_code: str,
    player_name: str,
    tenant_id: int,
    location: str | None = None,
) -> Pairing:
    pairing_code = (pairing_code or "").strip()
    player_name = (player_name or "").strip()
    if not pairing_code or not player_name or not tenant_id:
        raise ValidationError("pairingCode, playerName and tenantId are required")

    if db.get(Tenant, tenant_id) is None:
        raise NotFound("Tenant not found")

    now = _utcnow()
    device = (
        db.query(Device)
        .filter(
            Device.pairing_code == pairing_code,
            Device.pairing_expires > now,
            Device.player_id.is_(None),
        )
        .order_by(Device.id.desc())
        .first()
    )
    if device is None:
        raise InvalidOrExpiredCode()

    player = Player(name=player_name, location=(location or "").strip() or None, tenant_id=tenant_id)
    db.add(player)
    db.flush()

    token = generate_device_token()
    _claim_device(
        db,
        device.id,
        pairing_code,
        {
            Device.player_id: player.id,
            Device.device_token: token,
            Device.pairing_code: None,
            Device.pairing_expires: None,
        },
        require_unbound=True,
    )
    result = Pairing(device_id=device.id, player_id=player.id, device_token=token)
    db.commit()
    logger.info("Device %s paired to new player %s in tenant %s", result.device_id, result.player_id, tenant_id)
    return result


def pair_with_code(db: Session, player_id: int, pairing_code: str) -> Pairing:
    pairing_code = (pairing_code or "").strip()
    if not pairing_code:
        raise ValidationError("pairingCode is required")

    if db.get(Player, player_id) is None:
        raise PlayerNotFound()

    now = _utcnow()
    device = (
        db.query(Device)
        .filter(Device.pairing_code == pairing_code, Device.pairing_expires > now)
        .order_by(Device.id.desc())
        .first()
    )
    if device is None:
        raise InvalidOrExpiredCode()

    detached = (
        db.query(Device)
        .filter(Device.player_id == player_id, Device.id != device.id)
        .update(_cleared_binding(), synchronize_session=False)
    )

    token = generate_device_token()
    _claim_device(
        db,
        device.id,
        pairing_code,
        {
            Device.player_id: player_id,
            Device.device_token: token,
            Device.pairing_code: None,
            Device.pairing_expires: None,
        },
        require_unbound=False,
    )
    result = Pairing(device_id=device.id, player_id=player_id, device_token=token)
    db.commit()
    logger.info("Device %s paired to player %s, detached %s previous device(s)", result.device_id, player_id, detached)
    return result
