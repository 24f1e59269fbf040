from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from signage_lite.db import get_db
from signage_lite.schemas.device import DeviceRegisterIn, DeviceRegisterOut, DeviceStatusOut
from signage_lite.services import pairing

router = APIRouter(prefix="/api/devices", tags=["devices"])


@router.post("/register", status_code=201, response_model=DeviceRegisterOut)
def register_device(payload: DeviceRegisterIn, db: Session = Depends(get_db)):
    registration = pairing.register_device(db, payload.platform, payload.device_name)
    return {
        "device_id": registration.device_id,
        "pairing_code": registration.pairing_code,
        "expires_at": registration.expires_at.isoformat(timespec="milliseconds") + "Z",
    }


# Polling endpoint: an unknown device is reported in the body, not as a 404.
@router.get("/{device_id}/status", response_model=DeviceStatusOut, response_model_exclude_none=True)
def device_status(device_id: int, db: Session = Depends(get_db)):
    return pairing.device_status(db, device_id)
