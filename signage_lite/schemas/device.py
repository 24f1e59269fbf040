from pydantic import Field
from signage_lite.schemas.common import CamelModel

class DeviceRegisterIn(CamelModel):
    platform: str = Field(..., min_length=1)
    device_name: str | None = None

class DeviceRegisterOut(CamelModel):
    device_id: int
    pairing_code: str
    expires_at: str

class DeviceStatusOut(CamelModel):
    status: str
    player_id: int | None = None
    device_token: str | None = None

MAX_SCREEN_SIZE = 100_000

class ScreenReportIn(CamelModel):
    screen_width: float = Field(..., strict=True, allow_inf_nan=False, ge=0, le=MAX_SCREEN_SIZE)
    screen_height: float = Field(..., strict=True, allow_inf_nan=False, ge=0, le=MAX_SCREEN_SIZE)

class DeviceOut(CamelModel):
    id: int
    platform: str
    device_name: str | None = None
    player_id: int | None = None
