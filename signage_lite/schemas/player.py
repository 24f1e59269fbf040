from datetime import datetime
from pydantic import Field
from signage_lite.schemas.common import CamelModel
from signage_lite.schemas.device import DeviceOut
from signage_lite.schemas.playlist import PlaylistOut

class PairIn(CamelModel):
    pairing_code: str = Field(..., min_length=1)
    player_name: str = Field(..., min_length=1)
    location: str | None = None
    tenant_id: int = Field(..., ge=1)

class PairOut(CamelModel):
    player_id: int
    device_id: int
    device_token: str

class PairWithCodeIn(CamelModel):
    pairing_code: str = Field(..., min_length=1)

class PairWithCodeOut(PairOut):
    ok: bool = True

class PlayerCreateIn(CamelModel):
    name: str = Field(..., min_length=1)
    location: str | None = None

class PlayerOut(CamelModel):
    id: int
    tenant_id: int
    name: str
    location: str | None = None
    screen_width: int | None = None
    screen_height: int | None = None
    created_at: datetime | None = None

class PlayerDetailOut(PlayerOut):
    device: DeviceOut | None = None
    playlists: list[PlaylistOut] = []
