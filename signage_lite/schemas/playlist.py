from typing import Any
from pydantic import Field
from signage_lite.schemas.common import CamelModel
from signage_lite.schemas.media import MediaOut

class PlaylistCreateIn(CamelModel):
    name: str = Field(..., min_length=1)
    design_width: int | None = Field(None, ge=1)
    design_height: int | None = Field(None, ge=1)
    fit_mode: Any = None

class FitModeIn(CamelModel):
    fit_mode: Any = None

class PlaylistOut(CamelModel):
    id: int
    player_id: int
    name: str
    is_active: bool
    version: int
    design_width: int | None = None
    design_height: int | None = None
    fit_mode: str

class PlaylistItemCreateIn(CamelModel):
    media_id: int
    duration_sec: int | None = Field(None, ge=1)

class TransitionIn(CamelModel):
    transition_type: Any = None
    transition_duration_ms: Any = None

class ReorderEntry(CamelModel):
    id: int
    sort_order: int

class ReorderIn(CamelModel):
    order: list[ReorderEntry]

class PlaylistItemOut(CamelModel):
    id: int
    playlist_id: int
    media_id: int
    sort_order: int
    duration_sec: int | None = None
    transition_type: str
    transition_duration_ms: int

class PlaylistItemDetailOut(PlaylistItemOut):
    media: MediaOut
