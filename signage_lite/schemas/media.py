from datetime import datetime
from pydantic import Field
from signage_lite.schemas.common import CamelModel

class MediaCreateIn(CamelModel):
    filename: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    mime_type: str = Field(..., min_length=1)
    media_type: str = Field(..., min_length=1)
    size_bytes: int | None = Field(None, ge=0)

class MediaOut(CamelModel):
    id: int
    tenant_id: int
    filename: str
    url: str
    mime_type: str
    media_type: str
    size_bytes: int
    created_at: datetime | None = None
