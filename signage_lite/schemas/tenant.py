from datetime import datetime
from pydantic import Field
from signage_lite.schemas.common import CamelModel

class TenantCreateIn(CamelModel):
    name: str = Field(..., min_length=1)

class TenantOut(CamelModel):
    id: int
    name: str
    created_at: datetime | None = None
