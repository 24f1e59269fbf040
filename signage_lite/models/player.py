from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from signage_lite.db import Base

class Player(Base):
    __tablename__ = "player"
    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False)
    name = Column(String, nullable=False)
    location = Column(String, nullable=True)
    screen_width = Column(Integer, nullable=True)
    screen_height = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
