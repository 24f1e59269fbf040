from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from signage_lite.db import Base

class Device(Base):
    __tablename__ = "device"
    id = Column(Integer, primary_key=True, autoincrement=True)
    platform = Column(String, nullable=False)
    device_name = Column(String, nullable=True)
    # PENDING devices carry a code, PAIRED devices carry a token; never both.
    pairing_code = Column(String(6), nullable=True, index=True)
    pairing_expires = Column(DateTime, nullable=True)
    device_token = Column(String(64), nullable=True, unique=True)
    player_id = Column(Integer, ForeignKey("player.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
