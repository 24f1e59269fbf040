from sqlalchemy import Column, String, Integer, Boolean, ForeignKey
from signage_lite.db import Base

class Playlist(Base):
    __tablename__ = "playlist"
    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(Integer, ForeignKey("player.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=1)
    design_width = Column(Integer, nullable=True)
    design_height = Column(Integer, nullable=True)
    fit_mode = Column(String(16), nullable=False, default="CONTAIN")

class PlaylistItem(Base):
    __tablename__ = "playlist_item"
    id = Column(Integer, primary_key=True, autoincrement=True)
    playlist_id = Column(Integer, ForeignKey("playlist.id"), nullable=False, index=True)
    media_id = Column(Integer, ForeignKey("media_asset.id"), nullable=False)
    sort_order = Column(Integer, nullable=False)
    duration_sec = Column(Integer, default=10)
    transition_type = Column(String(16), nullable=False, default="NONE")
    transition_duration_ms = Column(Integer, nullable=False, default=0)
