import uuid

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from .db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(String(200), unique=True, index=True, nullable=False)
    password = Column(Text, nullable=False)


class Recipe(Base):
    """A Hearth recipe."""

    __tablename__ = "recipes"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    video_url = Column(Text, nullable=True)
    thumbnail_url = Column(Text, nullable=True)
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(JSON, nullable=False, default=list)
    category = Column(String(50), nullable=False, default="veg")  # 'veg' or 'non-veg'
    cook_time = Column(Text, nullable=True)
    servings = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)


class LegacyAudio(Base):
    """A recorded story or life lesson from the Study."""

    __tablename__ = "legacy_audio"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    audio_url = Column(Text, nullable=True)
    duration = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, default="stories")
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)


class TimelineNote(Base):
    __tablename__ = "timeline_notes"
    id = Column(Integer, primary_key=True, index=True)
    year = Column(Integer, nullable=False, index=True)
    content = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
