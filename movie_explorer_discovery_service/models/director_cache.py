"""Cached director filmographies"""
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from movie_explorer_discovery_service.models.base import Base, utc_now


class CachedDirector(Base):
    """TMDB person details plus the ordered list of films they directed."""
    __tablename__ = 'director_cache'

    id = Column(Integer, primary_key=True, autoincrement=True)
    tmdb_person_id = Column(Integer, nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    profile_path = Column(String(255), nullable=True)
    biography = Column(Text, nullable=True)
    birthday = Column(String(20), nullable=True)
    place_of_birth = Column(String(255), nullable=True)
    filmography = Column(JSON, nullable=False, default=list)

    cached_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self):
        return f"<CachedDirector(tmdb_person_id={self.tmdb_person_id}, name='{self.name}')>"
