"""Cached studio filmographies"""
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from movie_explorer_discovery_service.models.base import Base, utc_now


class CachedStudio(Base):
    """TMDB company details plus its most-voted movies."""
    __tablename__ = 'studio_cache'

    id = Column(Integer, primary_key=True, autoincrement=True)
    tmdb_company_id = Column(Integer, nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    logo_path = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    headquarters = Column(String(255), nullable=True)
    homepage = Column(String(500), nullable=True)
    filmography = Column(JSON, nullable=False, default=list)

    cached_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self):
        return f"<CachedStudio(tmdb_company_id={self.tmdb_company_id}, name='{self.name}')>"
