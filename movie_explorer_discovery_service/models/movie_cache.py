"""Cached movie details from TMDB"""
from sqlalchemy import JSON, Column, DateTime, Float, Index, Integer, String, Text

from movie_explorer_discovery_service.models.base import Base, utc_now


class CachedMovie(Base):
    """Normalized TMDB movie details, director attribution and production companies.

    One row per TMDB movie id. Rows older than the cache TTL are treated as
    misses by the repository but are left in place until overwritten.
    """
    __tablename__ = 'movie_cache'

    id = Column(Integer, primary_key=True, autoincrement=True)
    tmdb_id = Column(Integer, nullable=False, unique=True)
    title = Column(String(500), nullable=False)
    original_title = Column(String(500), nullable=True)
    overview = Column(Text, nullable=True)
    poster_path = Column(String(255), nullable=True)
    backdrop_path = Column(String(255), nullable=True)
    release_date = Column(String(20), nullable=False, default="")
    release_year = Column(Integer, nullable=False, default=0)
    runtime = Column(Integer, nullable=True)
    vote_average = Column(Float, nullable=True)
    vote_count = Column(Integer, nullable=True)
    genres = Column(JSON, nullable=False, default=list)  # [{"id": 18, "name": "Drama"}]

    director_id = Column(Integer, nullable=True)
    director_name = Column(String(255), nullable=True)
    production_companies = Column(JSON, nullable=False, default=list)  # [{"id", "name", "logo_path"}]

    cached_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    last_accessed_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        Index("idx_movie_cache_director", "director_id"),
        Index("idx_movie_cache_release_year", "release_year"),
    )

    def __repr__(self):
        return f"<CachedMovie(tmdb_id={self.tmdb_id}, title='{self.title}')>"
