"""A user's watchlist"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint

from movie_explorer_discovery_service.models.base import Base, as_utc, utc_now


class WatchlistItem(Base):
    """Movie the user plans to watch, with watched state and free-form notes."""
    __tablename__ = 'watchlist'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    tmdb_id = Column(Integer, nullable=False)
    title = Column(String(500), nullable=False)
    poster_path = Column(String(255), nullable=True)
    release_year = Column(Integer, nullable=False, default=0)
    added_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    watched = Column(Boolean, nullable=False, default=False)
    watched_at = Column(DateTime(timezone=True), nullable=True)
    priority = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "tmdb_id", name="uq_watchlist_user_tmdb"),
        Index("idx_watchlist_user", "user_id"),
        Index("idx_watchlist_user_watched", "user_id", "watched"),
    )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'tmdb_id': self.tmdb_id,
            'title': self.title,
            'poster_path': self.poster_path,
            'release_year': self.release_year,
            'added_at': as_utc(self.added_at).isoformat() if self.added_at else None,
            'watched': self.watched,
            'watched_at': as_utc(self.watched_at).isoformat() if self.watched_at else None,
            'priority': self.priority,
            'notes': self.notes,
        }

    def __repr__(self):
        return f"<WatchlistItem(user_id={self.user_id}, tmdb_id={self.tmdb_id}, watched={self.watched})>"
