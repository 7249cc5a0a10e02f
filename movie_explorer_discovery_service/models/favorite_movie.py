"""A user's favorite movies"""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint

from movie_explorer_discovery_service.models.base import Base, as_utc, utc_now


class FavoriteMovie(Base):
    """Denormalized favorite entry; a user may favorite a given movie at most once."""
    __tablename__ = 'favorite_movies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    tmdb_id = Column(Integer, nullable=False)
    title = Column(String(500), nullable=False)
    poster_path = Column(String(255), nullable=True)
    release_year = Column(Integer, nullable=False, default=0)
    added_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "tmdb_id", name="uq_favorite_user_tmdb"),
        Index("idx_favorite_user", "user_id"),
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
        }

    def __repr__(self):
        return f"<FavoriteMovie(user_id={self.user_id}, tmdb_id={self.tmdb_id})>"
