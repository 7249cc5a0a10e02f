"""Discovery sessions, for tracking exploration history."""
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String

from movie_explorer_discovery_service.models.base import Base, as_utc, utc_now

DISCOVERY_MODES = ("director", "studio")


class DiscoverySession(Base):
    """One discovery invocation and the ordered ids it recommended.

    Rows are written once and never updated.
    """
    __tablename__ = 'discovery_sessions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    seed_movie_tmdb_id = Column(Integer, nullable=False)
    seed_movie_title = Column(String(500), nullable=False)
    seed_movie_poster_path = Column(String(255), nullable=True)
    mode = Column(String(20), nullable=False)

    director_id = Column(Integer, nullable=True)
    director_name = Column(String(255), nullable=True)
    studio_id = Column(Integer, nullable=True)
    studio_name = Column(String(255), nullable=True)

    recommended_movie_ids = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        Index("idx_session_user", "user_id"),
        Index("idx_session_user_created", "user_id", "created_at"),
    )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'seed_movie_tmdb_id': self.seed_movie_tmdb_id,
            'seed_movie_title': self.seed_movie_title,
            'seed_movie_poster_path': self.seed_movie_poster_path,
            'mode': self.mode,
            'director_id': self.director_id,
            'director_name': self.director_name,
            'studio_id': self.studio_id,
            'studio_name': self.studio_name,
            'recommended_movie_ids': list(self.recommended_movie_ids or []),
            'created_at': as_utc(self.created_at).isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return (
            f"<DiscoverySession(id={self.id}, user_id={self.user_id}, "
            f"seed={self.seed_movie_tmdb_id}, mode='{self.mode}')>"
        )
