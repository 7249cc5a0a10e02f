"""Repository for discovery session history."""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import desc
from sqlalchemy.orm import Session

from movie_explorer_discovery_service.models import DiscoverySession
from movie_explorer_discovery_service.models.base import utc_now
from movie_explorer_discovery_service.models.discovery_session import DISCOVERY_MODES

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


class DiscoverySessionRepository:
    """
    Append/query/delete of past discovery sessions per user.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_session(
            self,
            user_id: int,
            seed_movie_tmdb_id: int,
            seed_movie_title: str,
            mode: str,
            recommended_movie_ids: Sequence[int],
            seed_movie_poster_path: Optional[str] = None,
            director_id: Optional[int] = None,
            director_name: Optional[str] = None,
            studio_id: Optional[int] = None,
            studio_name: Optional[str] = None
    ) -> DiscoverySession:
        """
        Record one discovery invocation.

        Args:
            user_id: Owning user
            seed_movie_tmdb_id: TMDB id of the seed movie
            seed_movie_title: Seed movie title
            mode: "director" or "studio"
            recommended_movie_ids: Ranked TMDB ids, in display order
            seed_movie_poster_path: Seed movie poster path
            director_id: Director TMDB id (director mode)
            director_name: Director name (director mode)
            studio_id: Studio TMDB id (studio mode)
            studio_name: Studio name (studio mode)

        Returns:
            The stored DiscoverySession
        """
        if mode not in DISCOVERY_MODES:
            raise ValueError(f"Unknown discovery mode: {mode}")

        session = DiscoverySession(
            user_id=user_id,
            seed_movie_tmdb_id=seed_movie_tmdb_id,
            seed_movie_title=seed_movie_title,
            seed_movie_poster_path=seed_movie_poster_path,
            mode=mode,
            director_id=director_id,
            director_name=director_name,
            studio_id=studio_id,
            studio_name=studio_name,
            recommended_movie_ids=list(recommended_movie_ids),
            created_at=utc_now(),
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)

        logger.info(
            f"Stored {mode} discovery session {session.id} for user {user_id} "
            f"({len(session.recommended_movie_ids)} recommendations)"
        )
        return session

    # noinspection PyTypeChecker
    def list_sessions(self, user_id: int, limit: int = DEFAULT_HISTORY_LIMIT) -> List[DiscoverySession]:
        """Get a user's sessions, newest first."""
        return (
            self.db.query(DiscoverySession)
            .filter(DiscoverySession.user_id == user_id)
            .order_by(desc(DiscoverySession.created_at), desc(DiscoverySession.id))
            .limit(limit)
            .all()
        )

    def get_session(self, session_id: int) -> DiscoverySession | None:
        """Get a single session by ID."""
        return self.db.query(DiscoverySession).filter(DiscoverySession.id == session_id).first()

    def delete_session(self, session_id: int) -> bool:
        """
        Delete a session. Deleting an unknown session is a no-op.

        Returns:
            True if deleted, False if not found
        """
        count = self.db.query(DiscoverySession).filter(DiscoverySession.id == session_id).delete()
        self.db.commit()

        return count > 0

    def clear_sessions(self, user_id: int) -> int:
        """
        Delete every session owned by a user.

        Returns:
            Number of deleted sessions
        """
        count = (
            self.db.query(DiscoverySession)
            .filter(DiscoverySession.user_id == user_id)
            .delete()
        )
        self.db.commit()

        logger.info(f"Deleted {count} discovery sessions for user {user_id}")
        return count

    def count_sessions(self, user_id: Optional[int] = None) -> int:
        query = self.db.query(DiscoverySession)

        if user_id is not None:
            query = query.filter(DiscoverySession.user_id == user_id)

        return query.count()
