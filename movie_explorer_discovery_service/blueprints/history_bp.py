"""Discovery history endpoints."""
import azure.functions as func
import logging

from movie_explorer_discovery_service.blueprints.http_utils import (
    error_response,
    exception_response,
    json_response,
    query_int,
    route_int,
)
from movie_explorer_discovery_service.models.database import SessionLocal
from movie_explorer_discovery_service.repos import DiscoverySessionRepository
from movie_explorer_discovery_service.repos.session_repository import DEFAULT_HISTORY_LIMIT

bp = func.Blueprint()

logger = logging.getLogger(__name__)

MAX_HISTORY_LIMIT = 100


@bp.route(route="users/{user_id:int}/discovery-sessions", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def list_discovery_sessions(req: func.HttpRequest) -> func.HttpResponse:
    """
    List a user's discovery sessions, newest first.

    Query Parameters:
        - limit: Maximum sessions to return (default: 20, max: 100)
    """
    try:
        user_id = route_int(req, 'user_id')
        limit = query_int(req, 'limit', default=DEFAULT_HISTORY_LIMIT)
    except ValueError as e:
        return error_response(str(e), 400)

    if limit < 1 or limit > MAX_HISTORY_LIMIT:
        return error_response(f"limit must be between 1 and {MAX_HISTORY_LIMIT}", 400)

    db = SessionLocal()
    try:
        sessions = DiscoverySessionRepository(db).list_sessions(user_id, limit=limit)
        return json_response({
            "user_id": user_id,
            "count": len(sessions),
            "sessions": [session.to_dict() for session in sessions]
        })
    except Exception as e:
        return exception_response(e, f"listing discovery sessions for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/discovery-sessions", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
def clear_discovery_sessions(req: func.HttpRequest) -> func.HttpResponse:
    """Delete all of a user's discovery sessions."""
    try:
        user_id = route_int(req, 'user_id')
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        deleted = DiscoverySessionRepository(db).clear_sessions(user_id)
        return json_response({"user_id": user_id, "deleted": deleted})
    except Exception as e:
        return exception_response(e, f"clearing discovery sessions for user {user_id}")
    finally:
        db.close()


@bp.route(route="discovery-sessions/{session_id:int}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_discovery_session(req: func.HttpRequest) -> func.HttpResponse:
    """Get a single discovery session."""
    try:
        session_id = route_int(req, 'session_id')
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        session = DiscoverySessionRepository(db).get_session(session_id)
        if session is None:
            return error_response(f"Discovery session {session_id} not found", 404)
        return json_response(session.to_dict())
    except Exception as e:
        return exception_response(e, f"getting discovery session {session_id}")
    finally:
        db.close()


@bp.route(route="discovery-sessions/{session_id:int}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
def delete_discovery_session(req: func.HttpRequest) -> func.HttpResponse:
    """Delete a discovery session; deleting an unknown session still succeeds."""
    try:
        session_id = route_int(req, 'session_id')
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        deleted = DiscoverySessionRepository(db).delete_session(session_id)
        return json_response({"session_id": session_id, "deleted": deleted})
    except Exception as e:
        return exception_response(e, f"deleting discovery session {session_id}")
    finally:
        db.close()
