"""Watchlist endpoints."""
import azure.functions as func
import logging

from movie_explorer_discovery_service.blueprints.http_utils import (
    error_response,
    exception_response,
    json_body,
    json_response,
    route_int,
)
from movie_explorer_discovery_service.blueprints.request_models import (
    LibraryMovieRequest,
    WatchlistAddRequest,
    WatchlistUpdateRequest,
)
from movie_explorer_discovery_service.models.database import SessionLocal
from movie_explorer_discovery_service.repos import WatchlistRepository

bp = func.Blueprint()

logger = logging.getLogger(__name__)

WATCHED_FILTERS = {"watched": True, "unwatched": False}


@bp.route(route="users/{user_id:int}/watchlist", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def list_watchlist(req: func.HttpRequest) -> func.HttpResponse:
    """
    List a user's watchlist, most recently added first.

    Query Parameters:
        - status: "watched" or "unwatched" (default: all)
    """
    try:
        user_id = route_int(req, 'user_id')
    except ValueError as e:
        return error_response(str(e), 400)

    status = req.params.get('status')
    if status is not None and status not in WATCHED_FILTERS:
        return error_response("status must be 'watched' or 'unwatched'", 400)

    db = SessionLocal()
    try:
        items = WatchlistRepository(db).list_items(user_id, watched=WATCHED_FILTERS.get(status))
        return json_response({
            "user_id": user_id,
            "count": len(items),
            "items": [item.to_dict() for item in items]
        })
    except Exception as e:
        return exception_response(e, f"listing watchlist for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/watchlist", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def add_to_watchlist(req: func.HttpRequest) -> func.HttpResponse:
    """Add a movie to the watchlist (idempotent)."""
    try:
        user_id = route_int(req, 'user_id')
        body = WatchlistAddRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        item = WatchlistRepository(db).add_item(
            user_id=user_id,
            tmdb_id=body.tmdb_id,
            title=body.title,
            release_year=body.release_year,
            poster_path=body.poster_path,
            priority=body.priority,
            notes=body.notes
        )
        return json_response(item.to_dict(), status_code=201)
    except Exception as e:
        return exception_response(e, f"adding watchlist item for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/watchlist/toggle", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def toggle_watchlist(req: func.HttpRequest) -> func.HttpResponse:
    """Add the movie to the watchlist, or remove it if it is already there."""
    try:
        user_id = route_int(req, 'user_id')
        body = LibraryMovieRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        result = WatchlistRepository(db).toggle_item(
            user_id=user_id,
            tmdb_id=body.tmdb_id,
            title=body.title,
            release_year=body.release_year,
            poster_path=body.poster_path
        )
        return json_response({"tmdb_id": body.tmdb_id, **result})
    except Exception as e:
        return exception_response(e, f"toggling watchlist item for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/watchlist/{movie_id:int}", methods=["PATCH"], auth_level=func.AuthLevel.ANONYMOUS)
def update_watchlist_item(req: func.HttpRequest) -> func.HttpResponse:
    """
    Update watched state, notes or priority of a watchlist item.

    Body fields (all optional): watched, notes, priority. Fields left out of
    the body keep their current value.
    """
    try:
        user_id = route_int(req, 'user_id')
        movie_id = route_int(req, 'movie_id')
        body = WatchlistUpdateRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        repo = WatchlistRepository(db)
        item = repo.get_item(user_id, movie_id)
        if item is None:
            return error_response(f"Movie {movie_id} is not in the watchlist", 404)

        if body.watched is True:
            item = repo.mark_watched(user_id, movie_id)
        elif body.watched is False:
            item = repo.mark_unwatched(user_id, movie_id)

        if {"notes", "priority"} & body.model_fields_set:
            item = repo.update_notes(
                user_id,
                movie_id,
                notes=body.notes if "notes" in body.model_fields_set else item.notes,
                priority=body.priority if "priority" in body.model_fields_set else item.priority
            )

        return json_response(item.to_dict())
    except Exception as e:
        return exception_response(e, f"updating watchlist item {movie_id} for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/watchlist/{movie_id:int}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
def remove_from_watchlist(req: func.HttpRequest) -> func.HttpResponse:
    """Remove a movie from the watchlist; removing an unlisted movie still succeeds."""
    try:
        user_id = route_int(req, 'user_id')
        movie_id = route_int(req, 'movie_id')
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        deleted = WatchlistRepository(db).remove_item(user_id, movie_id)
        return json_response({"tmdb_id": movie_id, "deleted": deleted})
    except Exception as e:
        return exception_response(e, f"removing watchlist item {movie_id} for user {user_id}")
    finally:
        db.close()
