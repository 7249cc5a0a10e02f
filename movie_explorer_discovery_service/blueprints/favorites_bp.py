"""Favorite movie endpoints."""
import azure.functions as func
import logging

from movie_explorer_discovery_service.blueprints.http_utils import (
    error_response,
    exception_response,
    json_body,
    json_response,
    route_int,
)
from movie_explorer_discovery_service.blueprints.request_models import LibraryMovieRequest
from movie_explorer_discovery_service.models.database import SessionLocal
from movie_explorer_discovery_service.repos import FavoritesRepository

bp = func.Blueprint()

logger = logging.getLogger(__name__)


@bp.route(route="users/{user_id:int}/favorites", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def list_favorites(req: func.HttpRequest) -> func.HttpResponse:
    """List a user's favorites, most recently added first."""
    try:
        user_id = route_int(req, 'user_id')
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        favorites = FavoritesRepository(db).list_favorites(user_id)
        return json_response({
            "user_id": user_id,
            "count": len(favorites),
            "favorites": [favorite.to_dict() for favorite in favorites]
        })
    except Exception as e:
        return exception_response(e, f"listing favorites for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/favorites", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def add_favorite(req: func.HttpRequest) -> func.HttpResponse:
    """Add a movie to a user's favorites (idempotent)."""
    try:
        user_id = route_int(req, 'user_id')
        body = LibraryMovieRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        favorite = FavoritesRepository(db).add_favorite(
            user_id=user_id,
            tmdb_id=body.tmdb_id,
            title=body.title,
            release_year=body.release_year,
            poster_path=body.poster_path
        )
        return json_response(favorite.to_dict(), status_code=201)
    except Exception as e:
        return exception_response(e, f"adding favorite for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/favorites/toggle", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def toggle_favorite(req: func.HttpRequest) -> func.HttpResponse:
    """Add the movie to favorites, or remove it if it is already there."""
    try:
        user_id = route_int(req, 'user_id')
        body = LibraryMovieRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        result = FavoritesRepository(db).toggle_favorite(
            user_id=user_id,
            tmdb_id=body.tmdb_id,
            title=body.title,
            release_year=body.release_year,
            poster_path=body.poster_path
        )
        return json_response({"tmdb_id": body.tmdb_id, **result})
    except Exception as e:
        return exception_response(e, f"toggling favorite for user {user_id}")
    finally:
        db.close()


@bp.route(route="users/{user_id:int}/favorites/{movie_id:int}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
def remove_favorite(req: func.HttpRequest) -> func.HttpResponse:
    """Remove a movie from favorites; removing a non-favorite still succeeds."""
    try:
        user_id = route_int(req, 'user_id')
        movie_id = route_int(req, 'movie_id')
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        deleted = FavoritesRepository(db).remove_favorite(user_id, movie_id)
        return json_response({"tmdb_id": movie_id, "deleted": deleted})
    except Exception as e:
        return exception_response(e, f"removing favorite {movie_id} for user {user_id}")
    finally:
        db.close()
