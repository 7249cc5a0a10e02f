"""Discover movies by the seed movie's director or studio."""
import azure.functions as func
import logging

from sqlalchemy.orm import Session

from movie_explorer_discovery_service.blueprints.http_utils import (
    error_response,
    exception_response,
    json_response,
    query_int,
    route_int,
)
from movie_explorer_discovery_service.models.database import SessionLocal
from movie_explorer_discovery_service.repos import (
    DirectorCacheRepository,
    DiscoverySessionRepository,
    MovieCacheRepository,
    StudioCacheRepository,
)
from movie_explorer_discovery_service.services import DiscoveryService, TMDbClient

# Initialize blueprint
bp = func.Blueprint()

# Shared HTTP client (singleton pattern); everything else is built per request
tmdb_client = TMDbClient()

logger = logging.getLogger(__name__)


def _build_discovery_service(db: Session) -> DiscoveryService:
    return DiscoveryService(
        movie_cache=MovieCacheRepository(db),
        director_cache=DirectorCacheRepository(db),
        studio_cache=StudioCacheRepository(db),
        session_repository=DiscoverySessionRepository(db),
        tmdb_client=tmdb_client,
    )


@bp.route(route="movies/search", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def search_movies(req: func.HttpRequest) -> func.HttpResponse:
    """
    Search movies by title.

    Query Parameters:
        - query: Search text (required)
        - page: Result page (default: 1)
    """
    try:
        query = (req.params.get('query') or '').strip()
        if not query:
            return error_response("query is required", 400)

        page = query_int(req, 'page', default=1)
        if page < 1 or page > 500:
            return error_response("page must be between 1 and 500", 400)
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        service = _build_discovery_service(db)
        results = service.search_movies(query, page=page)
        return json_response(results.model_dump(mode="json"))
    except Exception as e:
        return exception_response(e, "searching movies")
    finally:
        db.close()


@bp.route(route="movies/{movie_id:int}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_movie(req: func.HttpRequest) -> func.HttpResponse:
    """Get (cached) details for a single movie."""
    try:
        movie_id = route_int(req, 'movie_id')
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        service = _build_discovery_service(db)
        movie = service.get_movie_details(movie_id)
        return json_response(movie.model_dump(mode="json"))
    except Exception as e:
        return exception_response(e, f"getting movie {movie_id}")
    finally:
        db.close()


@bp.route(route="movies/{movie_id:int}/discover/{mode}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def discover_movies(req: func.HttpRequest) -> func.HttpResponse:
    """
    Recommend movies by the seed movie's director or primary studio.

    Route Parameters:
        - movie_id: TMDB id of the seed movie
        - mode: "director" or "studio"

    Query Parameters:
        - user_id: If provided, the discovery is saved to the user's history
    """
    try:
        movie_id = route_int(req, 'movie_id')
        user_id = query_int(req, 'user_id')
    except ValueError as e:
        return error_response(str(e), 400)

    mode = req.route_params.get('mode')
    if mode not in ("director", "studio"):
        return error_response("mode must be 'director' or 'studio'", 400)

    db = SessionLocal()
    try:
        service = _build_discovery_service(db)
        if mode == "director":
            result = service.discover_by_director(movie_id, user_id=user_id)
        else:
            result = service.discover_by_studio(movie_id, user_id=user_id)

        return json_response(result.model_dump(mode="json"))
    except Exception as e:
        return exception_response(e, f"discovering by {mode} for movie {movie_id}")
    finally:
        db.close()


# noinspection PyUnusedLocal
@bp.route(route="discovery/health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint."""
    return json_response({
        "status": "healthy",
        "service": "movie-explorer-discovery-service",
        "version": "1.0.0"
    })
