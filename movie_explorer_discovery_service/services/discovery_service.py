"""Service for director- and studio-based movie discovery."""
import logging
from typing import Callable, List, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from movie_explorer_discovery_service.exceptions import NoDirectorFoundError, NoStudioFoundError
from movie_explorer_discovery_service.repos import (
    CacheRepository,
    DirectorCacheRepository,
    DiscoverySessionRepository,
    MovieCacheRepository,
    StudioCacheRepository,
)
from movie_explorer_discovery_service.schemas import (
    DirectorDetails,
    DirectorDiscoveryResult,
    DirectorSummary,
    MovieDetails,
    MovieSearchPage,
    ScoredRecommendation,
    StudioDetails,
    StudioDiscoveryResult,
    StudioSummary,
)
from movie_explorer_discovery_service.scoring import score_filmography
from movie_explorer_discovery_service.services.tmdb_client import TMDbClient
from movie_explorer_discovery_service.services.tmdb_normalizer import (
    normalize_company,
    normalize_movie,
    normalize_person,
    normalize_search_page,
)

logger = logging.getLogger(__name__)

DetailsT = TypeVar("DetailsT", bound=BaseModel)
PayloadT = TypeVar("PayloadT")


class DiscoveryService:
    """
    Resolves a seed movie to its director or primary studio and ranks the
    rest of that filmography against the seed.

    Every lookup goes through the cache first; a miss fetches from TMDB,
    normalizes and writes the result back. The service holds no state of its
    own between calls.
    """

    def __init__(
            self,
            movie_cache: MovieCacheRepository,
            director_cache: DirectorCacheRepository,
            studio_cache: StudioCacheRepository,
            session_repository: DiscoverySessionRepository,
            tmdb_client: TMDbClient
    ):
        self.movie_cache = movie_cache
        self.director_cache = director_cache
        self.studio_cache = studio_cache
        self.session_repository = session_repository
        self.tmdb_client = tmdb_client

    def _resolve_with_cache(
            self,
            cache: CacheRepository[DetailsT],
            key: int,
            fetch: Callable[[int], PayloadT],
            normalize: Callable[[PayloadT], DetailsT]
    ) -> DetailsT:
        """Return cached details for ``key``, or fetch, normalize and cache them."""
        cached = cache.get(key)
        if cached is not None:
            return cached

        logger.info(f"{cache.entity} cache miss for {key}, fetching from TMDB")
        details = normalize(fetch(key))
        cache.put(key, details)
        return details

    # ===== ENTITY LOOKUPS =====

    def get_movie_details(self, movie_id: int) -> MovieDetails:
        return self._resolve_with_cache(
            self.movie_cache, movie_id, self.tmdb_client.fetch_movie, normalize_movie
        )

    def get_director_details(self, person_id: int) -> DirectorDetails:
        return self._resolve_with_cache(
            self.director_cache, person_id, self.tmdb_client.fetch_person, normalize_person
        )

    def get_studio_details(self, company_id: int) -> StudioDetails:
        return self._resolve_with_cache(
            self.studio_cache, company_id, self.tmdb_client.fetch_company, normalize_company
        )

    def search_movies(self, query: str, page: int = 1) -> MovieSearchPage:
        """Search TMDB by title. Search results are not cached."""
        return normalize_search_page(self.tmdb_client.search_movies(query, page=page))

    # ===== DISCOVERY =====

    def discover_by_director(self, seed_movie_id: int, user_id: Optional[int] = None) -> DirectorDiscoveryResult:
        """
        Recommend other films by the seed movie's director.

        Args:
            seed_movie_id: TMDB id of the seed movie
            user_id: If provided, the lookup is recorded in the user's history

        Returns:
            Seed movie, director summary and ranked recommendations

        Raises:
            NoDirectorFoundError: if the seed movie has no credited director
        """
        seed = self.get_movie_details(seed_movie_id)
        if seed.director_id is None:
            raise NoDirectorFoundError(seed_movie_id)

        director = self.get_director_details(seed.director_id)
        recommendations = score_filmography(seed_movie_id, seed.release_year, director.filmography)

        logger.info(
            f"Director discovery for {seed_movie_id} ({director.name}): "
            f"{len(recommendations)} recommendations"
        )

        if user_id is not None:
            self._save_session(
                user_id,
                seed,
                "director",
                recommendations,
                director_id=director.id,
                director_name=director.name,
            )

        return DirectorDiscoveryResult(
            seed_movie=seed,
            director=DirectorSummary(
                id=director.id,
                name=director.name,
                profile_path=director.profile_path,
                biography=director.biography,
                birthday=director.birthday,
                place_of_birth=director.place_of_birth,
                total_films=len(director.filmography),
            ),
            recommendations=recommendations,
        )

    def discover_by_studio(self, seed_movie_id: int, user_id: Optional[int] = None) -> StudioDiscoveryResult:
        """
        Recommend other films by the seed movie's primary (first listed) studio.

        Raises:
            NoStudioFoundError: if the seed movie has no production company
        """
        seed = self.get_movie_details(seed_movie_id)
        if not seed.production_companies:
            raise NoStudioFoundError(seed_movie_id)

        primary_company = seed.production_companies[0]
        studio = self.get_studio_details(primary_company.id)
        recommendations = score_filmography(seed_movie_id, seed.release_year, studio.filmography)

        logger.info(
            f"Studio discovery for {seed_movie_id} ({studio.name}): "
            f"{len(recommendations)} recommendations"
        )

        if user_id is not None:
            self._save_session(
                user_id,
                seed,
                "studio",
                recommendations,
                studio_id=studio.id,
                studio_name=studio.name,
            )

        return StudioDiscoveryResult(
            seed_movie=seed,
            studio=StudioSummary(
                id=studio.id,
                name=studio.name,
                logo_path=studio.logo_path,
                description=studio.description,
                headquarters=studio.headquarters,
                total_films=len(studio.filmography),
            ),
            recommendations=recommendations,
        )

    def _save_session(
            self,
            user_id: int,
            seed: MovieDetails,
            mode: str,
            recommendations: List[ScoredRecommendation],
            **attribution
    ) -> None:
        """Persist the session; a failed write is logged and does not fail the discovery."""
        try:
            self.session_repository.create_session(
                user_id=user_id,
                seed_movie_tmdb_id=seed.tmdb_id,
                seed_movie_title=seed.title,
                seed_movie_poster_path=seed.poster_path,
                mode=mode,
                recommended_movie_ids=[r.movie.tmdb_id for r in recommendations],
                **attribution
            )
        except SQLAlchemyError:
            self.session_repository.db.rollback()
            logger.exception(f"Failed to save {mode} discovery session for user {user_id}")
