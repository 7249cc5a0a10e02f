"""Client for the TMDB v3 API (movies, people, companies)."""
from typing import Any, Dict, List, Optional, Type, TypeVar
import logging

import requests
from pydantic import BaseModel, ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from movie_explorer_discovery_service.config import (
    get_studio_max_pages,
    get_tmdb_api_key,
    get_tmdb_base_url,
    get_tmdb_max_retries,
    get_tmdb_timeout,
)
from movie_explorer_discovery_service.exceptions import ConfigurationError, FetchError
from movie_explorer_discovery_service.services.tmdb_schemas import (
    TMDbCompany,
    TMDbCompanyWithMovies,
    TMDbMovie,
    TMDbMoviePage,
    TMDbMovieSummary,
    TMDbPerson,
)

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class TMDbClient:
    """Client for the TMDB v3 API.

    Every call either returns a validated payload or raises: a missing API key
    raises ConfigurationError, anything else that goes wrong on the wire
    (non-2xx status, connection failure, timeout, malformed JSON) raises
    FetchError. Nothing is cached here; caching is the caller's job.
    """

    def __init__(
            self,
            api_key: Optional[str] = None,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
            max_retries: Optional[int] = None,
            studio_max_pages: Optional[int] = None
    ):
        self._api_key = api_key
        self.base_url = (base_url or get_tmdb_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_tmdb_timeout()
        self.studio_max_pages = studio_max_pages or get_studio_max_pages()

        # Transport retries are opt-in; failures surface to the caller by default
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries if max_retries is not None else get_tmdb_max_retries(),
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        # noinspection HttpUrlsUsage
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key or get_tmdb_api_key()

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict:
        """GET an endpoint and return the decoded JSON body."""
        api_key = self.api_key
        if not api_key:
            raise ConfigurationError("TMDB_API_KEY not configured")

        url = f"{self.base_url}{endpoint}"
        query = {"api_key": api_key, **(params or {})}

        # requests exceptions carry the full URL, api_key included, so they are
        # neither logged nor chained
        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.Timeout:
            logger.warning(f"TMDB request timed out: {endpoint}")
            raise FetchError(f"TMDB API timeout: {endpoint}") from None
        except requests.RequestException as e:
            logger.warning(f"TMDB request failed: {endpoint}: {type(e).__name__}")
            raise FetchError(f"TMDB API unreachable: {endpoint} ({type(e).__name__})") from None

        if not response.ok:
            logger.warning(f"TMDB API error for {endpoint}: {response.status_code} {response.reason}")
            raise FetchError(
                f"TMDB API error: {response.status_code} {response.reason}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"TMDB API returned invalid JSON for {endpoint}") from e

    def _get_model(
            self,
            model: Type[PayloadT],
            endpoint: str,
            params: Optional[Dict[str, Any]] = None
    ) -> PayloadT:
        """GET an endpoint and validate the body against a payload model."""
        data = self._get(endpoint, params)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise FetchError(f"Unexpected TMDB payload for {endpoint}: {e.error_count()} invalid field(s)") from e

    # ===== MOVIE ENDPOINTS =====

    def fetch_movie(self, movie_id: int) -> TMDbMovie:
        """Fetch movie details with credits in a single request."""
        return self._get_model(TMDbMovie, f"/movie/{movie_id}", {"append_to_response": "credits"})

    def search_movies(self, query: str, page: int = 1) -> TMDbMoviePage:
        """Search movies by title, excluding adult titles."""
        return self._get_model(
            TMDbMoviePage,
            "/search/movie",
            {"query": query, "page": str(page), "include_adult": "false"}
        )

    # ===== PERSON ENDPOINTS =====

    def fetch_person(self, person_id: int) -> TMDbPerson:
        """Fetch person details with movie credits in a single request."""
        return self._get_model(TMDbPerson, f"/person/{person_id}", {"append_to_response": "movie_credits"})

    # ===== COMPANY ENDPOINTS =====

    def fetch_company(self, company_id: int) -> TMDbCompanyWithMovies:
        """
        Fetch company details and its movies, most-voted first.

        Discover results are paginated; at most ``studio_max_pages`` pages are
        requested.

        Args:
            company_id: TMDB company ID

        Returns:
            Company payload with the concatenated discover results
        """
        company = self._get_model(TMDbCompany, f"/company/{company_id}")

        movies: List[TMDbMovieSummary] = []
        pages_fetched = 0
        page = 1
        while page <= self.studio_max_pages:
            result = self._get_model(
                TMDbMoviePage,
                "/discover/movie",
                {
                    "with_companies": str(company_id),
                    "sort_by": "vote_count.desc",
                    "page": str(page),
                }
            )
            movies.extend(result.results)
            pages_fetched = page

            if page >= result.total_pages:
                break
            page += 1

        logger.info(f"Fetched {len(movies)} movies for company {company_id} ({pages_fetched} page(s))")
        return TMDbCompanyWithMovies(**company.model_dump(), movies=movies)
