"""Convert validated TMDB payloads into the normalized internal shapes."""
import re
from datetime import date
from typing import List, Optional

from movie_explorer_discovery_service.schemas import (
    DirectorDetails,
    FilmographyEntry,
    Genre,
    MovieDetails,
    MovieSearchPage,
    MovieSearchResult,
    ProductionCompany,
    StudioDetails,
)
from movie_explorer_discovery_service.services.tmdb_schemas import (
    TMDbCompanyWithMovies,
    TMDbMovie,
    TMDbMoviePage,
    TMDbMovieSummary,
    TMDbPerson,
)

DIRECTOR_JOB = "Director"

# YYYY, YYYY-MM or YYYY-MM-DD, with "-" or "/" separators
_DATE_PREFIX = re.compile(r"^(\d{4})(?!\d)(?:[-/](\d{1,2})(?:[-/](\d{1,2}))?)?")


def _optional(value: Optional[str]) -> Optional[str]:
    """TMDB uses both null and "" for missing strings."""
    return value or None


def release_year_from_date(release_date: Optional[str]) -> int:
    """
    Derive the release year from a TMDB date.

    Accepts ``YYYY-MM-DD`` as well as the partial ``YYYY-MM`` and ``YYYY``
    forms. A month or day that is present must be valid.

    Returns:
        The year, or 0 when the date is absent or unparseable
    """
    if not release_date:
        return 0

    match = _DATE_PREFIX.match(release_date.strip())
    if not match:
        return 0

    year, month, day = match.groups()
    try:
        return date(int(year), int(month or 1), int(day or 1)).year
    except ValueError:
        return 0


def normalize_movie(movie: TMDbMovie) -> MovieDetails:
    """Normalize movie details; the first crew member with job "Director" is the director."""
    director = next(
        (member for member in movie.credits.crew if member.job == DIRECTOR_JOB),
        None,
    )

    return MovieDetails(
        tmdb_id=movie.id,
        title=movie.title,
        original_title=_optional(movie.original_title),
        overview=_optional(movie.overview),
        poster_path=_optional(movie.poster_path),
        backdrop_path=_optional(movie.backdrop_path),
        release_date=movie.release_date or "",
        release_year=release_year_from_date(movie.release_date),
        runtime=movie.runtime or None,
        vote_average=movie.vote_average,
        vote_count=movie.vote_count,
        genres=[Genre(id=g.id, name=g.name) for g in movie.genres],
        director_id=director.id if director else None,
        director_name=_optional(director.name) if director else None,
        production_companies=[
            ProductionCompany(id=c.id, name=c.name, logo_path=_optional(c.logo_path))
            for c in movie.production_companies
        ],
    )


def _filmography_entry(movie: TMDbMovieSummary, job: Optional[str] = None) -> FilmographyEntry:
    return FilmographyEntry(
        tmdb_id=movie.id,
        title=movie.title,
        release_year=release_year_from_date(movie.release_date),
        poster_path=_optional(movie.poster_path),
        vote_average=movie.vote_average,
        vote_count=movie.vote_count,
        job=job,
    )


def normalize_person(person: TMDbPerson) -> DirectorDetails:
    """Normalize a person; only "Director" crew credits make the filmography."""
    filmography: List[FilmographyEntry] = [
        _filmography_entry(credit, job=credit.job)
        for credit in person.movie_credits.crew
        if credit.job == DIRECTOR_JOB
    ]

    return DirectorDetails(
        id=person.id,
        name=person.name,
        profile_path=_optional(person.profile_path),
        biography=_optional(person.biography),
        birthday=_optional(person.birthday),
        place_of_birth=_optional(person.place_of_birth),
        filmography=filmography,
    )


def normalize_company(company: TMDbCompanyWithMovies) -> StudioDetails:
    """Normalize a company and its discover results, keeping the vote-count order."""
    return StudioDetails(
        id=company.id,
        name=company.name,
        logo_path=_optional(company.logo_path),
        description=_optional(company.description),
        headquarters=_optional(company.headquarters),
        homepage=_optional(company.homepage),
        filmography=[_filmography_entry(movie) for movie in company.movies],
    )


def normalize_search_page(page: TMDbMoviePage) -> MovieSearchPage:
    return MovieSearchPage(
        page=page.page,
        total_pages=page.total_pages,
        total_results=page.total_results,
        results=[
            MovieSearchResult(
                tmdb_id=movie.id,
                title=movie.title,
                original_title=_optional(movie.original_title),
                overview=_optional(movie.overview),
                poster_path=_optional(movie.poster_path),
                backdrop_path=_optional(movie.backdrop_path),
                release_date=movie.release_date or "",
                release_year=release_year_from_date(movie.release_date),
                vote_average=movie.vote_average,
                vote_count=movie.vote_count,
                genre_ids=list(movie.genre_ids),
            )
            for movie in page.results
        ],
    )
