"""Pydantic models for the subset of TMDB v3 payloads the service consumes.

Unknown fields are ignored. Optional fields TMDB sends as ``null`` or omits
default to ``None``; list fields default to empty lists.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TMDbModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TMDbGenre(TMDbModel):
    id: int
    name: str = ""


class TMDbCompany(TMDbModel):
    id: int
    name: str = ""
    logo_path: Optional[str] = None
    description: Optional[str] = None
    headquarters: Optional[str] = None
    homepage: Optional[str] = None


class TMDbCrewMember(TMDbModel):
    id: int
    name: str = ""
    job: Optional[str] = None


class TMDbCredits(TMDbModel):
    crew: List[TMDbCrewMember] = Field(default_factory=list)


class TMDbMovie(TMDbModel):
    """``GET /movie/{id}?append_to_response=credits``"""
    id: int
    title: str
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: List[TMDbGenre] = Field(default_factory=list)
    production_companies: List[TMDbCompany] = Field(default_factory=list)
    credits: TMDbCredits = Field(default_factory=TMDbCredits)


class TMDbMovieSummary(TMDbModel):
    """Movie as listed by discover/search endpoints."""
    id: int
    title: str = ""
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genre_ids: List[int] = Field(default_factory=list)


class TMDbMovieCrewCredit(TMDbMovieSummary):
    """Crew credit as listed by ``/person/{id}/movie_credits``."""
    job: Optional[str] = None


class TMDbPersonMovieCredits(TMDbModel):
    crew: List[TMDbMovieCrewCredit] = Field(default_factory=list)


class TMDbPerson(TMDbModel):
    """``GET /person/{id}?append_to_response=movie_credits``"""
    id: int
    name: str
    profile_path: Optional[str] = None
    biography: Optional[str] = None
    birthday: Optional[str] = None
    place_of_birth: Optional[str] = None
    movie_credits: TMDbPersonMovieCredits = Field(default_factory=TMDbPersonMovieCredits)


class TMDbMoviePage(TMDbModel):
    """Paginated discover/search response."""
    page: int = 1
    total_pages: int = 0
    total_results: int = 0
    results: List[TMDbMovieSummary] = Field(default_factory=list)


class TMDbCompanyWithMovies(TMDbCompany):
    """Company details joined with its discover pages, assembled by the client."""
    movies: List[TMDbMovieSummary] = Field(default_factory=list)
