"""Normalized internal shapes shared by the adapter, cache and discovery layers.

Optional values are always ``None`` when absent; raw TMDB payloads never
leave the adapter.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DiscoveryMode = Literal["director", "studio"]


class Genre(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class ProductionCompany(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    logo_path: Optional[str] = None


class MovieDetails(BaseModel):
    tmdb_id: int
    title: str
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: str = ""
    release_year: int = 0
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: List[Genre] = Field(default_factory=list)
    director_id: Optional[int] = None
    director_name: Optional[str] = None
    production_companies: List[ProductionCompany] = Field(default_factory=list)

    @property
    def genre_ids(self) -> List[int]:
        return [genre.id for genre in self.genres]


class FilmographyEntry(BaseModel):
    tmdb_id: int
    title: str
    release_year: int = 0
    poster_path: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    job: Optional[str] = None  # Only set for director credits


class DirectorDetails(BaseModel):
    id: int
    name: str
    profile_path: Optional[str] = None
    biography: Optional[str] = None
    birthday: Optional[str] = None
    place_of_birth: Optional[str] = None
    filmography: List[FilmographyEntry] = Field(default_factory=list)


class StudioDetails(BaseModel):
    id: int
    name: str
    logo_path: Optional[str] = None
    description: Optional[str] = None
    headquarters: Optional[str] = None
    homepage: Optional[str] = None
    filmography: List[FilmographyEntry] = Field(default_factory=list)


class MovieSearchResult(BaseModel):
    tmdb_id: int
    title: str
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: str = ""
    release_year: int = 0
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genre_ids: List[int] = Field(default_factory=list)


class MovieSearchPage(BaseModel):
    page: int
    total_pages: int
    total_results: int
    results: List[MovieSearchResult] = Field(default_factory=list)


class RecommendedMovie(BaseModel):
    tmdb_id: int
    title: str
    poster_path: Optional[str] = None
    release_year: int
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None


class ScoreBreakdown(BaseModel):
    year_proximity: int
    rating_quality: int
    genre_overlap: int
    popularity_boost: int


class ScoredRecommendation(BaseModel):
    movie: RecommendedMovie
    score: int
    score_breakdown: ScoreBreakdown


class DirectorSummary(BaseModel):
    id: int
    name: str
    profile_path: Optional[str] = None
    biography: Optional[str] = None
    birthday: Optional[str] = None
    place_of_birth: Optional[str] = None
    total_films: int


class StudioSummary(BaseModel):
    id: int
    name: str
    logo_path: Optional[str] = None
    description: Optional[str] = None
    headquarters: Optional[str] = None
    total_films: int


class DirectorDiscoveryResult(BaseModel):
    mode: Literal["director"] = "director"
    seed_movie: MovieDetails
    director: DirectorSummary
    recommendations: List[ScoredRecommendation]


class StudioDiscoveryResult(BaseModel):
    mode: Literal["studio"] = "studio"
    seed_movie: MovieDetails
    studio: StudioSummary
    recommendations: List[ScoredRecommendation]
