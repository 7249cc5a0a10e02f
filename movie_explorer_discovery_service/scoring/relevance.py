"""Relevance scoring of candidate movies against a seed movie.

The total score is the plain sum of four integer components:

- year proximity (2-30): closer release years score higher
- rating quality (5-25): TMDB vote average bands
- genre overlap (0-30): 10 per shared genre id, capped
- popularity boost (0 or 15): more than 1000 votes

Filmography entries carry no genre ids, so when a director's or studio's
filmography is scored the genre term is always 0.
"""
import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np

from movie_explorer_discovery_service.schemas import (
    FilmographyEntry,
    RecommendedMovie,
    ScoreBreakdown,
    ScoredRecommendation,
)

logger = logging.getLogger(__name__)

# (max year difference, score), checked in order
YEAR_PROXIMITY_STEPS = (
    (0, 30),
    (1, 27),
    (2, 24),
    (3, 21),
    (4, 18),
    (5, 15),
    (10, 10),
    (15, 5),
)
YEAR_PROXIMITY_FLOOR = 2

# (min vote average, score), checked in order
RATING_QUALITY_BANDS = (
    (8.0, 25),
    (7.0, 20),
    (6.0, 15),
    (5.0, 10),
)
RATING_QUALITY_FLOOR = 5

GENRE_POINTS_PER_MATCH = 10
GENRE_OVERLAP_CAP = 30

POPULARITY_VOTE_THRESHOLD = 1000
POPULARITY_BOOST = 15


def year_proximity_score(seed_year: int, candidate_year: int) -> int:
    """Step score on the absolute difference in release years."""
    diff = abs(seed_year - candidate_year)
    for max_diff, score in YEAR_PROXIMITY_STEPS:
        if diff <= max_diff:
            return score
    return YEAR_PROXIMITY_FLOOR


def rating_quality_score(vote_average: Optional[float]) -> int:
    """Band score on the TMDB vote average; a missing rating counts as 0."""
    rating = vote_average or 0.0
    for min_rating, score in RATING_QUALITY_BANDS:
        if rating >= min_rating:
            return score
    return RATING_QUALITY_FLOOR


def genre_overlap_score(seed_genre_ids: Iterable[int], candidate_genre_ids: Iterable[int]) -> int:
    """10 points per shared genre id, capped at 30."""
    overlap = len(set(seed_genre_ids) & set(candidate_genre_ids))
    return min(overlap * GENRE_POINTS_PER_MATCH, GENRE_OVERLAP_CAP)


def popularity_boost(vote_count: Optional[int]) -> int:
    """Flat boost for movies with more than 1000 votes."""
    return POPULARITY_BOOST if (vote_count or 0) > POPULARITY_VOTE_THRESHOLD else 0


def score_candidate(
        seed_year: int,
        candidate: FilmographyEntry,
        seed_genre_ids: Sequence[int] = (),
        candidate_genre_ids: Sequence[int] = ()
) -> ScoredRecommendation:
    """
    Score one candidate against the seed.

    Args:
        seed_year: Seed movie release year
        candidate: Filmography entry to score
        seed_genre_ids: Seed genre ids (only used when candidate genres are known)
        candidate_genre_ids: Candidate genre ids; empty for filmography entries

    Returns:
        ScoredRecommendation with the total and each component
    """
    breakdown = ScoreBreakdown(
        year_proximity=year_proximity_score(seed_year, candidate.release_year),
        rating_quality=rating_quality_score(candidate.vote_average),
        genre_overlap=genre_overlap_score(seed_genre_ids, candidate_genre_ids),
        popularity_boost=popularity_boost(candidate.vote_count),
    )
    total = (
        breakdown.year_proximity
        + breakdown.rating_quality
        + breakdown.genre_overlap
        + breakdown.popularity_boost
    )

    return ScoredRecommendation(
        movie=RecommendedMovie(
            tmdb_id=candidate.tmdb_id,
            title=candidate.title,
            poster_path=candidate.poster_path,
            release_year=candidate.release_year,
            vote_average=candidate.vote_average,
            vote_count=candidate.vote_count,
        ),
        score=total,
        score_breakdown=breakdown,
    )


def rank_recommendations(scored: Sequence[ScoredRecommendation]) -> List[ScoredRecommendation]:
    """
    Sort by score, highest first.

    Ties keep their input order (stable sort), which for TMDB filmographies
    is the order the source returned them in.
    """
    if not scored:
        return []

    scores = np.array([item.score for item in scored])
    order = np.argsort(-scores, kind="stable")
    return [scored[idx] for idx in order]


def score_filmography(
        seed_movie_id: int,
        seed_year: int,
        filmography: Iterable[FilmographyEntry]
) -> List[ScoredRecommendation]:
    """
    Score and rank a director's or studio's filmography against the seed.

    The seed itself and entries without a usable release year are dropped.
    """
    candidates = [
        entry for entry in filmography
        if entry.tmdb_id != seed_movie_id and entry.release_year > 0
    ]
    scored = [score_candidate(seed_year, entry) for entry in candidates]

    logger.debug(f"Scored {len(scored)} candidates against seed {seed_movie_id}")
    return rank_recommendations(scored)
