"""Relevance scoring"""

from movie_explorer_discovery_service.scoring.relevance import (
    genre_overlap_score,
    popularity_boost,
    rank_recommendations,
    rating_quality_score,
    score_candidate,
    score_filmography,
    year_proximity_score,
)

__all__ = [
    "genre_overlap_score",
    "popularity_boost",
    "rank_recommendations",
    "rating_quality_score",
    "score_candidate",
    "score_filmography",
    "year_proximity_score",
]
