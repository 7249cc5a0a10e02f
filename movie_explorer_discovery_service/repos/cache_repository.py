"""Repositories for cached TMDB movies, directors and studios."""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from movie_explorer_discovery_service.config import get_cache_ttl_days
from movie_explorer_discovery_service.models import CachedDirector, CachedMovie, CachedStudio
from movie_explorer_discovery_service.models.base import as_utc, utc_now
from movie_explorer_discovery_service.schemas import DirectorDetails, MovieDetails, StudioDetails

logger = logging.getLogger(__name__)

DetailsT = TypeVar("DetailsT", bound=BaseModel)

Clock = Callable[[], datetime]


class CacheRepository(Generic[DetailsT]):
    """
    Time-to-live cache keyed by a unique external (TMDB) id.

    A row older than the TTL is reported as a miss but left in place; the next
    ``put`` for that id overwrites it.
    """

    model: Type[Any]
    key_column: str
    entity: str

    def __init__(
            self,
            db: Session,
            ttl: Optional[timedelta] = None,
            clock: Optional[Clock] = None
    ):
        self.db = db
        self.ttl = ttl if ttl is not None else timedelta(days=get_cache_ttl_days())
        self.clock = clock or utc_now

    def _to_details(self, record) -> DetailsT:
        raise NotImplementedError

    def _to_fields(self, details: DetailsT) -> Dict[str, Any]:
        raise NotImplementedError

    def _timestamp_fields(self, now: datetime) -> Dict[str, Any]:
        return {"cached_at": now}

    def _find(self, external_id: int):
        key = getattr(self.model, self.key_column)
        return self.db.query(self.model).filter(key == external_id).first()

    def is_stale(self, record) -> bool:
        """True when the record was cached longer than the TTL ago."""
        return self.clock() - as_utc(record.cached_at) > self.ttl

    def get(self, external_id: int) -> Optional[DetailsT]:
        """
        Look up a cached entity.

        Args:
            external_id: TMDB id

        Returns:
            Normalized details, or None when absent or stale
        """
        record = self._find(external_id)
        if record is None:
            return None

        if self.is_stale(record):
            logger.info(f"Stale {self.entity} cache entry for {external_id}")
            return None

        logger.debug(f"{self.entity} cache hit for {external_id}")
        return self._to_details(record)

    def put(self, external_id: int, details: DetailsT):
        """
        Insert or update the cached entity and refresh its timestamps.

        Args:
            external_id: TMDB id
            details: Normalized details to store

        Returns:
            The stored ORM record
        """
        fields = self._to_fields(details)
        fields.update(self._timestamp_fields(self.clock()))

        existing = self._find(external_id)
        if existing is not None:
            record = self._update(existing, fields)
        else:
            record = self.model(**{self.key_column: external_id}, **fields)
            self.db.add(record)
            try:
                self.db.commit()
            except IntegrityError:
                # Another writer inserted the same id first; last write wins
                self.db.rollback()
                logger.info(f"Concurrent {self.entity} cache insert for {external_id}, updating instead")
                record = self._update(self._find(external_id), fields)

        self.db.refresh(record)
        logger.info(f"Cached {self.entity} {external_id}")
        return record

    def _update(self, record, fields: Dict[str, Any]):
        for name, value in fields.items():
            setattr(record, name, value)
        self.db.commit()
        return record

    def count(self) -> int:
        """Count cached rows, stale ones included."""
        return self.db.query(self.model).count()


class MovieCacheRepository(CacheRepository[MovieDetails]):
    """Movie details cache keyed by TMDB movie id."""

    model = CachedMovie
    key_column = "tmdb_id"
    entity = "movie"

    def _timestamp_fields(self, now: datetime) -> Dict[str, Any]:
        return {"cached_at": now, "last_accessed_at": now}

    def _to_fields(self, details: MovieDetails) -> Dict[str, Any]:
        data = details.model_dump()
        data.pop("tmdb_id")
        return data

    def _to_details(self, record: CachedMovie) -> MovieDetails:
        return MovieDetails(
            tmdb_id=record.tmdb_id,
            title=record.title,
            original_title=record.original_title,
            overview=record.overview,
            poster_path=record.poster_path,
            backdrop_path=record.backdrop_path,
            release_date=record.release_date or "",
            release_year=record.release_year or 0,
            runtime=record.runtime,
            vote_average=record.vote_average,
            vote_count=record.vote_count,
            genres=record.genres or [],
            director_id=record.director_id,
            director_name=record.director_name,
            production_companies=record.production_companies or [],
        )


class DirectorCacheRepository(CacheRepository[DirectorDetails]):
    """Director filmography cache keyed by TMDB person id."""

    model = CachedDirector
    key_column = "tmdb_person_id"
    entity = "director"

    def _to_fields(self, details: DirectorDetails) -> Dict[str, Any]:
        data = details.model_dump()
        data.pop("id")
        return data

    def _to_details(self, record: CachedDirector) -> DirectorDetails:
        return DirectorDetails(
            id=record.tmdb_person_id,
            name=record.name,
            profile_path=record.profile_path,
            biography=record.biography,
            birthday=record.birthday,
            place_of_birth=record.place_of_birth,
            filmography=record.filmography or [],
        )


class StudioCacheRepository(CacheRepository[StudioDetails]):
    """Studio filmography cache keyed by TMDB company id."""

    model = CachedStudio
    key_column = "tmdb_company_id"
    entity = "studio"

    def _to_fields(self, details: StudioDetails) -> Dict[str, Any]:
        data = details.model_dump()
        data.pop("id")
        return data

    def _to_details(self, record: CachedStudio) -> StudioDetails:
        return StudioDetails(
            id=record.tmdb_company_id,
            name=record.name,
            logo_path=record.logo_path,
            description=record.description,
            headquarters=record.headquarters,
            homepage=record.homepage,
            filmography=record.filmography or [],
        )
