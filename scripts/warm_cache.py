"""
Pre-fill the TMDB cache for a list of seed movies.

For each seed movie the movie details are cached, then (per requested mode)
its director's and primary studio's filmographies, so the first real
discovery request for those seeds is served from the cache.

Usage:
    # Warm a few seeds by id
    python scripts/warm_cache.py --ids 27205 155 550

    # Warm seeds listed in a CSV file (column: tmdb_id)
    python scripts/warm_cache.py --ids-file data/seeds.csv --modes director
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from movie_explorer_discovery_service.exceptions import FetchError
from movie_explorer_discovery_service.services import DiscoveryService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

MODES = ("director", "studio")


def load_seed_ids(
    ids: Optional[Iterable[int]] = None,
    ids_file: Optional[Path] = None,
    column: str = 'tmdb_id'
) -> List[int]:
    """
    Collect seed movie ids from the command line and/or a CSV file.

    Args:
        ids: Ids given directly
        ids_file: CSV file with one seed per row
        column: Name of the id column in the CSV file

    Returns:
        Unique ids, in first-seen order
    """
    seed_ids = list(ids or [])

    if ids_file is not None:
        if not ids_file.exists():
            raise FileNotFoundError(f"Seed file not found: {ids_file}")

        seeds_df = pd.read_csv(ids_file)
        if column not in seeds_df.columns:
            raise ValueError(f"Seed file {ids_file} has no '{column}' column")

        seed_ids.extend(int(value) for value in seeds_df[column].dropna())
        logger.info(f"Loaded {len(seeds_df)} seeds from {ids_file}")

    return list(dict.fromkeys(seed_ids))


def warm_cache(
    service: DiscoveryService,
    seed_ids: Iterable[int],
    modes: Iterable[str] = MODES
) -> Dict[str, int]:
    """
    Resolve every seed (and its director/studio) through the cache.

    A fetch failure skips that seed; a configuration error stops the run.

    Returns:
        Counts of resolved movies, directors, studios and failed seeds
    """
    modes = set(modes)
    stats = {'movies': 0, 'directors': 0, 'studios': 0, 'failed': 0}

    for movie_id in seed_ids:
        try:
            movie = service.get_movie_details(movie_id)
            stats['movies'] += 1

            if 'director' in modes and movie.director_id is not None:
                service.get_director_details(movie.director_id)
                stats['directors'] += 1

            if 'studio' in modes and movie.production_companies:
                service.get_studio_details(movie.production_companies[0].id)
                stats['studios'] += 1

        except FetchError as e:
            logger.warning(f"Failed to warm movie {movie_id}: {e}")
            stats['failed'] += 1

    return stats


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description='Pre-fill the TMDB cache for seed movies'
    )
    parser.add_argument(
        '--ids',
        type=int,
        nargs='*',
        default=[],
        help='Seed TMDB movie ids'
    )
    parser.add_argument(
        '--ids-file',
        type=str,
        default=None,
        help='CSV file with a tmdb_id column'
    )
    parser.add_argument(
        '--modes',
        type=str,
        default='director,studio',
        help='Comma-separated discovery modes to warm: director,studio (default: both)'
    )

    args = parser.parse_args()

    modes = [mode.strip() for mode in args.modes.split(',') if mode.strip()]
    unknown = set(modes) - set(MODES)
    if unknown:
        parser.error(f"Unknown mode(s): {', '.join(sorted(unknown))}")

    ids_file = project_root / args.ids_file if args.ids_file else None
    seed_ids = load_seed_ids(args.ids, ids_file)
    if not seed_ids:
        parser.error("No seed ids given (use --ids or --ids-file)")

    logger.info("="*70)
    logger.info("WARM DISCOVERY CACHE")
    logger.info("="*70)
    logger.info(f"Seeds: {len(seed_ids)}")
    logger.info(f"Modes: {', '.join(modes)}")

    from movie_explorer_discovery_service.blueprints.discovery_bp import _build_discovery_service
    from movie_explorer_discovery_service.models.database import SessionLocal

    db = SessionLocal()
    try:
        stats = warm_cache(_build_discovery_service(db), seed_ids, modes)

        logger.info("="*70)
        logger.info("✓ CACHE WARM COMPLETE")
        logger.info("="*70)
        logger.info(f"Movies: {stats['movies']}")
        logger.info(f"Directors: {stats['directors']}")
        logger.info(f"Studios: {stats['studios']}")
        logger.info(f"Failed: {stats['failed']}")

    except Exception as e:
        logger.error(f"Error warming cache: {str(e)}", exc_info=True)
        sys.exit(1)
    finally:
        db.close()


if __name__ == '__main__':
    main()
