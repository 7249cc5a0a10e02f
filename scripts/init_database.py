"""
Create the discovery service tables.

Creates every table declared on the shared declarative Base (caches, users,
library and discovery history). Existing tables are left untouched.

Usage:
    python scripts/init_database.py
    python scripts/init_database.py --drop  # recreate from scratch
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging

from movie_explorer_discovery_service.models import Base

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def init_database(engine, drop: bool = False) -> list:
    """
    Create all tables on the given engine.

    Args:
        engine: SQLAlchemy engine
        drop: Drop existing tables first

    Returns:
        Names of the tables declared on the metadata
    """
    if drop:
        logger.warning("Dropping all existing tables")
        Base.metadata.drop_all(engine)

    Base.metadata.create_all(engine)
    table_names = sorted(Base.metadata.tables)
    logger.info(f"Tables ready: {', '.join(table_names)}")
    return table_names


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description='Create the discovery service database tables'
    )
    parser.add_argument(
        '--drop',
        action='store_true',
        help='Drop existing tables before creating them'
    )

    args = parser.parse_args()

    logger.info("="*70)
    logger.info("INITIALIZE DATABASE")
    logger.info("="*70)

    try:
        from movie_explorer_discovery_service.models.database import engine

        init_database(engine, drop=args.drop)

        logger.info("="*70)
        logger.info("✓ DATABASE READY")
        logger.info("="*70)

    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
