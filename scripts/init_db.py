"""Create or upgrade the bracket database and check the expected tables exist."""

import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from racquetrivals.db.engine import make_engine
from racquetrivals.models import Base

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def upgrade_db(target_revision: str = "head") -> None:
    alembic_cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    command.upgrade(alembic_cfg, target_revision)


def missing_tables() -> list[str]:
    """Return model tables absent from the configured database."""
    engine = make_engine()
    try:
        present = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    return sorted(set(Base.metadata.tables) - present)


def main() -> int:
    upgrade_db()
    missing = missing_tables()
    if missing:
        logger.error(f"Tables missing after upgrade: {', '.join(missing)}")
        return 1
    logger.info(f"Database ready: {', '.join(sorted(Base.metadata.tables))}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
