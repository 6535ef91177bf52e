from logging.config import fileConfig
from pathlib import Path

from alembic import context
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[1] / ".env")

# DB_URL is read when the engine module is imported, so .env must load first
from racquetrivals.db.engine import DEFAULT_SQLITE_URL, make_engine  # noqa: E402
from racquetrivals.models import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# ConfigParser interpolation treats '%' specially.
config.set_main_option("sqlalchemy.url", DEFAULT_SQLITE_URL.replace("%", "%%"))


def run_migrations_offline() -> None:
    """Emit the draw, slot, user and prediction DDL as SQL."""

    context.configure(
        url=DEFAULT_SQLITE_URL,
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = make_engine(DEFAULT_SQLITE_URL)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=Base.metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
