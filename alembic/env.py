import os
import sys
from logging.config import fileConfig
from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from alembic import context

# Make the scripture_api package importable when alembic runs from the repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scripture_api.config import get_settings  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    """Same precedence as the application: DATABASE_URL, then DB_* fields, then the dev fallback."""
    db = get_settings().db_config
    return URL.create(
        "postgresql+psycopg2",
        username=db["user"],
        password=db["password"],
        host=db["host"],
        port=db["port"],
        database=db["dbname"],
    ).render_as_string(hide_password=False)


if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", _database_url().replace("%", "%%"))

# Raw SQL migrations, no autogenerate metadata.
target_metadata = None


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True, compare_type=True)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(config.get_main_option("sqlalchemy.url"), future=True)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
