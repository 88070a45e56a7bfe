# app/migrations/env.py
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

this_dir = os.path.dirname(__file__)
proj_root = os.path.abspath(os.path.join(this_dir, os.pardir, os.pardir))
if proj_root not in sys.path:
    sys.path.append(proj_root)

from app.config import settings
from app.utils.database import Base
from app.models import action_history as action_history_models
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# tasks / projects / notes / users are migrated by the subsystems that own them
target_metadata = Base.metadata

SQLALCHEMY_URL_SYNC = settings.ALEMBIC_URL

config.set_main_option("sqlalchemy.url", SQLALCHEMY_URL_SYNC)


def include_object(obj, name, type_, reflected, compare_to):
    if type_ == "table":
        return name == action_history_models.ActionHistory.__tablename__
    return True


def run_migrations_offline() -> None:
    context.configure(
        url=SQLALCHEMY_URL_SYNC,
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(SQLALCHEMY_URL_SYNC, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
            compare_type=True,
            compare_server_default=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
