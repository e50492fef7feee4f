"""Database session management."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import AsyncGenerator, Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import create_engine, inspect
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from imageservice.config import config
from imageservice.models import Base


logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent
_LOCK_TIMEOUT_SECONDS = 30.0
_LOCK_RETRY_INTERVAL = 0.1


def to_async_url(url: str) -> str:
    """Map a plain database URL onto its async driver."""
    if url.startswith(("sqlite+aiosqlite:", "postgresql+asyncpg:")):
        return url
    if url.startswith("sqlite:"):
        return url.replace("sqlite:", "sqlite+aiosqlite:", 1)
    if url.startswith("postgresql:"):
        return url.replace("postgresql:", "postgresql+asyncpg:", 1)
    return url


def to_sync_url(url: str) -> str:
    """Map an async database URL back onto its sync driver (for Alembic)."""
    if url.startswith("sqlite+aiosqlite:"):
        url = url.replace("sqlite+aiosqlite:", "sqlite:", 1)
    elif url.startswith("postgresql+asyncpg:"):
        url = url.replace("postgresql+asyncpg:", "postgresql:", 1)

    if url.startswith("sqlite:///") and not url.startswith("sqlite:///:memory:"):
        db_path = Path(url.replace("sqlite:///", "", 1)).expanduser().resolve()
        return f"sqlite:///{db_path}"

    return url


database_url = to_async_url(config.DATABASE_URL)

engine = create_async_engine(database_url, echo=config.DEBUG)
AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Get database session."""
    async with AsyncSessionLocal() as session:
        yield session


def alembic_config(sync_url: str) -> AlembicConfig:
    """Build an Alembic config pointing at the bundled migrations."""
    alembic_cfg = AlembicConfig()
    alembic_cfg.set_main_option("script_location", str(_PACKAGE_DIR / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", sync_url)
    return alembic_cfg


@contextmanager
def migration_lock(
    lock_path: Path, *, timeout: float = _LOCK_TIMEOUT_SECONDS
) -> Iterator[None]:
    """Hold an exclusive lock file while migrations run.

    Several workers may start at once; only one of them migrates at a time.
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    deadline = time.monotonic() + timeout
    while True:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_RDWR)
            break
        except FileExistsError:
            if time.monotonic() > deadline:
                logger.error("Migration lock %s is still held, giving up", lock_path)
                raise TimeoutError(f"Could not acquire {lock_path}") from None
            time.sleep(_LOCK_RETRY_INTERVAL)

    try:
        yield
    finally:
        os.close(fd)
        lock_path.unlink(missing_ok=True)


def _is_unversioned(sync_url: str) -> bool:
    """True when the catalog tables exist but Alembic never tracked them."""
    sync_engine = create_engine(sync_url)
    try:
        with sync_engine.connect() as connection:
            inspector = inspect(connection)
            if inspector.has_table("alembic_version"):
                return False
            return bool(set(inspector.get_table_names()) & set(Base.metadata.tables))
    finally:
        sync_engine.dispose()


def migrate(sync_url: str) -> None:
    """Bring the schema at ``sync_url`` to the latest revision."""
    alembic_cfg = alembic_config(sync_url)
    config.ensure_data_dir()
    with migration_lock(config.DATA_DIR / ".migrations.lock"):
        if _is_unversioned(sync_url):
            logger.info("Catalog tables predate migrations, stamping head")
            command.stamp(alembic_cfg, "head")
            return
        logger.info("Upgrading catalog schema to head")
        command.upgrade(alembic_cfg, "head")


async def init_db() -> None:
    """Apply migrations to the configured database."""
    await asyncio.to_thread(migrate, to_sync_url(config.DATABASE_URL))
