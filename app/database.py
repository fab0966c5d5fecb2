import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.config import settings
from app.migrations import run_migrations

logger = logging.getLogger("streamsite.database")


def build_engine(url: str | None = None, *, echo: bool | None = None) -> AsyncEngine:
    return create_async_engine(
        url or settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO if echo is None else echo,
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()
AsyncSessionLocal = build_sessionmaker(engine)
Base = declarative_base()


async def connect_with_retry(
    bind: AsyncEngine | None = None,
    retries: int | None = None,
    delay: float | None = None,
) -> AsyncEngine:
    """Probe the database with ``SELECT 1``, retrying a fixed number of times.

    One initial attempt is made plus ``retries`` further attempts spaced
    ``delay`` seconds apart. Exhausting the budget raises ``RuntimeError``.
    """
    bind = bind or engine
    retries = settings.DB_CONNECT_RETRIES if retries is None else retries
    delay = settings.DB_CONNECT_RETRY_DELAY if delay is None else delay
    remaining = retries
    while True:
        try:
            async with bind.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connected successfully")
            return bind
        except (SQLAlchemyError, OSError) as exc:
            if remaining <= 0:
                logger.error("Database connection failed, giving up: %s", exc)
                raise RuntimeError("Failed to connect to database after multiple retries") from exc
            logger.warning(
                "Database connection failed, retrying in %.1fs... (%d attempts left)",
                delay,
                remaining,
            )
            remaining -= 1
            await asyncio.sleep(delay)


async def create_tables(bind: AsyncEngine | None = None):
    # model modules register their tables on Base.metadata
    import models.announcement  # noqa: F401
    import models.gallery  # noqa: F401
    import models.session  # noqa: F401
    import models.site_settings  # noqa: F401
    import models.stream  # noqa: F401
    import models.user  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await run_migrations(conn)
