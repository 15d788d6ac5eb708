'''
Database Engine file.
1- Engine: creates and manages the connection pool for the process lifetime
2- AsyncSessionLocal: Session Creator (with engine as bind)
3- get_db_session: Dependency to create, yield and manage the life-cycle of a session.
'''
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker
from typing import AsyncGenerator
from ..common.config import settings
from ..common.logger import log
from .models import Base

# Created by the app's lifespan, disposed on shutdown.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None

def _engine_kwargs(database_url: str) -> dict:
    """SQLite does not support pool_size, max_overflow or pool_timeout."""
    engine_kwargs = {"echo": False}
    if database_url.startswith("postgresql"):
        engine_kwargs.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": -1,
            "pool_pre_ping": True,
        })
    return engine_kwargs

def create_db_engine_and_session_factory(database_url: str | None = None):
    """
    Creates the engine and session factory.
    This is called by the app's lifespan event.
    """
    global engine, AsyncSessionLocal
    database_url = database_url or settings.database_url

    log.info(f"Creating database engine for URL...")
    try:
        engine = create_async_engine(database_url, **_engine_kwargs(database_url))

        AsyncSessionLocal = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
        log.info("Async database engine and session factory created successfully.")
    except Exception as e:
        log.critical(f"Failed to create async database engine: {e}", exc_info=True)
        raise

async def verify_db_connection():
    """
    Opens one connection and runs a trivial query.
    Raises if the database is unreachable, which must halt startup.
    """
    if engine is None:
        raise RuntimeError("Database engine is not available.")
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        log.info("Database connection verified.")
    except Exception as e:
        log.critical(f"Database connection failed: {e}", exc_info=True)
        raise

async def create_db_schema():
    """Creates any missing tables. Only used when AUTO_CREATE_TABLES is set."""
    if engine is None:
        raise RuntimeError("Database engine is not available.")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("Database schema created (missing tables only).")

async def dispose_db_engine():
    """Disposes of the engine. Called by the app's lifespan."""
    global engine, AsyncSessionLocal
    if engine:
        await engine.dispose()
        log.info("Database engine disposed.")
    engine = None
    AsyncSessionLocal = None

async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Per-request session: committed when the route returns, rolled back
    when it raises, closed either way.
    """
    if AsyncSessionLocal is None:
        log.error("AsyncSessionLocal is not initialized. App lifespan may not have run.")
        raise RuntimeError("Database session factory is not available.")

    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception as e:
        await session.rollback()
        log.error(f"Database session rolled back due to error: {e}")
        raise
    finally:
        await session.close()
