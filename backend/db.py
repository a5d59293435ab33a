"""
Database configuration and session management
SQLAlchemy async ORM over MySQL (aiomysql driver)
"""
import os
from dotenv import load_dotenv
import logging

# SQLAlchemy imports
from sqlalchemy import text  # type: ignore
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker  # type: ignore
from sqlalchemy.orm import declarative_base  # type: ignore

load_dotenv()

# Database Configuration
MYSQL_HOST = os.getenv("MYSQL_HOST", "localhost")
MYSQL_PORT = int(os.getenv("MYSQL_PORT", 3306))
MYSQL_USER = os.getenv("MYSQL_USER", "root")
MYSQL_PASSWORD = os.getenv("MYSQL_PASSWORD", "adminadmin")
MYSQL_DATABASE = os.getenv("MYSQL_DATABASE", "central_prazos_db")
MYSQL_CHARSET = os.getenv("MYSQL_CHARSET", "utf8mb4")

logger = logging.getLogger(__name__)

# DATABASE_URL wins over the MYSQL_* pieces when set
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"mysql+aiomysql://{MYSQL_USER}:{MYSQL_PASSWORD}@{MYSQL_HOST}:{MYSQL_PORT}/{MYSQL_DATABASE}?charset={MYSQL_CHARSET}",
)

# Create async engine
engine = create_async_engine(
    DATABASE_URL,
    echo=False,  # Set to True for SQL query logging
    pool_pre_ping=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for SQLAlchemy models
Base = declarative_base()


# SQLAlchemy dependency for FastAPI
async def get_db() -> AsyncSession:
    """
    Get SQLAlchemy database session (FastAPI dependency).
    Use this in your route handlers.

    Example:
        @router.get("/deadlines")
        async def list_deadlines(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Deadline))
            return result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def ensure_database_exists():
    """
    Create the application database if it does not exist.
    Connects to the MySQL server (using the 'mysql' system db) and runs CREATE DATABASE IF NOT EXISTS.
    """
    url_no_db = f"mysql+aiomysql://{MYSQL_USER}:{MYSQL_PASSWORD}@{MYSQL_HOST}:{MYSQL_PORT}/mysql?charset={MYSQL_CHARSET}"
    temp_engine = create_async_engine(url_no_db, pool_pre_ping=True)
    escaped = MYSQL_DATABASE.replace("`", "``")
    async with temp_engine.begin() as conn:
        await conn.execute(
            text("CREATE DATABASE IF NOT EXISTS `{:s}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci".format(escaped))
        )
    await temp_engine.dispose()
    logger.info("Database %s ensured (created if missing).", MYSQL_DATABASE)


async def init_db():
    """
    Initialize database - create all tables using SQLAlchemy models.
    This is called on application startup.
    """
    # Register every model on Base.metadata before create_all
    import backend.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized: %s", MYSQL_DATABASE)


async def close_db():
    """Close database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
