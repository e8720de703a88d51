# backend/app/db/session.py

from pathlib import Path

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.db.models import User

engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def database_url(path: str | Path) -> str:
    return f"sqlite+aiosqlite:///{Path(path)}"


def configure_engine(path: str | Path) -> AsyncEngine:
    """Bind the module-level engine and session factory to a store file."""
    global engine, AsyncSessionLocal
    engine = create_async_engine(database_url(path), echo=False)
    AsyncSessionLocal = async_sessionmaker(autoflush=False, bind=engine)
    return engine


async def dispose_engine() -> None:
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


async def count_users(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(User))
    return int(result.scalar_one())
