# backend/app/db/init.py

import logging
from pathlib import Path

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine

from app.db.models import Base, User
from app.db.session import database_url

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    pass


class DatabaseExistsError(DatabaseError):
    pass


class DatabaseInitError(DatabaseError):
    pass


async def initialize_database(path: str | Path) -> None:
    """Create a new store file with the user table and the admin account.

    Either everything is written or the file is removed again.
    """
    db_path = Path(path)
    if db_path.exists():
        raise DatabaseExistsError(f"File '{db_path}' already exists. Can't initialize it.")

    engine = create_async_engine(database_url(db_path), echo=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.execute(
                insert(User).values(user_id=1, username="admin", password="", active=1, email="")
            )
    except SQLAlchemyError as exc:
        await engine.dispose()
        db_path.unlink(missing_ok=True)
        raise DatabaseInitError(f"DB error ({exc})") from exc

    await engine.dispose()
    logger.info("Initialized database %s", db_path)
