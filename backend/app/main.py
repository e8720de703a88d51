from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles

from app.api.routes import router
from app.config.settings import Settings, settings as default_settings
from app.db import session as db_session

logger = logging.getLogger(__name__)


def _lifespan(db_path: Path | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if db_path is not None:
            db_session.configure_engine(db_path)
            async with db_session.AsyncSessionLocal() as session:
                users = await db_session.count_users(session)
            logger.info("Opened database %s (%d users)", db_path, users)
        yield
        await db_session.dispose_engine()

    return lifespan


class PublicFiles(StaticFiles):
    """StaticFiles that never serves dotfiles or the open store file."""

    def __init__(self, *, hidden: tuple[Path, ...] = (), **kwargs) -> None:
        super().__init__(**kwargs)
        self.hidden = {path.resolve() for path in hidden}

    async def get_response(self, path: str, scope) -> Response:
        if any(part.startswith(".") for part in Path(path).parts):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found.")
        if (Path(self.directory) / path).resolve() in self.hidden:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found.")
        return await super().get_response(path, scope)


def _mount_files(app: FastAPI, prefix: str, directory: Path, name: str, hidden: tuple[Path, ...]) -> None:
    if not directory.is_dir():
        logger.warning("Directory %s not found; %s is disabled", directory, prefix)
        return
    app.mount(prefix, PublicFiles(directory=directory, hidden=hidden), name=name)


def create_app(db_path: str | Path | None = None, config: Settings | None = None) -> FastAPI:
    config = config or default_settings
    store = Path(db_path) if db_path is not None else None
    app = FastAPI(title="quotedesk", lifespan=_lifespan(store))
    app.include_router(router)

    static_dir = Path(config.static.static_dir)
    favicon = static_dir / config.static.favicon

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon_ico() -> FileResponse:
        if not favicon.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found.")
        return FileResponse(favicon)

    # Mounted last so the API routes above take precedence.
    hidden = (store,) if store is not None else ()
    _mount_files(app, "/static", static_dir, "static", hidden)
    _mount_files(app, "/", Path(config.static.document_root), "root", hidden)
    return app
