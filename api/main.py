from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from core import config, db, log, middleware
from news import router as news_router
from news.repository import NewsStorage


def create_app(
    storage: NewsStorage | None = None,
    *,
    webapp_dir: str | None = None,
) -> FastAPI:
    """
    Build the API.

    With `storage` given (tests, embedding) no pool is opened; otherwise the
    lifespan opens one asyncpg pool per process and wraps it in a gateway.
    """
    log.configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if storage is not None:
            app.state.storage = storage
            yield
            return

        pool = await db.create_pool()
        app.state.storage = NewsStorage(pool)
        try:
            yield
        finally:
            app.state.storage = None
            await db.close_pool(pool)

    app = FastAPI(title="news-api", lifespan=lifespan)
    app.state.storage = storage

    middleware.install(app)
    app.include_router(news_router.router, tags=["news"])

    # Web client goes last: the "/" mount would shadow any later route.
    if webapp_dir and Path(webapp_dir).is_dir():
        app.mount("/", StaticFiles(directory=webapp_dir, html=True), name="webapp")

    return app


app = create_app(webapp_dir=config.webapp_dir())
