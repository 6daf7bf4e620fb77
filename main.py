from fastapi import FastAPI
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.logging import get_logger, setup_logging
from app.apis.auth.main import router as auth_router
from app.apis.notes.main import router as notes_router
from app.apis.flashcards.main import router as flashcards_router
from app.apis.integrations.main import router as integrations_router

import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from app.core.db.base import create_all
from app.core.task_queue import queue as _bg_queue


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.app.is_production:
        await create_all()
    _bg_queue.start()
    try:
        yield
    finally:
        await _bg_queue.stop()


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(notes_router)
    app.include_router(flashcards_router)
    app.include_router(integrations_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        logger.error(f"An error occurred when starting the server: {e}.")
