import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from auth import router as auth_router
from core.db import Database
from core.errors import register_exception_handlers
from core.logging import setup_logging
from gallery import router as gallery_router
from gallery import service as gallery_service
from games import router as games_router
from reviews import router as reviews_router
from schedule import router as schedule_router
from verification import router as verification_router
from waitlist import router as waitlist_router
from waitlist.repository import WaitlistRepository
from waitlist.sweeper import WaitlistSweeper, sweep_enabled

logger = logging.getLogger(__name__)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process; the sweeper starts only once it is open.
    db = Database.from_env()
    await db.connect()
    app.state.db = db

    sweeper = None
    app.state.sweeper = None
    try:
        await db.apply_schema()
        if sweep_enabled():
            sweeper = WaitlistSweeper.from_env(WaitlistRepository(db))
            sweeper.start()
        app.state.sweeper = sweeper

        logger.info("startup_complete sweeper=%s", sweeper is not None)
        yield
    finally:
        if sweeper is not None:
            await sweeper.stop()
        await db.close()
        logger.info("shutdown_complete")


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="Elite Club API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(waitlist_router.router, tags=["waitlist"])
    app.include_router(gallery_router.router, tags=["gallery"])
    app.include_router(schedule_router.router, tags=["schedule"])
    app.include_router(games_router.router, tags=["games"])
    app.include_router(reviews_router.router, tags=["reviews"])
    app.include_router(verification_router.router, tags=["verification"])

    uploads = gallery_service.uploads_dir()
    uploads.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=uploads, check_dir=False), name="uploads")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "Elite Club API"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        log_config=None,
    )
