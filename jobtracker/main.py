import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobtracker.api.routes import admin, auth, health, jobs
from jobtracker.core import config
from jobtracker.core.error_handlers import register_exception_handlers
from jobtracker.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def prepare_database():
    """Bring the schema up to date before serving."""
    if config.RUN_MIGRATIONS:
        from jobtracker.db.migrate import run_migrations
        run_migrations()
    else:
        from jobtracker.db.init_db import init_db
        init_db()


@asynccontextmanager
async def lifespan(app: FastAPI):
    prepare_database()
    logger.info("Job Tracker API started")
    yield


def create_app() -> FastAPI:
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)

    if config.SECRET_KEY == config.DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; using the development key. Never run like this in production.")

    # ============================================
    # ✅ FASTAPI APP INIT
    # ============================================

    app = FastAPI(title="Job Tracker API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )

    register_exception_handlers(app)

    # ============================================
    # ✅ REGISTER ALL ROUTERS
    # ============================================

    app.include_router(auth.router)
    app.include_router(jobs.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    # ============================================
    # ✅ ROOT ENDPOINT
    # ============================================

    @app.get("/", include_in_schema=False)
    def root():
        return {"status": "Job Tracker API running"}

    return app


app = create_app()
