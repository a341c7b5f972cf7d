"""
GuessMyGeo backend - authentication, profiles and interaction logging
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .db import init_db
from .exceptions import AppError, app_error_handler
from .routes import actions, auth, health
from .utils.instance_logger import configure_logging

settings = get_settings()

configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create tables on startup in the dev stage"""
    if settings.is_dev:
        init_db()
    logger.info("GuessMyGeo service started (stage=%s)", settings.STAGE)
    yield


app = FastAPI(
    title="GuessMyGeo",
    description="Authentication, profiles and user interaction logging",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)

app.include_router(auth.router)
app.include_router(actions.router)
app.include_router(health.router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
