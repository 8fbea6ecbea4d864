import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from dal.image_dal import ImageDAL
from routes.image_route import router as image_router
from services.image_store import ImageStoreService
from utils.database_init import AsyncDatabaseInitializer

load_dotenv()  # Load environment variables from .env file if present

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

LOGGER = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def create_app(db_initializer: Optional[AsyncDatabaseInitializer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        db_initializer: Optional database initializer; when omitted one is
            built from the DATABASE_DIR / DATABASE_RESET environment at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan manager to initialize the SQLite database and the image store
        service, and attach them to `app.state`.
        """
        initializer = db_initializer or AsyncDatabaseInitializer()
        await initializer.ensure_database()

        app.state.db_initializer = initializer
        app.state.image_store = ImageStoreService(ImageDAL(initializer))
        LOGGER.info("Image store started with database %s", initializer.db_path)
        yield

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that verifies the database initializer is present.
        """
        initializer = getattr(request.app.state, "db_initializer", None)
        has_db = initializer is not None and initializer.initialized
        return {"ok": True, "db_initialized": has_db}

    app.include_router(image_router)

    return app


app = create_app()
