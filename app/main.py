import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.database.db import SessionLocal, engine
from app.core.database.base import Base
from app.core.errors import register_exception_handlers
from app.core.logging import mask_url, setup_logging
from app.core.seed import seed_database

# Routers
from catalog.routers import documentaries_router, comments_router
from users.routers import auth_router, users_router

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

os.makedirs(settings.upload_dir, exist_ok=True)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: tables are created idempotently; there is no migration step
    logger.info("Starting %s (%s) db=%s", settings.app_name, settings.environment, mask_url(settings.database_url))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with SessionLocal() as session:
        await seed_database(session, settings)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    debug=settings.debug,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


@app.get("/health", tags=["system"])
async def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


# Auth / users
app.include_router(auth_router)
app.include_router(users_router)

# Catalog
app.include_router(documentaries_router)
app.include_router(comments_router)


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
