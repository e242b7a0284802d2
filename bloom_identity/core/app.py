from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from bloom_identity.api.main import api_router
from bloom_identity.services.catalog.service import catalog_service

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    yield
    try:
        await catalog_service.close()
        logger.info("Catalog HTTP client closed")
    except Exception as exc:
        logger.warning(f"Failed to close catalog HTTP client: {exc}")


app = FastAPI(
    title="Bloom Identity",
    description="Identity profiling and skill recommendations from fused user signals",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
