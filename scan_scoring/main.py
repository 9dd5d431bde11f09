import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from scan_scoring import __version__
from scan_scoring.api.router import limiter, router
from scan_scoring.config import settings
from scan_scoring.logging_config import setup_logging
from scan_scoring.services.scoring import registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging("DEBUG" if settings.debug else settings.log_level)
    # A broken catalog is fatal: let CatalogError stop startup
    registry.preload(*settings.preload_domains)
    logger.info("Scoring catalogs ready: %s", registry.loaded_versions())
    yield


app = FastAPI(
    title="Scan Scoring API",
    description="Role-aware scoring and comparison of resume and profile benchmark results",
    version=__version__,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
