"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from umdb.api.routes import external, health, matches
from umdb.config import settings
from umdb.sources import log_unconfigured_sources

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)
log_unconfigured_sources()

# Create FastAPI app
app = FastAPI(
    title="UMDB API",
    description="Movie catalogue with multi-source external match reconciliation",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(matches.router, prefix="/api", tags=["matches"])
app.include_router(external.router, prefix="/api", tags=["external"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("umdb.main:app", host=settings.api_host, port=settings.api_port)
