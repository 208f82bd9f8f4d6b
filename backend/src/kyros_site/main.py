"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from . import api, config
from .capability import FallbackPolicy

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Install the fallback policy the page and API share."""
    logger.info("Starting Kyros site")
    policy = FallbackPolicy()
    api.policy = policy
    api.version = VERSION
    logger.info(
        "Fallback policy: %d blocklisted drivers, texture floor %d, attribute floor %d",
        len(policy.blocklist),
        policy.min_texture_size,
        policy.min_vertex_attribs,
    )

    yield

    api.policy = None
    logger.info("Kyros site stopped")


app = FastAPI(title="Kyros", version=VERSION, lifespan=lifespan)

app.include_router(api.pages)
app.include_router(api.router)


def run() -> None:
    """Serve the site with uvicorn on KYROS_HOST:KYROS_PORT."""
    host = config.server_host()
    port = config.server_port()
    logger.info("Listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
