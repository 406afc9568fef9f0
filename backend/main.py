"""MovieHub gateway — FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from config import get_settings
from errors import json_error_response
from routers import images, movies
from services.upstream import build_http_client

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    app.state.http_client = build_http_client(settings.user_agent, settings.upstream_timeout)
    yield
    # Shutdown
    await app.state.http_client.aclose()


app = FastAPI(
    title="MovieHub Gateway",
    description="Server-side TMDB metadata and image gateway",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().cors_allow_origin],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(movies.router, prefix="/api")
app.include_router(images.router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return json_error_response("Proxy failed", str(exc))


@app.get("/", response_class=PlainTextResponse)
async def liveness():
    return "OK"


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
