"""
YouTube Statistics API — Application entry point.

Bootstraps FastAPI, wires up middleware and error handlers, registers
route groups, and owns the lifecycle of the shared outbound HTTP client.

Extension points:
  - Add new route groups with app.include_router() below
  - Add new middleware in the middleware block
  - Build new upstream clients in the lifespan context manager and expose
    them to routes through a get_* dependency
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from ytstats.core.config import settings
from ytstats.core.errors import APIError
from ytstats.core.rate_limit import limiter
from ytstats.models.youtube import ErrorResponse, iso_timestamp
from ytstats.routes.health import router as health_router
from ytstats.routes.proxy import router as proxy_router
from ytstats.routes.youtube import router as youtube_router
from ytstats.services.proxy_client import ProxyClient
from ytstats.services.youtube_client import YouTubeService

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage startup and shutdown lifecycle.

    One httpx.AsyncClient is shared by the YouTube and proxy clients and
    closed on shutdown. Routes reach both through app.state via the
    get_youtube_service / get_proxy_client dependencies.
    """
    logger.info("Starting YouTube Statistics API (env: %s)", settings.environment)
    if not settings.youtube_api_key:
        logger.warning(
            "YOUTUBE_API_KEY not set; stats endpoints will return 500 until it is configured."
        )
    if not settings.proxy_base_url:
        logger.warning("PROXY_BASE_URL not set; proxy endpoint disabled.")

    async with httpx.AsyncClient(
        timeout=settings.youtube_timeout_seconds,
        follow_redirects=True,
    ) as http_client:
        app.state.youtube_service = YouTubeService(
            api_key=settings.youtube_api_key,
            http_client=http_client,
            base_url=settings.youtube_api_base_url,
        )
        app.state.proxy_client = ProxyClient(
            base_url=settings.proxy_base_url,
            http_client=http_client,
            timeout=settings.proxy_timeout_seconds,
        )
        yield
        logger.info("Shutting down YouTube Statistics API")


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="YouTube Statistics API",
    description=(
        "Video and channel statistics from the YouTube Data API v3, "
        "by video ID or URL, with an optional proxy hop to another deployment."
    ),
    version="1.0.0",
    lifespan=lifespan,
    # Disable docs in production to reduce attack surface
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Rate limiting ─────────────────────────────────────────────────────────────
# Attach the limiter to app state so slowapi can find it.
# Routes opt-in with @limiter.limit(...) + request: Request parameter.
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ─── Error handlers ────────────────────────────────────────────────────────────
@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    body = ErrorResponse(**exc.to_payload())
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """
    Unmatched routes, including a wrong method on a known path, get a 404
    {error, path}. Other HTTP errors keep FastAPI's shape.
    """
    if exc.status_code not in (404, 405):
        return await http_exception_handler(request, exc)

    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return JSONResponse(status_code=404, content={"error": "Route not found", "path": path})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Something went wrong!", "message": str(exc)},
    )


# ─── Middleware ─────────────────────────────────────────────────────────────────
# CORS: explicit origins plus a regex for preview deployments.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex or None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(youtube_router)
app.include_router(proxy_router)


@app.get("/", tags=["root"])
async def root():
    """API root: liveness message."""
    return {
        "message": "YouTube Statistics Backend API is running!",
        "status": "success",
        "timestamp": iso_timestamp(),
    }
