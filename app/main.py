import asyncio
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config.settings import settings
from app.core.errors import register_exception_handlers
from app.modules.auth import routes as auth_routes
from app.modules.study_guides import routes as study_guides_routes
from app.modules.rate_limit import routes as rate_limit_routes
from app.modules.tokens import routes as tokens_routes
from app.modules.daily_verse import routes as daily_verse_routes
from app.modules.feedback import routes as feedback_routes
from app.modules.topics import routes as topics_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                    (b"Referrer-Policy", b"strict-origin-when-cross-origin"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(study_guides_routes.router, prefix="/api/v1")
app.include_router(rate_limit_routes.router, prefix="/api/v1")
app.include_router(tokens_routes.router, prefix="/api/v1")
app.include_router(daily_verse_routes.router, prefix="/api/v1")
app.include_router(feedback_routes.router, prefix="/api/v1")
app.include_router(topics_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")

    if settings.daily_verse_scheduler_enabled:
        from app.modules.daily_verse.scheduler import daily_verse_scheduler_loop
        app.state.daily_verse_task = asyncio.create_task(daily_verse_scheduler_loop())
        logger.info(
            f"Daily verse scheduler started - checking every {settings.daily_verse_check_interval_seconds} seconds"
        )


@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "daily_verse_task", None)
    if task is not None:
        task.cancel()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.app_name}", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness check: configuration needed to serve study guides."""
    checks = {
        "supabase": bool(settings.supabase_url and settings.supabase_key),
        "llm": bool(settings.use_mock_llm or settings.openai_api_key or settings.anthropic_api_key),
    }
    return {"status": "ready" if all(checks.values()) else "degraded", "checks": checks}
