import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config.settings import settings
from app.modules.auth import routes as auth_routes
from app.modules.users import routes as users_routes
from app.modules.projects import routes as projects_routes
from app.modules.boards import routes as boards_routes
from app.modules.tasks import routes as tasks_routes
from app.modules.members import routes as members_routes
from app.modules.roles import routes as roles_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

ROUTERS = (
    auth_routes.router,
    users_routes.router,
    projects_routes.router,
    boards_routes.router,
    tasks_routes.router,
    members_routes.router,
    roles_routes.router,
)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    description="Project boards with project-scoped roles and permissions",
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _internal_error(detail: str) -> JSONResponse:
    if settings.is_production:
        detail = "Internal server error"
    return JSONResponse(status_code=500, content={"detail": detail})


@app.exception_handler(APIError)
async def store_exception_handler(request: Request, exc: APIError):
    # Unique violations are turned into 409s by the services; anything reaching here is unexpected
    logger.exception(
        "Store error on %s %s (code=%s): %s",
        request.method, request.url.path, exc.code, exc.message
    )
    return _internal_error(f"Store error: {exc.message}")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return _internal_error(str(exc))


class SecurityHeadersMiddleware:
    """Adds basic hardening headers to every HTTP response"""

    HEADERS = (
        (b"X-Content-Type-Options", b"nosniff"),
        (b"X-Frame-Options", b"DENY"),
        (b"X-XSS-Protection", b"1; mode=block"),
    )

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend(self.HEADERS)
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

for router in ROUTERS:
    app.include_router(router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    logger.info(
        "Application startup (environment=%s, seed_default_roles=%s)",
        settings.environment, settings.seed_default_roles
    )
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("SUPABASE_URL / SUPABASE_KEY not set; store calls will fail")


@app.on_event("shutdown")
async def shutdown_event():
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
    """Readiness probe: the store must at least be configured"""
    if not settings.supabase_url or not settings.supabase_key:
        return JSONResponse(status_code=503, content={"status": "not ready", "reason": "store not configured"})
    return {"status": "ready"}
