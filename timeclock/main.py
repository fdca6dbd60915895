import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .config import get_settings
from .migration_runner import run_migrations_once
from .routers import (
    auth,
    messages,
    projects,
    reports,
    sessions,
    settings as settings_router,
)
from .services.clock import utc_now
from .services.errors import TimeclockError

settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, session_cookie=settings.session_cookie)


@app.exception_handler(TimeclockError)
async def timeclock_error_handler(request: Request, exc: TimeclockError) -> JSONResponse:
    return JSONResponse({"error": exc.message, "kind": exc.kind}, status_code=exc.status_code)


@app.get("/api/health")
async def health():
    return {"status": "ok", "timestamp": utc_now().isoformat() + "Z"}


@app.on_event("startup")
async def ensure_schema() -> None:
    if settings.environment == "test":
        return
    try:
        run_migrations_once()
    except Exception:  # pragma: no cover - startup failures should surface
        logger.exception("Database migration failed")
        raise


app.include_router(auth.router)
app.include_router(sessions.router)
app.include_router(reports.router)
app.include_router(projects.router)
app.include_router(settings_router.router)
app.include_router(messages.router)
