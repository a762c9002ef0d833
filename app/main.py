import logging

from fastapi import FastAPI, Depends, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.dependencies import get_repository
from app.gateway.repository import OutreachRepository
from app.routers import auth as auth_router
from app.routers import dropdowns as dropdowns_router
from app.routers import outreach as outreach_router
from app.core.errors import (
    OutreachException,
    outreach_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Store Outreach API",
    description=(
        "**Store churn & reactivation outreach**\n\n"
        "Authenticates sales reps, resolves the stores each rep may see "
        "(Member / Leader / Manager, by region and subteam) and records "
        "outreach actions against the spreadsheet or warehouse tables.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="2.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(OutreachException, outreach_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(auth_router.router)
app.include_router(outreach_router.router)
app.include_router(dropdowns_router.router)


@app.get("/keep-alive", tags=["health"], status_code=204, summary="Keep the instance awake")
def keep_alive():
    """Pinged by an external scheduler so free-tier hosts do not sleep."""
    return Response(status_code=204)


@app.get("/health", tags=["health"], summary="Health check")
def health(repo: OutreachRepository = Depends(get_repository)):
    """Reports which data backend this instance is wired to."""
    return {"status": "ok", "backend": repo.backend, "env": settings.APP_ENV}
