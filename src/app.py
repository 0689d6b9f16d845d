"""Storefront FastAPI application.

Single-domain web server that processes commands synchronously via HTTP.
Every request under ``/api`` runs inside the storefront domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay (in-memory by default, PostgreSQL
# under "production").
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context

storefront.init()

settings = get_settings()

API_PREFIX = "/api"

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="E-commerce storefront — catalogue, cart, checkout and feedback",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for API requests."""
    if request.url.path.startswith(API_PREFIX):
        add_context(method=request.method, path=request.url.path)
        try:
            with storefront.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# Added last so it wraps the domain middleware and the session is decoded first
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    same_site="lax",
)

# ---------------------------------------------------------------------------
# Routers and error handling
# ---------------------------------------------------------------------------
from storefront.api import routers  # noqa: E402
from storefront.api.errors import register_exception_handlers  # noqa: E402

for router in routers:
    app.include_router(router, prefix=API_PREFIX)

register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
