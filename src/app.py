"""Bookstore FastAPI application.

Web server that processes commands synchronously via HTTP. Requests under
``/api`` are wrapped in the bookstore domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

import os

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → in-memory provider
#   - "production" → PostgreSQL provider
from bookstore.domain import bookstore  # noqa: E402
from bookstore.utils.logging import add_context, clear_context  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

bookstore.init()

API_PREFIX = "/api"

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Bookstore API",
    description="Online bookstore: catalogue search, shopping cart and checkout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Protean domain context for API requests."""
    if request.url.path.startswith(API_PREFIX):
        clear_context()
        add_context(method=request.method, path=request.url.path)
        with bookstore.domain_context():
            response = await call_next(request)
        return response
    # Not an API route: pass through (health check, docs, etc.)
    return await call_next(request)


# Added last so it wraps the routes and the domain middleware
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("BOOKSTORE_SESSION_SECRET", bookstore.config["secret_key"]),
    same_site="lax",
)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from bookstore.api import (  # noqa: E402
    cart_router,
    catalogue_router,
    member_router,
    order_router,
    register_error_handlers,
)

app.include_router(member_router)
app.include_router(catalogue_router)
app.include_router(cart_router)
app.include_router(order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": {"name": bookstore.name},
        }
    )
