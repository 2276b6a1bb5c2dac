"""ReNew marketplace FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
runs inside the marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset / "test" → in-memory database
#   - "production"   → SQLite database (create tables with `manage.py setup-db`)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from marketplace.domain import marketplace
from marketplace.utils.logging import add_context, clear_context

marketplace.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ReNew Marketplace API",
    description="Second-hand electronics marketplace: catalogue, carts and orders",
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
    """Push the marketplace domain context and bind the request to log records."""
    add_context(method=request.method, path=request.url.path)
    try:
        with marketplace.domain_context():
            return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from marketplace.api import ROUTERS, register_error_handlers  # noqa: E402

for router in ROUTERS:
    app.include_router(router)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": marketplace.name})
