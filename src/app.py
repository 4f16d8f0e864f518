"""ElectroStore FastAPI application.

Web server that processes commands synchronously via HTTP. Every request is
wrapped in the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.domain import storefront
from storefront.utils.logging import bind_request_context, clear_request_context, get_logger

storefront.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ElectroStore API",
    description="Electronics storefront: catalogue, orders and admin",
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
    """Push the storefront domain context and tag log lines with a request id."""
    clear_request_context()
    bind_request_context(request_id=request.headers.get("x-request-id", uuid4().hex), path=request.url.path)
    with storefront.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers and error translation
# ---------------------------------------------------------------------------
from storefront.catalogue.api import (  # noqa: E402
    admin_category_router,
    admin_product_router,
    category_router,
    product_router,
)
from storefront.ordering.api import admin_order_router, order_router  # noqa: E402
from storefront.shared.error_handlers import register_error_handlers  # noqa: E402

app.include_router(product_router)
app.include_router(admin_product_router)
app.include_router(category_router)
app.include_router(admin_category_router)
app.include_router(order_router)
app.include_router(admin_order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
