"""Application factory for the Storefront HTTP API."""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.domain import Domain

from storefront.api.errors import register_error_handlers
from storefront.api.routes import cart_router, notification_router, order_router
from storefront.utils.logging import bind_request_context, clear_request_context


def create_app(domain: Domain) -> FastAPI:
    """Build the API around an initialized ``domain``."""
    app = FastAPI(
        title="Storefront API",
        description="Order workflow, carts and notifications",
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
        """Push the Protean domain context and bind log context for each request."""
        bind_request_context(
            request_id=request.headers.get("x-request-id") or str(uuid.uuid4()),
            path=request.url.path,
            method=request.method,
        )
        try:
            with domain.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()

    app.include_router(order_router)
    app.include_router(cart_router)
    app.include_router(notification_router)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app
