"""Storefront FastAPI application.

Web server that processes order workflow commands synchronously via HTTP.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay applied by Protean.
from storefront.domain import storefront
from storefront.utils.logging import configure_logging

configure_logging()
storefront.init()

from storefront.api.factory import create_app  # noqa: E402

app = create_app(storefront)
