"""Workflow settings for the order lifecycle.

Settings are read from the environment each time a command is handled, so
tests and operators can change them without reloading modules.
"""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class WorkflowSettings:
    user_cancel_window_minutes: int = 30
    # Shipping and delivery restore stock in the platform being replaced.
    # Kept on by default until the product owner confirms the intended behaviour.
    restock_on_fulfillment: bool = True
    media_url_prefix: str = "/uploads/products"

    @classmethod
    def from_env(cls) -> "WorkflowSettings":
        defaults = cls()
        restock = os.environ.get("RESTOCK_ON_FULFILLMENT")
        return cls(
            user_cancel_window_minutes=int(
                os.environ.get("USER_CANCEL_WINDOW_MINUTES", defaults.user_cancel_window_minutes)
            ),
            restock_on_fulfillment=(
                defaults.restock_on_fulfillment if restock is None else restock.strip().lower() in _TRUTHY
            ),
            media_url_prefix=os.environ.get("MEDIA_URL_PREFIX", defaults.media_url_prefix).rstrip("/"),
        )
