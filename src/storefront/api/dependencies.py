"""Request principal resolution.

Tokens are verified upstream; requests reach this service carrying the
verified user id in the ``X-User-Id`` header.
"""

from fastapi import Depends, Header, HTTPException
from protean.utils.globals import current_domain

from storefront.account.user import User


async def current_user(x_user_id: str | None = Header(default=None)) -> User:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return current_domain.repository_for(User).get(x_user_id)


async def require_admin(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def ensure_owner_or_admin(user: User, owner_id) -> None:
    if not user.is_admin and str(user.id) != str(owner_id):
        raise HTTPException(status_code=403, detail="You can only access your own orders")
