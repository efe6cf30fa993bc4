# barbershop/deps.py

from typing import Optional

from .context import CallerIdentity
from .errors import Unauthorized


def has_permission(user: Optional[CallerIdentity], permission: str) -> bool:
    return user is not None and permission in user.permissions


def require_identity(user: Optional[CallerIdentity]) -> CallerIdentity:
    if user is None:
        raise Unauthorized()
    return user
