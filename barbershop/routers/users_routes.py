# barbershop/routers/users_routes.py

from typing import Optional

from fastapi import APIRouter, Depends

from barbershop.auth import get_caller_identity
from barbershop.context import CallerIdentity
from barbershop.deps import require_identity
from barbershop.schemas import CallerPublic

router = APIRouter(
    tags=["users"],
)


@router.get("/me", response_model=CallerPublic)
def me(current_user: Optional[CallerIdentity] = Depends(get_caller_identity)):
    user = require_identity(current_user)
    return {
        "id": user.id,
        "email": user.email,
        "permissions": user.permissions,
    }
