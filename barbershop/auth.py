# barbershop/auth.py

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .config import (
    ALGORITHM,
    AUTH_AUDIENCE,
    AUTH_EMAIL_CLAIM,
    IDP_DOMAIN,
    IDP_MANAGEMENT_TOKEN,
    IDP_MANAGEMENT_TOKEN_TYPE,
    SECRET_KEY,
)
from .context import CallerContext, CallerIdentity, ManagementToken
from .data import BookingDataSource
from .errors import Unauthorized

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_data_source: Optional[BookingDataSource] = None


def decode_identity(token: str) -> CallerIdentity:
    options = {"verify_aud": AUTH_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            audience=AUTH_AUDIENCE,
            options=options,
        )
    except JWTError as exc:
        logger.info("Rejected access token: %s", exc)
        raise Unauthorized("Invalid token")

    subject = payload.get("sub")
    if subject is None:
        raise Unauthorized("Invalid token")

    permissions = payload.get("permissions") or []
    return CallerIdentity(
        email=payload.get(AUTH_EMAIL_CLAIM),
        id=subject,
        permissions=[str(p) for p in permissions],
    )


# No token means an anonymous caller, a bad token is rejected outright
def get_caller_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CallerIdentity]:
    if credentials is None:
        return None
    return decode_identity(credentials.credentials)


def get_management_token() -> Optional[ManagementToken]:
    if not IDP_MANAGEMENT_TOKEN:
        return None
    return ManagementToken(token_type=IDP_MANAGEMENT_TOKEN_TYPE, access_token=IDP_MANAGEMENT_TOKEN)


def get_provider_domain() -> Optional[str]:
    return IDP_DOMAIN


def get_data_source() -> BookingDataSource:
    global _data_source
    if _data_source is None:
        _data_source = BookingDataSource()
    return _data_source


def get_caller_context(
    user: Optional[CallerIdentity] = Depends(get_caller_identity),
    management_token: Optional[ManagementToken] = Depends(get_management_token),
    domain: Optional[str] = Depends(get_provider_domain),
    data: BookingDataSource = Depends(get_data_source),
) -> CallerContext:
    return CallerContext(
        data=data,
        user=user,
        management_token=management_token,
        domain=domain,
    )
