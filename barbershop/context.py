# barbershop/context.py

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import httpx

from .data import BookingDataSource


@dataclass
class CallerIdentity:
    email: Optional[str]
    id: str
    permissions: List[str] = field(default_factory=list)


@dataclass
class ManagementToken:
    token_type: str
    access_token: str

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.access_token}"


@dataclass
class CallerContext:
    """Everything a resolver may consult about the current request."""

    data: BookingDataSource
    user: Optional[CallerIdentity] = None
    management_token: Optional[ManagementToken] = None
    domain: Optional[str] = None
    http_client: Callable[[], httpx.AsyncClient] = httpx.AsyncClient
