# barbershop/models.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Column, DateTime
from sqlalchemy.types import JSON, TypeDecorator
from sqlmodel import SQLModel, Field

from .core import as_utc, join_full_name, new_reference


class ServiceName(str, Enum):
    HAIRCUT = "HAIRCUT"
    SHAVING = "SHAVING"
    COMBO = "COMBO"
    FATHERSON = "FATHERSON"
    JUNIOR = "JUNIOR"


class UTCDateTime(TypeDecorator):
    """Stores naive UTC, hands back timezone-aware UTC datetimes."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            value = as_utc(value).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = as_utc(value)
        return value


class Barber(SQLModel, table=True):
    id: str = Field(default_factory=new_reference, primary_key=True)
    name: dict = Field(default_factory=dict, sa_column=Column(JSON))
    email: str = Field(index=True, unique=True)
    profile_image_url: Optional[str] = None
    # append-only, insertion order
    appointment_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    @property
    def full_name(self) -> str:
        return join_full_name(self.name)


class Appointment(SQLModel, table=True):
    id: str = Field(default_factory=new_reference, primary_key=True)
    duration: float
    email: Optional[str] = None
    name: dict = Field(sa_column=Column(JSON, nullable=False))
    phone_number: str
    service_name: ServiceName
    time: datetime = Field(sa_column=Column(UTCDateTime, index=True, nullable=False))
    barber_id: str = Field(foreign_key="barber.id", index=True)

    @property
    def full_name(self) -> str:
        return join_full_name(self.name)
